"""HTTP server helpers for resolving and publishing a request's trace context."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from cloud_trace_context.config import TraceContextOptions
from cloud_trace_context.context import (
    Publication,
    TraceContext,
    generate_trace_context,
    publish,
    resolve,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestTrace:
    context: TraceContext
    publication: Publication


def get_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Case-insensitive header lookup returning the first value, if any."""
    value = headers.get(name)
    if value is not None:
        return value
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None


def start_request_trace(
    headers: Mapping[str, str],
    options: Optional[TraceContextOptions] = None,
) -> RequestTrace:
    """
    Resolve the request's trace context from headers and publish it.

    Raises:
        MalformedHeaderError: if the header is malformed and
            ``options.on_malformed_header`` is "fail"
        UnknownSampledValueError: if the sampled flag is not "0" or "1"
    """
    options = options or TraceContextOptions()
    header_value = get_header(headers, options.trace_context_header)

    result = resolve(header_value)
    if result.ok:
        context = result.context
    elif options.on_malformed_header == "regenerate":
        logger.warning("Replacing malformed trace context header: %s", result.error)
        context = generate_trace_context()
    else:
        raise result.error

    publication = publish(context, options.trace_context_header, options.project_id)
    return RequestTrace(context=context, publication=publication)

"""Publish a resolved trace context to the response and the log fields.

Cloud Logging recognises three special structured-log fields:

* ``logging.googleapis.com/trace``: ``projects/PROJECT_ID/traces/TRACE_ID``
* ``logging.googleapis.com/spanId``: the span id
* ``logging.googleapis.com/trace_sampled``: a boolean

Nothing here writes to ambient state. ``publish`` returns a ``Publication``
and the caller decides where the header and log fields go.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, MutableMapping

from cloud_trace_context.context.trace_context import TraceContext
from cloud_trace_context.errors import UnknownSampledValueError
from cloud_trace_context.sampling import NOT_SAMPLED, SAMPLED

TRACE_KEY = "logging.googleapis.com/trace"
SPAN_ID_KEY = "logging.googleapis.com/spanId"
TRACE_SAMPLED_KEY = "logging.googleapis.com/trace_sampled"


def sampled_to_bool(value: str) -> bool:
    if value == SAMPLED:
        return True
    if value == NOT_SAMPLED:
        return False
    raise UnknownSampledValueError(value)


def format_trace_name(project_id: str, trace_id: str) -> str:
    return f"projects/{project_id}/traces/{trace_id}"


def format_trace_header(context: TraceContext) -> str:
    """Format the outgoing header value, always including the ``;o=`` suffix."""
    return f"{context.trace_id}/{context.span_id};o={context.sampled}"


@dataclass(frozen=True)
class TraceLogFields:
    trace: str
    span_id: str
    trace_sampled: bool

    def as_dict(self) -> Dict[str, object]:
        return {
            TRACE_KEY: self.trace,
            SPAN_ID_KEY: self.span_id,
            TRACE_SAMPLED_KEY: self.trace_sampled,
        }


@dataclass(frozen=True)
class Publication:
    header_name: str
    header_value: str
    log_fields: TraceLogFields

    def apply_to_headers(self, headers: MutableMapping[str, str]) -> None:
        """Set (or overwrite) the propagation header on a response header mapping."""
        headers[self.header_name] = self.header_value


def publish(context: TraceContext, header_name: str, project_id: str) -> Publication:
    """
    Build the outgoing header and log fields for a trace context.

    Raises:
        UnknownSampledValueError: if ``context.sampled`` is not "0" or "1".
            Nothing is returned in that case, so no partial state escapes.
    """
    log_fields = TraceLogFields(
        trace=format_trace_name(project_id, context.trace_id),
        span_id=context.span_id,
        trace_sampled=sampled_to_bool(context.sampled),
    )
    return Publication(
        header_name=header_name,
        header_value=format_trace_header(context),
        log_fields=log_fields,
    )

"""OpenTelemetry propagator for the ``x-cloud-trace-context`` header."""

from __future__ import annotations

import logging
from typing import Optional, Set

from opentelemetry.context import Context
from opentelemetry.propagators.textmap import (
    CarrierT,
    Getter,
    Setter,
    TextMapPropagator,
    default_getter,
    default_setter,
)
from opentelemetry.trace import NonRecordingSpan, get_current_span, set_span_in_context

from cloud_trace_context.context.context import to_otel_span_context
from cloud_trace_context.context.publisher import format_trace_header
from cloud_trace_context.context.resolver import parse_trace_header
from cloud_trace_context.context.trace_context import TraceContext
from cloud_trace_context.sampling import NOT_SAMPLED, SAMPLED
from cloud_trace_context.utils.helpers import format_span_id, format_trace_id

DEFAULT_HEADER_NAME = "x-cloud-trace-context"

logger = logging.getLogger(__name__)


class CloudTraceContextPropagator(TextMapPropagator):
    """Extracts and injects ``TRACE_ID/SPAN_ID;o=SAMPLED`` headers."""

    def __init__(self, header_name: str = DEFAULT_HEADER_NAME) -> None:
        self.header_name = header_name.lower()

    def extract(
        self,
        carrier: CarrierT,
        context: Optional[Context] = None,
        getter: Getter[CarrierT] = default_getter,
    ) -> Context:
        if context is None:
            context = Context()

        values = getter.get(carrier, self.header_name)
        if not values:
            return context

        result = parse_trace_header(values[0])
        if not result.ok:
            logger.debug("Ignoring trace context header: %s", result.error)
            return context

        # The sampled flag is not checked here; anything but "1" is unsampled.
        otel_context = to_otel_span_context(result.context)
        if otel_context is None:
            logger.debug("Ignoring trace context with non-hex ids: %s", values[0])
            return context
        return set_span_in_context(NonRecordingSpan(otel_context), context)

    def inject(
        self,
        carrier: CarrierT,
        context: Optional[Context] = None,
        setter: Setter[CarrierT] = default_setter,
    ) -> None:
        span_context = get_current_span(context).get_span_context()
        if not span_context.is_valid:
            return
        trace_context = TraceContext(
            trace_id=format_trace_id(span_context.trace_id),
            span_id=format_span_id(span_context.span_id),
            sampled=SAMPLED if span_context.trace_flags.sampled else NOT_SAMPLED,
        )
        setter.set(carrier, self.header_name, format_trace_header(trace_context))

    @property
    def fields(self) -> Set[str]:
        return {self.header_name}

"""Trace context resolution, publishing and propagation."""

from cloud_trace_context.context.context import (
    attach_trace_context,
    detach_trace_context,
    to_otel_span_context,
)
from cloud_trace_context.context.propagator import CloudTraceContextPropagator
from cloud_trace_context.context.publisher import (
    SPAN_ID_KEY,
    TRACE_KEY,
    TRACE_SAMPLED_KEY,
    Publication,
    TraceLogFields,
    format_trace_header,
    format_trace_name,
    publish,
    sampled_to_bool,
)
from cloud_trace_context.context.resolver import (
    ParseResult,
    generate_span_id,
    generate_trace_context,
    generate_trace_id,
    parse_trace_header,
    resolve,
)
from cloud_trace_context.context.trace_context import TraceContext

__all__ = [
    "TraceContext",
    "ParseResult",
    "generate_trace_id",
    "generate_span_id",
    "generate_trace_context",
    "parse_trace_header",
    "resolve",
    "TRACE_KEY",
    "SPAN_ID_KEY",
    "TRACE_SAMPLED_KEY",
    "TraceLogFields",
    "Publication",
    "format_trace_header",
    "format_trace_name",
    "publish",
    "sampled_to_bool",
    "to_otel_span_context",
    "attach_trace_context",
    "detach_trace_context",
    "CloudTraceContextPropagator",
]

"""Bridge a request's trace context into the OpenTelemetry context API."""

from contextvars import Token
from typing import Optional

from opentelemetry import context as context_api
from opentelemetry.trace import NonRecordingSpan, SpanContext as OTelSpanContext, TraceFlags
from opentelemetry.trace import set_span_in_context

from cloud_trace_context.context.trace_context import TraceContext
from cloud_trace_context.sampling import SAMPLED
from cloud_trace_context.utils.helpers import parse_span_id, parse_trace_id


def to_otel_span_context(context: TraceContext) -> Optional[OTelSpanContext]:
    """
    Convert a TraceContext to a remote OpenTelemetry SpanContext.

    Returns None when either identifier cannot be represented in OTel
    (non-hex, zero, or too wide), since header values are not validated.
    """
    trace_id = parse_trace_id(context.trace_id)
    span_id = parse_span_id(context.span_id)
    if trace_id is None or span_id is None:
        return None
    flags = TraceFlags.SAMPLED if context.sampled == SAMPLED else TraceFlags.DEFAULT
    return OTelSpanContext(
        trace_id=trace_id,
        span_id=span_id,
        is_remote=True,
        trace_flags=TraceFlags(flags),
    )


def attach_trace_context(context: TraceContext) -> Optional[Token]:
    """
    Make the trace context current for OpenTelemetry.

    Returns:
        Token needed to restore the previous state, or None if the context
        could not be converted and nothing was attached
    """
    otel_context = to_otel_span_context(context)
    if otel_context is None:
        return None
    ctx = set_span_in_context(NonRecordingSpan(otel_context))
    return context_api.attach(ctx)


def detach_trace_context(token: Optional[Token]) -> None:
    """
    Restore the previous OpenTelemetry context.

    Args:
        token: Token returned by attach_trace_context()
    """
    if token is not None:
        context_api.detach(token)

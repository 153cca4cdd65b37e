"""Tests for the OpenTelemetry bridge and propagator."""

import pytest
from opentelemetry import trace
from opentelemetry.context import Context
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.trace import NonRecordingSpan, SpanContext, TraceFlags, set_span_in_context

from cloud_trace_context.context import (
    CloudTraceContextPropagator,
    TraceContext,
    attach_trace_context,
    detach_trace_context,
    to_otel_span_context,
)

TRACE_ID = "4f535edc4efa0e8ac7394c58d0e2acf8"
SPAN_ID = "6600be06d0b2b630"


class TestBridge:
    def test_converts_hex_ids(self):
        otel = to_otel_span_context(TraceContext(TRACE_ID, SPAN_ID, "1"))
        assert otel.trace_id == int(TRACE_ID, 16)
        assert otel.span_id == int(SPAN_ID, 16)
        assert otel.is_remote
        assert otel.trace_flags.sampled

    def test_unsampled_flags(self):
        otel = to_otel_span_context(TraceContext(TRACE_ID, SPAN_ID, "0"))
        assert not otel.trace_flags.sampled

    @pytest.mark.parametrize(
        "trace_id, span_id",
        [("not-hex", SPAN_ID), (TRACE_ID, "0x12"), ("0" * 32, SPAN_ID), (TRACE_ID, "1" * 17), ("", SPAN_ID)],
    )
    def test_unrepresentable_ids(self, trace_id, span_id):
        assert to_otel_span_context(TraceContext(trace_id, span_id)) is None

    def test_attach_and_detach(self):
        token = attach_trace_context(TraceContext(TRACE_ID, SPAN_ID, "1"))
        try:
            current = trace.get_current_span().get_span_context()
            assert current.trace_id == int(TRACE_ID, 16)
            assert current.span_id == int(SPAN_ID, 16)
        finally:
            detach_trace_context(token)
        assert not trace.get_current_span().get_span_context().is_valid

    def test_attach_skips_unrepresentable(self):
        assert attach_trace_context(TraceContext("zz", "yy")) is None
        detach_trace_context(None)

    def test_child_span_joins_attached_trace(self):
        tracer = TracerProvider().get_tracer("test")
        token = attach_trace_context(TraceContext(TRACE_ID, SPAN_ID, "1"))
        try:
            with tracer.start_as_current_span("child") as span:
                assert span.get_span_context().trace_id == int(TRACE_ID, 16)
                assert span.parent.span_id == int(SPAN_ID, 16)
        finally:
            detach_trace_context(token)


class TestPropagator:
    def test_extract(self):
        propagator = CloudTraceContextPropagator()
        ctx = propagator.extract({"x-cloud-trace-context": f"{TRACE_ID}/{SPAN_ID};o=1"})
        span_context = trace.get_current_span(ctx).get_span_context()
        assert span_context.trace_id == int(TRACE_ID, 16)
        assert span_context.span_id == int(SPAN_ID, 16)
        assert span_context.trace_flags.sampled
        assert span_context.is_remote

    @pytest.mark.parametrize("value", ["no-separator", f"{TRACE_ID}/a/b", "zz/yy;o=1"])
    def test_extract_ignores_bad_values(self, value):
        propagator = CloudTraceContextPropagator()
        original = Context()
        assert propagator.extract({"x-cloud-trace-context": value}, context=original) is original

    def test_extract_missing_header(self):
        ctx = CloudTraceContextPropagator().extract({})
        assert not trace.get_current_span(ctx).get_span_context().is_valid

    def test_inject_pads_ids(self):
        span_context = SpanContext(
            trace_id=0x1F,
            span_id=0x2A,
            is_remote=False,
            trace_flags=TraceFlags(TraceFlags.DEFAULT),
        )
        ctx = set_span_in_context(NonRecordingSpan(span_context))
        carrier = {}
        CloudTraceContextPropagator().inject(carrier, context=ctx)
        assert carrier == {"x-cloud-trace-context": f"{0x1F:032x}/{0x2A:016x};o=0"}

    def test_inject_without_span_is_noop(self):
        carrier = {}
        CloudTraceContextPropagator().inject(carrier, context=Context())
        assert carrier == {}

    def test_round_trip(self):
        propagator = CloudTraceContextPropagator("X-Custom-Trace")
        value = f"{TRACE_ID}/{SPAN_ID};o=1"
        carrier = {}
        propagator.inject(carrier, context=propagator.extract({"x-custom-trace": value}))
        assert carrier == {"x-custom-trace": value}
        assert propagator.fields == {"x-custom-trace"}

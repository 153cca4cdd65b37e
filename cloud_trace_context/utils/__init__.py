"""Utility functions for trace context handling."""

from cloud_trace_context.utils.helpers import (
    hex_from_bytes,
    format_trace_id,
    format_span_id,
    parse_hex_id,
    parse_trace_id,
    parse_span_id,
)

__all__ = [
    "hex_from_bytes",
    "format_trace_id",
    "format_span_id",
    "parse_hex_id",
    "parse_trace_id",
    "parse_span_id",
]

"""Resolve the trace context of an inbound request.

The propagation header has the form ``TRACE_ID/SPAN_ID;o=SAMPLED`` where the
``;o=SAMPLED`` segment is optional and defaults to ``"0"``. Identifiers taken
from the header are passed through without validation. When no header is
present a new identity is generated from the OS CSPRNG.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from typing import Optional

from cloud_trace_context.context.trace_context import TraceContext
from cloud_trace_context.errors import MalformedHeaderError
from cloud_trace_context.sampling import DEFAULT_SAMPLING_POLICY, NOT_SAMPLED, SamplingPolicy
from cloud_trace_context.utils.helpers import hex_from_bytes

TRACE_ID_BYTES = 16
SPAN_ID_BYTES = 8


@dataclass(frozen=True)
class ParseResult:
    """Outcome of resolving a header: either a context or a parse error."""

    context: Optional[TraceContext] = None
    error: Optional[MalformedHeaderError] = None

    @classmethod
    def success(cls, context: TraceContext) -> "ParseResult":
        return cls(context=context)

    @classmethod
    def failure(cls, error: MalformedHeaderError) -> "ParseResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> TraceContext:
        """Return the context, raising the carried error on failure."""
        if self.error is not None:
            raise self.error
        return self.context


def generate_hex_id(num_bytes: int) -> str:
    return hex_from_bytes(secrets.token_bytes(num_bytes))


def generate_trace_id() -> str:
    return generate_hex_id(TRACE_ID_BYTES)


def generate_span_id() -> str:
    return generate_hex_id(SPAN_ID_BYTES)


def generate_trace_context(policy: SamplingPolicy = DEFAULT_SAMPLING_POLICY) -> TraceContext:
    """Create a fresh context for a request that arrived without one."""
    return TraceContext(
        trace_id=generate_trace_id(),
        span_id=generate_span_id(),
        sampled=policy.decide(),
    )


def parse_trace_header(header_value: str) -> ParseResult:
    """
    Parse a ``TRACE_ID/SPAN_ID[;o=SAMPLED]`` header value.

    Only the structure is checked. The option key before ``=`` is ignored.
    """
    parts = header_value.split("/")
    if len(parts) != 2:
        reason = (
            MalformedHeaderError.MISSING_SEPARATOR
            if len(parts) == 1
            else MalformedHeaderError.TOO_MANY_SEPARATORS
        )
        return ParseResult.failure(MalformedHeaderError(header_value, reason))

    trace_id, rest = parts
    if ";" not in rest:
        return ParseResult.success(TraceContext(trace_id, rest, NOT_SAMPLED))

    segments = rest.split(";")
    if len(segments) != 2:
        return ParseResult.failure(
            MalformedHeaderError(header_value, MalformedHeaderError.MALFORMED_OPTIONS)
        )
    span_id, options = segments

    option = options.split("=")
    if len(option) != 2:
        return ParseResult.failure(
            MalformedHeaderError(header_value, MalformedHeaderError.MALFORMED_OPTIONS)
        )
    return ParseResult.success(TraceContext(trace_id, span_id, option[1]))


def resolve(
    header_value: Optional[str],
    policy: SamplingPolicy = DEFAULT_SAMPLING_POLICY,
) -> ParseResult:
    """
    Produce the trace context for the current request.

    ``None`` means the header was absent and a new context is generated.
    """
    if header_value is None:
        return ParseResult.success(generate_trace_context(policy))
    return parse_trace_header(header_value)

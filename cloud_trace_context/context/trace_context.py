"""Immutable per-request trace identity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TraceContext:
    trace_id: str
    span_id: str
    sampled: str = "0"  # "1" = trace this request, "0" = do not trace

    def is_sampled(self) -> bool:
        from cloud_trace_context.context.publisher import sampled_to_bool

        return sampled_to_bool(self.sampled)

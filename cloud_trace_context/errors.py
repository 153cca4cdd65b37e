"""Error hierarchy for trace context propagation."""

from __future__ import annotations

from typing import Optional


class TraceContextError(Exception):
    """Base exception for all trace context errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ConfigError(TraceContextError):
    """Raised when configuration is invalid or conflicting."""
    pass


class MalformedHeaderError(TraceContextError):
    """Raised when an inbound trace context header cannot be parsed."""

    MISSING_SEPARATOR = "missing_separator"
    TOO_MANY_SEPARATORS = "too_many_separators"
    MALFORMED_OPTIONS = "malformed_options"

    def __init__(self, header_value: Optional[str], reason: str):
        super().__init__(
            "Malformed trace context header",
            {"reason": reason, "value": header_value},
        )
        self.header_value = header_value
        self.reason = reason


class UnknownSampledValueError(TraceContextError):
    """Raised when a sampled flag is neither "0" nor "1"."""

    def __init__(self, value: str):
        super().__init__("Unknown sampled value", {"value": value})
        self.value = value

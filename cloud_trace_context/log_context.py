"""
Request-scoped structured logging fields.

The middleware binds a request's ``TraceLogFields`` for the duration of the
request. Bindings live in a ``ContextVar``, so each thread or asyncio task
sees only its own request's fields.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Dict, Iterator, Optional

from cloud_trace_context.context.publisher import TraceLogFields

_log_fields: ContextVar[Optional[TraceLogFields]] = ContextVar(
    "cloud_trace_context_log_fields", default=None
)


@contextmanager
def bind_log_fields(fields: TraceLogFields) -> Iterator[TraceLogFields]:
    """Bind trace log fields to the current execution context."""
    token = _log_fields.set(fields)
    try:
        yield fields
    finally:
        _log_fields.reset(token)


def get_log_fields() -> Dict[str, object]:
    """Return the bound fields keyed by their Cloud Logging names, or {}."""
    fields = _log_fields.get()
    if fields is None:
        return {}
    return fields.as_dict()


class TraceLogFilter(logging.Filter):
    """Attach the bound trace fields to every record passing through."""

    def filter(self, record: logging.LogRecord) -> bool:
        fields = _log_fields.get()
        record.trace_fields = fields.as_dict() if fields is not None else {}
        record.trace = fields.trace if fields is not None else None
        record.span_id = fields.span_id if fields is not None else None
        record.trace_sampled = fields.trace_sampled if fields is not None else None
        return True


class CloudLoggingFormatter(logging.Formatter):
    """
    Format records as single-line JSON understood by Cloud Logging agents.

    The trace fields are written as top-level keys so the agent can lift them
    into the log entry's trace, spanId and traceSampled fields.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "severity": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        trace_fields = getattr(record, "trace_fields", None)
        if trace_fields is None:
            trace_fields = get_log_fields()
        log_entry.update(trace_fields)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def install_log_filter(logger: Optional[logging.Logger] = None) -> TraceLogFilter:
    """Add a TraceLogFilter to every handler of ``logger`` (root by default)."""
    logger = logger or logging.getLogger()
    log_filter = TraceLogFilter()
    for handler in logger.handlers:
        handler.addFilter(log_filter)
    return log_filter

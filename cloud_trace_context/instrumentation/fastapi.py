"""
FastAPI middleware that attaches a trace context to every HTTP request.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Optional

from pydantic import ValidationError

from cloud_trace_context.config import TraceContextOptions
from cloud_trace_context.context import (
    TraceLogFields,
    attach_trace_context,
    detach_trace_context,
)
from cloud_trace_context.errors import ConfigError
from cloud_trace_context.instrumentation.http_server import start_request_trace
from cloud_trace_context.log_context import bind_log_fields


def install_http_middleware(
    app: Any,
    options: Optional[TraceContextOptions] = None,
    **overrides: Any,
) -> TraceContextOptions:
    """
    Attach an HTTP middleware that resolves and publishes the trace context.

    - Reads the configured header, or generates a new context
    - Exposes the context on ``request.state.trace_context`` and the log
      fields on ``request.state.trace_log_fields``
    - Binds the log fields (and the OpenTelemetry context) while the request runs
    - Writes the propagation header to the response

    Keyword overrides are applied on top of ``options`` (or the defaults).
    """
    options = options or TraceContextOptions()
    if overrides:
        try:
            options = TraceContextOptions(**{**options.model_dump(), **overrides})
        except ValidationError as e:
            raise ConfigError("Invalid trace context options", {"errors": e.errors()}) from e

    @app.middleware("http")
    async def trace_context_middleware(request, call_next: Callable[[Any], Awaitable[Any]]):  # type: ignore
        trace = start_request_trace(request.headers, options)
        request.state.trace_context = trace.context
        request.state.trace_log_fields = trace.publication.log_fields

        token = attach_trace_context(trace.context) if options.attach_otel_context else None
        try:
            with bind_log_fields(trace.publication.log_fields):
                response = await call_next(request)
        finally:
            detach_trace_context(token)

        trace.publication.apply_to_headers(response.headers)
        return response

    return options


def get_trace_log_fields(request: Any) -> Optional[TraceLogFields]:
    """Return the log fields published for this request, if any."""
    return getattr(request.state, "trace_log_fields", None)

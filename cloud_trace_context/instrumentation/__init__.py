"""HTTP pipeline integration."""

from cloud_trace_context.instrumentation.http_server import RequestTrace, start_request_trace
from cloud_trace_context.instrumentation.fastapi import get_trace_log_fields, install_http_middleware

__all__ = [
    "RequestTrace",
    "start_request_trace",
    "install_http_middleware",
    "get_trace_log_fields",
]

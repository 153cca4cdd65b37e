"""Cloud Trace context propagation for HTTP request pipelines."""

from cloud_trace_context.config import TraceContextOptions, load_options
from cloud_trace_context.context import (
    CloudTraceContextPropagator,
    ParseResult,
    Publication,
    TraceContext,
    TraceLogFields,
    publish,
    resolve,
)
from cloud_trace_context.errors import (
    ConfigError,
    MalformedHeaderError,
    TraceContextError,
    UnknownSampledValueError,
)
from cloud_trace_context.instrumentation import (
    get_trace_log_fields,
    install_http_middleware,
    start_request_trace,
)
from cloud_trace_context.log_context import (
    CloudLoggingFormatter,
    TraceLogFilter,
    bind_log_fields,
    get_log_fields,
)
from cloud_trace_context.sampling import DEFAULT_SAMPLING_POLICY, FixedSamplingPolicy

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "TraceContext",
    "ParseResult",
    "Publication",
    "TraceLogFields",
    "resolve",
    "publish",
    "CloudTraceContextPropagator",
    "TraceContextOptions",
    "load_options",
    "TraceContextError",
    "ConfigError",
    "MalformedHeaderError",
    "UnknownSampledValueError",
    "install_http_middleware",
    "get_trace_log_fields",
    "start_request_trace",
    "bind_log_fields",
    "get_log_fields",
    "TraceLogFilter",
    "CloudLoggingFormatter",
    "FixedSamplingPolicy",
    "DEFAULT_SAMPLING_POLICY",
]

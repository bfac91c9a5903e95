"""REST request pipeline with interceptors and normalized results.

This module provides:
- ApiClient with GET/POST/PUT/DELETE entry points
- Ordered request, response and error interceptor chains
- Normalization of httpx responses and failures into ApiResponse/ApiError
- Header redaction for logging
"""

from request_layer.http.client import ApiClient, BaseHttpClient
from request_layer.http.debug import (
    request_logging_interceptor,
    response_logging_interceptor,
)
from request_layer.http.errors import EnvelopeError, RequestLayerError
from request_layer.http.interceptors import (
    ErrorInterceptor,
    InterceptorRegistry,
    RequestInterceptor,
    ResponseInterceptor,
)
from request_layer.http.models import (
    ApiError,
    ApiResponse,
    ClientConfig,
    ErrorCode,
    ErrorOutcome,
    Recovered,
    RequestCallbacks,
    RequestConfig,
    StillFailing,
)
from request_layer.http.normalizer import (
    decode_body,
    normalize_error,
    normalize_response,
)
from request_layer.http.redact import redact_headers


__all__ = [
    # Clients
    "ApiClient",
    "BaseHttpClient",
    # Interceptors
    "ErrorInterceptor",
    "InterceptorRegistry",
    "RequestInterceptor",
    "ResponseInterceptor",
    # Models
    "ApiError",
    "ApiResponse",
    "ClientConfig",
    "ErrorCode",
    "ErrorOutcome",
    "Recovered",
    "RequestCallbacks",
    "RequestConfig",
    "StillFailing",
    # Errors
    "EnvelopeError",
    "RequestLayerError",
    # Normalization
    "decode_body",
    "normalize_error",
    "normalize_response",
    # Debug logging
    "request_logging_interceptor",
    "response_logging_interceptor",
    # Redaction
    "redact_headers",
]

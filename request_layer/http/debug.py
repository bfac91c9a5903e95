"""Logging interceptors for debugging request traffic."""

import structlog

from request_layer.http.interceptors import RequestInterceptor, ResponseInterceptor
from request_layer.http.models import ApiResponse, RequestConfig
from request_layer.http.redact import redact_headers


logger = structlog.get_logger()


def request_logging_interceptor() -> RequestInterceptor:
    """Create a request interceptor that logs the outgoing config."""
    log = logger.bind(component="http", subcomponent="debug")

    def log_request(config: RequestConfig) -> RequestConfig:
        log.debug(
            "request_intercepted",
            method=config.method,
            url=config.url,
            has_auth=any(
                key.lower() == "authorization" for key in (config.headers or {})
            ),
            headers=redact_headers(config.headers),
        )
        return config

    return log_request


def response_logging_interceptor() -> ResponseInterceptor:
    """Create a response interceptor that logs status and message."""
    log = logger.bind(component="http", subcomponent="debug")

    def log_response(response: ApiResponse) -> ApiResponse:
        log.debug(
            "response_intercepted",
            status=response.status,
            message=response.message,
            data_type=type(response.data).__name__,
        )
        return response

    return log_response

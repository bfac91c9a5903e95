"""Ordered interceptor chains for the request pipeline.

Three independent chains run around every call:

- request interceptors fold over the RequestConfig before dispatch
- response interceptors fold over the normalized ApiResponse
- error interceptors run over the normalized ApiError and may promote it
  into an ApiResponse, which ends the chain

Request and response interceptors that raise abort the call. Error
interceptors that raise are logged and skipped.
"""

import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

import structlog

from request_layer.http.models import (
    ApiError,
    ApiResponse,
    ErrorOutcome,
    Recovered,
    RequestConfig,
    StillFailing,
)
from request_layer.observability.metrics import RequestMetrics


logger = structlog.get_logger()

RequestInterceptor = Callable[[RequestConfig], RequestConfig]
ResponseInterceptor = Callable[[ApiResponse], ApiResponse]
ErrorInterceptor = Callable[
    [ApiError], ApiError | ApiResponse | Awaitable[ApiError | ApiResponse]
]

T = TypeVar("T")


async def resolve(value: T | Awaitable[T]) -> T:
    """Await ``value`` when it is awaitable, return it unchanged otherwise."""
    if inspect.isawaitable(value):
        return await value
    return value


def _remove_first(chain: list[Any], fn: Callable[..., Any]) -> list[Any]:
    for index, candidate in enumerate(chain):
        if candidate is fn:
            return chain[:index] + chain[index + 1 :]
    return chain


@dataclass(frozen=True)
class InterceptorSnapshot:
    """Immutable view of the three chains taken at dispatch time."""

    request: tuple[RequestInterceptor, ...]
    response: tuple[ResponseInterceptor, ...]
    error: tuple[ErrorInterceptor, ...]


class InterceptorRegistry:
    """Ordered request, response and error interceptor chains.

    Chains are replaced rather than mutated in place, so a snapshot taken
    by an in-flight call is never affected by later registrations.
    """

    def __init__(self, metrics: RequestMetrics | None = None) -> None:
        """Initialize empty chains.

        Args:
            metrics: Sink for error interceptor failures. The shared
                RequestMetrics instance is used when None.
        """
        self._metrics = metrics
        self._request: list[RequestInterceptor] = []
        self._response: list[ResponseInterceptor] = []
        self._error: list[ErrorInterceptor] = []
        self._log = logger.bind(component="http", subcomponent="interceptors")

    def add_request_interceptor(self, fn: RequestInterceptor) -> None:
        """Append a request interceptor."""
        self._request = [*self._request, fn]

    def add_response_interceptor(self, fn: ResponseInterceptor) -> None:
        """Append a response interceptor."""
        self._response = [*self._response, fn]

    def add_error_interceptor(self, fn: ErrorInterceptor) -> None:
        """Append an error interceptor."""
        self._error = [*self._error, fn]

    def remove_request_interceptor(self, fn: RequestInterceptor) -> None:
        """Remove the first registration of ``fn``; no-op when absent."""
        self._request = _remove_first(self._request, fn)

    def remove_response_interceptor(self, fn: ResponseInterceptor) -> None:
        """Remove the first registration of ``fn``; no-op when absent."""
        self._response = _remove_first(self._response, fn)

    def remove_error_interceptor(self, fn: ErrorInterceptor) -> None:
        """Remove the first registration of ``fn``; no-op when absent."""
        self._error = _remove_first(self._error, fn)

    def clear(self) -> None:
        """Empty all three chains."""
        self._request, self._response, self._error = [], [], []

    def snapshot(self) -> InterceptorSnapshot:
        """Return the current chains as an immutable snapshot."""
        return InterceptorSnapshot(
            request=tuple(self._request),
            response=tuple(self._response),
            error=tuple(self._error),
        )

    @property
    def metrics(self) -> RequestMetrics:
        """Metrics sink in use."""
        return self._metrics if self._metrics is not None else RequestMetrics.get_instance()

    def __len__(self) -> int:
        return len(self._request) + len(self._response) + len(self._error)

    def apply_request(
        self,
        config: RequestConfig,
        chain: tuple[RequestInterceptor, ...] | None = None,
    ) -> RequestConfig:
        """Fold the request chain over ``config`` in registration order.

        Args:
            config: Initial request configuration.
            chain: Chain to fold; the current chain when None.

        Returns:
            Configuration returned by the last interceptor.
        """
        for interceptor in self._request if chain is None else chain:
            config = interceptor(config)
        return config

    def apply_response(
        self,
        response: ApiResponse,
        chain: tuple[ResponseInterceptor, ...] | None = None,
    ) -> ApiResponse:
        """Fold the response chain over ``response`` in registration order.

        Args:
            response: Normalized response.
            chain: Chain to fold; the current chain when None.

        Returns:
            Response returned by the last interceptor.
        """
        for interceptor in self._response if chain is None else chain:
            response = interceptor(response)
        return response

    async def apply_error(
        self,
        error: ApiError,
        chain: tuple[ErrorInterceptor, ...] | None = None,
    ) -> ErrorOutcome:
        """Run the error chain over ``error``.

        The first interceptor returning an ApiResponse ends the chain with
        a recovery. An interceptor that raises is skipped and the next one
        receives the last successfully produced error.

        Args:
            error: Normalized error.
            chain: Chain to run; the current chain when None.

        Returns:
            Recovered with the promoted response, or StillFailing with the
            final error.
        """
        current = error
        for position, interceptor in enumerate(self._error if chain is None else chain):
            try:
                result = await resolve(interceptor(current))
            except Exception as exc:  # noqa: BLE001
                self.metrics.record_error_interceptor_failure()
                self._log.warning(
                    "error_interceptor_failed",
                    position=position,
                    interceptor=getattr(interceptor, "__name__", repr(interceptor)),
                    error=str(exc),
                )
                continue

            if isinstance(result, ApiResponse):
                self._log.debug("error_recovered", position=position, status=result.status)
                return Recovered(result)
            if not isinstance(result, ApiError):
                self._log.warning(
                    "error_interceptor_invalid_result",
                    position=position,
                    result_type=type(result).__name__,
                )
                continue
            current = result

        return StillFailing(current)

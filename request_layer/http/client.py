"""Request pipeline and REST client.

Every call goes through the same steps: build a RequestConfig, fold the
request interceptors over it, send it with httpx, normalize the outcome,
run the response or error interceptors and fire exactly one callback.
"""

import time
from collections.abc import Mapping
from types import TracebackType
from typing import Any, Self

import httpx
import structlog

from request_layer.http.constants import DEFAULT_HEADERS
from request_layer.http.errors import EnvelopeError
from request_layer.http.interceptors import (
    ErrorInterceptor,
    InterceptorRegistry,
    RequestInterceptor,
    ResponseInterceptor,
    resolve,
)
from request_layer.http.models import (
    ApiError,
    ApiResponse,
    ClientConfig,
    Recovered,
    RequestCallbacks,
    RequestConfig,
)
from request_layer.http.normalizer import normalize_error, normalize_response
from request_layer.http.redact import redact_headers
from request_layer.observability.metrics import RequestMetrics


logger = structlog.get_logger()

CallbacksArg = RequestCallbacks | Mapping[str, Any] | None
ParamsOrCallbacks = RequestCallbacks | Mapping[str, Any] | None


def split_params_and_callbacks(
    params_or_callbacks: ParamsOrCallbacks,
    callbacks: CallbacksArg,
) -> tuple[dict[str, Any] | None, RequestCallbacks]:
    """Resolve the GET/DELETE second positional argument.

    A RequestCallbacks instance, or a mapping holding an ``onSuccess`` or
    ``onError`` key, is taken as the callbacks and no params are sent;
    ``callbacks`` is then ignored. Anything else, including a mapping with
    ``on_success``/``on_error`` keys, is the params mapping.

    Args:
        params_or_callbacks: Params mapping or callbacks.
        callbacks: Callbacks used when the second argument is params.

    Returns:
        Tuple of (params or None, callbacks).
    """
    if isinstance(params_or_callbacks, RequestCallbacks) or (
        RequestCallbacks.looks_like_callbacks(params_or_callbacks)
    ):
        return None, RequestCallbacks.coerce(params_or_callbacks)
    params = dict(params_or_callbacks) if params_or_callbacks else None
    return params, RequestCallbacks.coerce(callbacks)


class BaseHttpClient:
    """Transport handle, interceptor chains and the dispatch pipeline.

    Subclasses add the caller-facing entry points and may override
    ``_build_response`` to unwrap protocol envelopes.
    """

    def __init__(
        self,
        config: ClientConfig,
        http_client: httpx.AsyncClient | None = None,
        metrics: RequestMetrics | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Base address, default timeout and default headers.
            http_client: Pre-built transport. When None, an
                ``httpx.AsyncClient`` is created from ``config``.
            metrics: Metrics sink for this client. The shared
                RequestMetrics instance is used when None.
        """
        self._config = config
        self._interceptors = InterceptorRegistry(metrics)
        self._http = http_client or httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            headers={**DEFAULT_HEADERS, **config.headers},
        )
        self._log = logger.bind(component="http", base_url=config.base_url)

    @property
    def config(self) -> ClientConfig:
        """Client configuration."""
        return self._config

    @property
    def interceptors(self) -> InterceptorRegistry:
        """Interceptor chains owned by this client."""
        return self._interceptors

    @property
    def metrics(self) -> RequestMetrics:
        """Metrics sink shared by this client and its interceptor chains."""
        return self._interceptors.metrics

    def add_request_interceptor(self, fn: RequestInterceptor) -> None:
        """Append a request interceptor."""
        self._interceptors.add_request_interceptor(fn)

    def add_response_interceptor(self, fn: ResponseInterceptor) -> None:
        """Append a response interceptor."""
        self._interceptors.add_response_interceptor(fn)

    def add_error_interceptor(self, fn: ErrorInterceptor) -> None:
        """Append an error interceptor."""
        self._interceptors.add_error_interceptor(fn)

    def remove_request_interceptor(self, fn: RequestInterceptor) -> None:
        """Remove a request interceptor; no-op when not registered."""
        self._interceptors.remove_request_interceptor(fn)

    def remove_response_interceptor(self, fn: ResponseInterceptor) -> None:
        """Remove a response interceptor; no-op when not registered."""
        self._interceptors.remove_response_interceptor(fn)

    def remove_error_interceptor(self, fn: ErrorInterceptor) -> None:
        """Remove an error interceptor; no-op when not registered."""
        self._interceptors.remove_error_interceptor(fn)

    def clear_interceptors(self) -> None:
        """Remove every interceptor from all three chains."""
        self._interceptors.clear()

    async def aclose(self) -> None:
        """Close the underlying transport."""
        await self._http.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    def _build_response(self, response: httpx.Response) -> ApiResponse:
        """Normalize a 2xx transport response.

        Raises:
            EnvelopeError: In subclasses, when the payload is malformed.
        """
        return normalize_response(response)

    async def _send(
        self,
        initial: RequestConfig,
        final: RequestConfig,
    ) -> httpx.Response:
        """Send the request built from the post-interceptor config.

        Each field falls back to its pre-interceptor value when the
        interceptors left it empty.

        Raises:
            httpx.HTTPError: On transport failure or non-2xx status.
        """
        method = (final.method or initial.method or "GET").upper()
        url = final.url or initial.url or ""
        headers = final.headers or initial.headers
        params = final.params or initial.params
        data = final.data or initial.data
        timeout = final.timeout or initial.timeout

        kwargs: dict[str, Any] = {}
        if headers:
            kwargs["headers"] = headers
        if params:
            kwargs["params"] = {k: v for k, v in params.items() if v is not None}
        if data is not None:
            kwargs["json"] = data
        if timeout:
            kwargs["timeout"] = timeout

        self._log.debug(
            "request_dispatched",
            method=method,
            url=url,
            headers=redact_headers(headers),
            has_params=bool(params),
        )
        response = await self._http.request(method, url, **kwargs)
        response.raise_for_status()
        return response

    async def _dispatch(
        self,
        config: RequestConfig,
        callbacks: RequestCallbacks,
    ) -> None:
        """Run one call through the pipeline and fire one callback.

        Args:
            config: Initial request configuration.
            callbacks: Completion callbacks.

        Raises:
            Exception: Whatever a request or response interceptor raises.
        """
        start_time_ns = time.perf_counter_ns()
        chains = self._interceptors.snapshot()
        initial = config.model_copy(deep=True)
        final = self._interceptors.apply_request(config, chains.request)
        log = self._log.bind(method=initial.method, url=initial.url)

        error: ApiError
        try:
            http_response = await self._send(initial, final)
            result = self._build_response(http_response)
        except httpx.HTTPError as exc:
            error = normalize_error(exc)
        except EnvelopeError as exc:
            error = exc.error
        else:
            response = self._interceptors.apply_response(result, chains.response)
            self._record(response.status, start_time_ns)
            log.info("request_complete", status=response.status)
            await self._notify_success(callbacks, response)
            return

        self.metrics.record_failure(error.code)
        outcome = await self._interceptors.apply_error(error, chains.error)

        if isinstance(outcome, Recovered):
            self.metrics.record_recovery()
            self._record(outcome.response.status, start_time_ns)
            log.info(
                "request_recovered",
                original_status=error.status,
                status=outcome.response.status,
            )
            await self._notify_success(callbacks, outcome.response)
            return

        self._record(outcome.error.status, start_time_ns)
        log.info(
            "request_failed",
            status=outcome.error.status,
            code=outcome.error.code,
        )
        if callbacks.on_error is not None:
            await resolve(callbacks.on_error(outcome.error))

    @staticmethod
    async def _notify_success(
        callbacks: RequestCallbacks,
        response: ApiResponse,
    ) -> None:
        if callbacks.on_success is not None:
            await resolve(callbacks.on_success(response))

    def _record(self, status: int, start_time_ns: int) -> None:
        duration_ms = (time.perf_counter_ns() - start_time_ns) / 1_000_000
        self.metrics.record_request(status, duration_ms)


class ApiClient(BaseHttpClient):
    """REST client with normalized responses and interceptor chains.

    Example:
        >>> api = ApiClient(ClientConfig(base_url="https://api.example.com"))
        >>> await api.get(
        ...     "/votes",
        ...     {"userId": "1"},
        ...     RequestCallbacks(on_success=lambda r: print(r.data)),
        ... )
    """

    async def get(
        self,
        url: str,
        params_or_callbacks: ParamsOrCallbacks = None,
        callbacks: CallbacksArg = None,
    ) -> None:
        """Send a GET request.

        Args:
            url: Path relative to the base address.
            params_or_callbacks: Query parameters, or the callbacks when
                no parameters are needed.
            callbacks: Callbacks when the second argument is parameters.
        """
        params, resolved = split_params_and_callbacks(params_or_callbacks, callbacks)
        await self._dispatch(
            RequestConfig(method="GET", url=url, headers={}, params=params),
            resolved,
        )

    async def post(self, url: str, data: Any, callbacks: CallbacksArg = None) -> None:
        """Send a POST request with a JSON body.

        Args:
            url: Path relative to the base address.
            data: JSON-serializable body.
            callbacks: Completion callbacks.
        """
        await self._dispatch(
            RequestConfig(method="POST", url=url, headers={}, data=data),
            RequestCallbacks.coerce(callbacks),
        )

    async def put(self, url: str, data: Any, callbacks: CallbacksArg = None) -> None:
        """Send a PUT request with a JSON body.

        Args:
            url: Path relative to the base address.
            data: JSON-serializable body.
            callbacks: Completion callbacks.
        """
        await self._dispatch(
            RequestConfig(method="PUT", url=url, headers={}, data=data),
            RequestCallbacks.coerce(callbacks),
        )

    async def delete(
        self,
        url: str,
        params_or_callbacks: ParamsOrCallbacks = None,
        callbacks: CallbacksArg = None,
    ) -> None:
        """Send a DELETE request.

        Args:
            url: Path relative to the base address.
            params_or_callbacks: Query parameters, or the callbacks when
                no parameters are needed.
            callbacks: Callbacks when the second argument is parameters.
        """
        params, resolved = split_params_and_callbacks(params_or_callbacks, callbacks)
        await self._dispatch(
            RequestConfig(method="DELETE", url=url, headers={}, params=params),
            resolved,
        )

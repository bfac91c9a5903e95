"""Shared transport doubles for client tests."""

from collections.abc import Callable

import httpx

from request_layer.http.models import ApiError, ApiResponse, RequestCallbacks


BASE_URL = "https://api.example.com"

Handler = Callable[[httpx.Request], httpx.Response]


def make_http_client(handler: Handler, base_url: str = BASE_URL) -> httpx.AsyncClient:
    """Create an AsyncClient that answers every request with ``handler``."""
    return httpx.AsyncClient(
        base_url=base_url,
        transport=httpx.MockTransport(handler),
        headers={"Content-Type": "application/json"},
    )


class RecordingHandler:
    """MockTransport handler returning a fixed response and keeping requests."""

    def __init__(self, status_code: int = 200, json: object = None) -> None:
        self.status_code = status_code
        self.json = {} if json is None else json
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.json)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


class CallbackRecorder:
    """Collects what the pipeline hands to on_success / on_error."""

    def __init__(self) -> None:
        self.successes: list[ApiResponse] = []
        self.errors: list[ApiError] = []

    @property
    def callbacks(self) -> RequestCallbacks:
        return RequestCallbacks(
            on_success=self.successes.append,
            on_error=self.errors.append,
        )

"""Data models for the request pipeline.

Defines the canonical success and error shapes handed to callers, the
mutable request configuration threaded through request interceptors,
the callbacks container, and the tagged outcome of the error phase.
"""

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field

from request_layer.http.constants import (
    DEFAULT_ERROR_MESSAGE,
    DEFAULT_REST_TIMEOUT_SECONDS,
    DEFAULT_SUCCESS_MESSAGE,
    NO_RESPONSE_STATUS,
)


class ErrorCode(str, Enum):
    """Classification of request failures.

    - NETWORK_TIMEOUT: Transport timed out before a response arrived
    - CONNECTION_ERROR: Could not establish or keep a connection
    - HTTP_4XX: Response received with a client error status
    - HTTP_5XX: Response received with a server error status
    - GRAPHQL_ERROR: GraphQL endpoint answered with an errors list
    - INVALID_ENVELOPE: Payload lacks the expected envelope key
    - UNKNOWN: Unclassified transport failure
    """

    NETWORK_TIMEOUT = "NETWORK_TIMEOUT"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    HTTP_4XX = "HTTP_4XX"
    HTTP_5XX = "HTTP_5XX"
    GRAPHQL_ERROR = "GRAPHQL_ERROR"
    INVALID_ENVELOPE = "INVALID_ENVELOPE"
    UNKNOWN = "UNKNOWN"


class ApiResponse(BaseModel):
    """Normalized successful response.

    ``data`` is the transport payload verbatim; no validation against the
    caller's expected type is performed.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    data: Any = Field(description="Response payload")
    status: int = Field(description="Transport status code")
    message: str = Field(default=DEFAULT_SUCCESS_MESSAGE)


class ApiError(BaseModel):
    """Normalized failed response."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    message: str = Field(default=DEFAULT_ERROR_MESSAGE)
    status: int = Field(
        default=NO_RESPONSE_STATUS,
        description="Response status, or 500 when no response was received",
    )
    code: str | None = Field(default=None, description="Failure classification")
    details: Any = Field(default=None, description="Raw failure payload")


class RequestConfig(BaseModel):
    """Working request configuration.

    Mutable on purpose: request interceptors receive the current value
    and return the next one, either the same object after in-place
    changes or a fresh copy.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    url: str | None = None
    method: str | None = None
    headers: dict[str, str] | None = None
    data: Any = None
    params: dict[str, Any] | None = None
    timeout: float | None = Field(default=None, description="Timeout in seconds")


class ClientConfig(BaseModel):
    """Constructor configuration shared by every client."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    base_url: Annotated[str, Field(description="Base address for relative URLs")]
    timeout_seconds: Annotated[float, Field(gt=0.0, le=600.0)] = (
        DEFAULT_REST_TIMEOUT_SECONDS
    )
    headers: dict[str, str] = Field(default_factory=dict)


SuccessCallback = Callable[[ApiResponse], Awaitable[None] | None]
ErrorCallback = Callable[[ApiError], Awaitable[None] | None]

_CALLBACK_KEYS = {
    "on_success": "on_success",
    "on_error": "on_error",
    "onSuccess": "on_success",
    "onError": "on_error",
}

# Keys that mark a GET/DELETE second argument as callbacks rather than params
_MARKER_KEYS = ("onSuccess", "onError")


@dataclass(frozen=True)
class RequestCallbacks:
    """Completion callbacks for a single call.

    Attributes:
        on_success: Invoked with the final ApiResponse.
        on_error: Invoked with the final ApiError.
    """

    on_success: SuccessCallback | None = None
    on_error: ErrorCallback | None = None

    @staticmethod
    def looks_like_callbacks(value: object) -> bool:
        """Check whether a mapping carries an ``onSuccess``/``onError`` key.

        Only key presence is tested, so ``{"onSuccess": None}`` still
        counts as a callbacks mapping. snake_case keys do not, as they may
        be ordinary query parameters.
        """
        return isinstance(value, Mapping) and any(key in value for key in _MARKER_KEYS)

    @classmethod
    def coerce(
        cls, value: "RequestCallbacks | Mapping[str, Any] | None"
    ) -> "RequestCallbacks":
        """Build callbacks from an instance, a mapping, or None.

        Mappings may use either snake_case or camelCase keys.

        Raises:
            TypeError: If a callback key holds something that is neither
                callable nor None.
        """
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        kwargs: dict[str, Any] = {}
        for key, fn in value.items():
            if key not in _CALLBACK_KEYS:
                continue
            if fn is not None and not callable(fn):
                msg = f"Callback '{key}' must be callable, got {type(fn).__name__}"
                raise TypeError(msg)
            kwargs[_CALLBACK_KEYS[key]] = fn
        return cls(**kwargs)


@dataclass(frozen=True)
class Recovered:
    """Error phase ended with an interceptor promoting the failure."""

    response: ApiResponse


@dataclass(frozen=True)
class StillFailing:
    """Error phase ended without a recovery."""

    error: ApiError


ErrorOutcome = Recovered | StillFailing

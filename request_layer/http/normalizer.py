"""Mapping of raw transport results onto ApiResponse and ApiError."""

import json
from collections.abc import Mapping
from typing import Any

import httpx

from request_layer.http.constants import (
    DEFAULT_ERROR_MESSAGE,
    DEFAULT_SUCCESS_MESSAGE,
    HTTP_STATUS_BAD_REQUEST,
    HTTP_STATUS_SERVER_ERROR_MIN,
    NO_RESPONSE_STATUS,
)
from request_layer.http.models import ApiError, ApiResponse, ErrorCode


_FROM_BODY: Any = object()


def decode_body(response: httpx.Response) -> Any:
    """Decode a response body.

    Args:
        response: Transport response.

    Returns:
        Parsed JSON when the body is JSON, the text otherwise, or None
        for an empty body.
    """
    if not response.content:
        return None
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return response.text


def payload_message(payload: Any) -> str | None:
    """Return the payload's own ``message`` field, if it carries one."""
    if isinstance(payload, Mapping):
        message = payload.get("message")
        if isinstance(message, str) and message:
            return message
    return None


def normalize_response(
    response: httpx.Response,
    data: Any = _FROM_BODY,
    *,
    use_payload_message: bool = True,
) -> ApiResponse:
    """Build an ApiResponse from a successful transport response.

    Args:
        response: Transport response with a 2xx status.
        data: Pre-extracted payload. Decoded from the body when omitted.
        use_payload_message: Whether the payload's ``message`` field may
            replace the default success message.

    Returns:
        Normalized response.
    """
    payload = decode_body(response) if data is _FROM_BODY else data
    message = payload_message(payload) if use_payload_message else None
    return ApiResponse(
        data=payload,
        status=response.status_code,
        message=message or DEFAULT_SUCCESS_MESSAGE,
    )


def classify_error(exc: BaseException) -> ErrorCode:
    """Classify a transport exception.

    Args:
        exc: Exception raised by the transport.

    Returns:
        Matching error code.
    """
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        if HTTP_STATUS_BAD_REQUEST <= status < HTTP_STATUS_SERVER_ERROR_MIN:
            return ErrorCode.HTTP_4XX
        if status >= HTTP_STATUS_SERVER_ERROR_MIN:
            return ErrorCode.HTTP_5XX
        return ErrorCode.UNKNOWN
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCode.NETWORK_TIMEOUT
    if isinstance(exc, (httpx.ConnectError, httpx.NetworkError, httpx.RemoteProtocolError)):
        return ErrorCode.CONNECTION_ERROR
    return ErrorCode.UNKNOWN


def normalize_error(exc: httpx.HTTPError) -> ApiError:
    """Build an ApiError from a transport exception.

    Args:
        exc: ``httpx.HTTPStatusError`` for non-2xx responses, or any
            other ``httpx.HTTPError`` for failures without a response.

    Returns:
        Normalized error. Status is 500 when no response was received.
    """
    response = exc.response if isinstance(exc, httpx.HTTPStatusError) else None
    code = classify_error(exc).value

    if response is None:
        return ApiError(
            message=DEFAULT_ERROR_MESSAGE,
            status=NO_RESPONSE_STATUS,
            code=code,
            details=None,
        )

    payload = decode_body(response)
    return ApiError(
        message=payload_message(payload) or DEFAULT_ERROR_MESSAGE,
        status=response.status_code,
        code=code,
        details=payload,
    )

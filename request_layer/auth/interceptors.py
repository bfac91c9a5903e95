"""Authentication interceptors.

Both factories take the token store as an explicit dependency so that
each client, and each test, can use its own store.
"""

from collections.abc import Awaitable, Callable

import structlog

from request_layer.auth.storage import TokenPair, TokenStorage
from request_layer.http.constants import HTTP_STATUS_OK, HTTP_STATUS_UNAUTHORIZED
from request_layer.http.interceptors import (
    ErrorInterceptor,
    RequestInterceptor,
    resolve,
)
from request_layer.http.models import ApiError, ApiResponse, RequestConfig


logger = structlog.get_logger()

TokenRefresher = Callable[[str], TokenPair | Awaitable[TokenPair]]

SESSION_EXPIRED_MESSAGE = "Session expired. Please log in again."
TOKEN_REFRESHED_MESSAGE = "Authentication renewed"


def bearer_token_interceptor(storage: TokenStorage) -> RequestInterceptor:
    """Create a request interceptor adding ``Authorization: Bearer``.

    The token is read from ``storage`` on every call, so rotated tokens
    are picked up without re-registering the interceptor.

    Args:
        storage: Token store.

    Returns:
        Request interceptor.
    """

    def add_bearer_token(config: RequestConfig) -> RequestConfig:
        tokens = storage.get_tokens()
        if tokens is not None:
            config.headers = {
                **(config.headers or {}),
                "Authorization": f"Bearer {tokens.access_token}",
            }
        return config

    return add_bearer_token


def refresh_on_unauthorized(
    storage: TokenStorage,
    refresher: TokenRefresher,
) -> ErrorInterceptor:
    """Create an error interceptor that renews tokens on 401.

    On a 401 the refresh token is exchanged through ``refresher`` and the
    new pair stored; the failure is then promoted to a success response
    telling the caller the session was renewed. The original request is
    not replayed. When no refresh token is stored or the refresher raises,
    the tokens are cleared and the error is returned with a
    session-expired message. Other errors pass through unchanged.

    Args:
        storage: Token store.
        refresher: Callable (sync or async) exchanging a refresh token for
            a new pair.

    Returns:
        Async error interceptor.
    """
    log = logger.bind(component="auth", subcomponent="refresh")

    async def refresh_tokens(error: ApiError) -> ApiError | ApiResponse:
        if error.status != HTTP_STATUS_UNAUTHORIZED:
            return error

        tokens = storage.get_tokens()
        if tokens is None or not tokens.refresh_token:
            log.info("token_refresh_skipped", reason="no_refresh_token")
            storage.clear_tokens()
            return error.model_copy(update={"message": SESSION_EXPIRED_MESSAGE})

        log.info("token_refresh_attempt")
        try:
            new_tokens = await resolve(refresher(tokens.refresh_token))
        except Exception as exc:  # noqa: BLE001
            log.warning("token_refresh_failed", error=str(exc))
            storage.clear_tokens()
            return error.model_copy(update={"message": SESSION_EXPIRED_MESSAGE})

        storage.set_tokens(new_tokens)
        log.info("token_refreshed")
        return ApiResponse(
            data={"message": "Token refreshed"},
            status=HTTP_STATUS_OK,
            message=TOKEN_REFRESHED_MESSAGE,
        )

    return refresh_tokens

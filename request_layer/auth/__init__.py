"""Token storage and authentication interceptors."""

from request_layer.auth.interceptors import (
    SESSION_EXPIRED_MESSAGE,
    TOKEN_REFRESHED_MESSAGE,
    TokenRefresher,
    bearer_token_interceptor,
    refresh_on_unauthorized,
)
from request_layer.auth.storage import InMemoryTokenStorage, TokenPair, TokenStorage


__all__ = [
    "SESSION_EXPIRED_MESSAGE",
    "TOKEN_REFRESHED_MESSAGE",
    "InMemoryTokenStorage",
    "TokenPair",
    "TokenRefresher",
    "TokenStorage",
    "bearer_token_interceptor",
    "refresh_on_unauthorized",
]

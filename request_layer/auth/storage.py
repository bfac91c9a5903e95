"""Token storage capability used by the auth interceptors."""

import time
from typing import Protocol, runtime_checkable

import structlog
from pydantic import BaseModel, ConfigDict, Field


logger = structlog.get_logger()


class TokenPair(BaseModel):
    """Access/refresh token pair.

    Attributes:
        access_token: Bearer token sent with requests.
        refresh_token: Token exchanged for a new pair.
        expires_at: Expiry as a Unix timestamp in seconds; None never expires.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    access_token: str = Field(min_length=1)
    refresh_token: str | None = None
    expires_at: float | None = None

    def is_expired(self, now: float | None = None) -> bool:
        """Check whether the pair has expired."""
        if self.expires_at is None:
            return False
        return self.expires_at < (time.time() if now is None else now)


@runtime_checkable
class TokenStorage(Protocol):
    """Protocol for token stores.

    Implementations are injected into whichever interceptor needs
    credentials; the request layer never reaches for a global store.
    """

    def get_tokens(self) -> TokenPair | None:
        """Return the current pair, or None when absent or expired."""
        ...

    def set_tokens(self, tokens: TokenPair) -> None:
        """Replace the stored pair."""
        ...

    def clear_tokens(self) -> None:
        """Drop the stored pair."""
        ...


class InMemoryTokenStorage:
    """Process-local token store that forgets expired tokens."""

    def __init__(self, tokens: TokenPair | None = None) -> None:
        self._tokens = tokens
        self._log = logger.bind(component="auth", subcomponent="storage")

    def get_tokens(self) -> TokenPair | None:
        if self._tokens is not None and self._tokens.is_expired():
            self._log.warning("tokens_expired")
            self._tokens = None
        return self._tokens

    def set_tokens(self, tokens: TokenPair) -> None:
        self._tokens = tokens
        self._log.info("tokens_stored")

    def clear_tokens(self) -> None:
        self._tokens = None
        self._log.info("tokens_cleared")

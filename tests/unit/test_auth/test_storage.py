"""Unit tests for token storage."""

import time

from request_layer.auth.storage import InMemoryTokenStorage, TokenPair, TokenStorage


class TestTokenPair:
    """Tests for TokenPair expiry."""

    def test_without_expiry_never_expires(self) -> None:
        """expires_at=None means no expiry."""
        assert TokenPair(access_token="a").is_expired() is False

    def test_past_expiry(self) -> None:
        """A pair expiring in the past is expired."""
        pair = TokenPair(access_token="a", expires_at=100.0)

        assert pair.is_expired(now=200.0) is True
        assert pair.is_expired(now=50.0) is False


class TestInMemoryTokenStorage:
    """Tests for InMemoryTokenStorage."""

    def test_satisfies_protocol(self) -> None:
        """The in-memory store implements TokenStorage."""
        assert isinstance(InMemoryTokenStorage(), TokenStorage)

    def test_set_get_clear(self) -> None:
        """Stored tokens are returned until cleared."""
        storage = InMemoryTokenStorage()
        pair = TokenPair(access_token="access", refresh_token="refresh")

        storage.set_tokens(pair)
        assert storage.get_tokens() == pair

        storage.clear_tokens()
        assert storage.get_tokens() is None

    def test_expired_tokens_are_dropped(self) -> None:
        """Expired tokens read as None and are forgotten."""
        storage = InMemoryTokenStorage(
            TokenPair(access_token="old", expires_at=time.time() - 60)
        )

        assert storage.get_tokens() is None
        assert storage.get_tokens() is None

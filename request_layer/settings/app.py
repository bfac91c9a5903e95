"""Client settings powered by Pydantic BaseSettings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from request_layer.http.constants import (
    DEFAULT_GRAPHQL_TIMEOUT_SECONDS,
    DEFAULT_REST_TIMEOUT_SECONDS,
)
from request_layer.http.models import ClientConfig


class ClientSettings(BaseSettings):
    """Environment configuration for the request layer clients.

    Values come from ``REQUEST_LAYER_*`` environment variables or a
    ``.env`` file. ``default_headers`` is read as JSON.
    """

    model_config = SettingsConfigDict(
        env_prefix="REQUEST_LAYER_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = "http://localhost:8000"
    timeout_seconds: float = Field(default=DEFAULT_REST_TIMEOUT_SECONDS, gt=0.0)
    graphql_url: str | None = None
    graphql_timeout_seconds: float = Field(
        default=DEFAULT_GRAPHQL_TIMEOUT_SECONDS, gt=0.0
    )
    cube_url: str | None = None
    default_headers: dict[str, str] = Field(default_factory=dict)

    def rest_config(self) -> ClientConfig:
        """Build the REST client configuration."""
        return ClientConfig(
            base_url=self.base_url,
            timeout_seconds=self.timeout_seconds,
            headers=dict(self.default_headers),
        )

    def graphql_config(self) -> ClientConfig:
        """Build the GraphQL client configuration.

        Falls back to ``base_url`` when no GraphQL endpoint is set.
        """
        return ClientConfig(
            base_url=self.graphql_url or self.base_url,
            timeout_seconds=self.graphql_timeout_seconds,
            headers=dict(self.default_headers),
        )

    def cube_config(self) -> ClientConfig:
        """Build the Cube client configuration.

        Falls back to ``base_url`` when no Cube address is set.
        """
        return ClientConfig(
            base_url=self.cube_url or self.base_url,
            timeout_seconds=self.graphql_timeout_seconds,
            headers=dict(self.default_headers),
        )


def get_settings() -> ClientSettings:
    """Get a settings instance."""
    return ClientSettings()

"""Settings loading and client factories."""

from .app import ClientSettings, get_settings
from .factory import create_api_client, create_cube_client, create_graphql_client


__all__ = [
    "ClientSettings",
    "create_api_client",
    "create_cube_client",
    "create_graphql_client",
    "get_settings",
]

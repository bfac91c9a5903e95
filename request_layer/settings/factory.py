"""Factories building clients from settings."""

import structlog

from request_layer.auth.interceptors import bearer_token_interceptor
from request_layer.auth.storage import TokenStorage
from request_layer.graphql.client import GraphQLClient
from request_layer.graphql.cube import CubeGraphQLClient
from request_layer.http.client import ApiClient, BaseHttpClient
from request_layer.settings.app import ClientSettings, get_settings


logger = structlog.get_logger()


def _attach_auth(client: BaseHttpClient, token_storage: TokenStorage | None) -> None:
    if token_storage is not None:
        client.add_request_interceptor(bearer_token_interceptor(token_storage))


def create_api_client(
    settings: ClientSettings | None = None,
    *,
    token_storage: TokenStorage | None = None,
) -> ApiClient:
    """Create a REST client.

    Args:
        settings: Settings to use. Loaded from the environment when None.
        token_storage: When given, a bearer token interceptor reading from
            it is registered.

    Returns:
        Configured ApiClient.
    """
    settings = settings or get_settings()
    client = ApiClient(settings.rest_config())
    _attach_auth(client, token_storage)
    logger.info(
        "client_created",
        component="settings",
        kind="rest",
        base_url=client.config.base_url,
        auth=token_storage is not None,
    )
    return client


def create_graphql_client(
    settings: ClientSettings | None = None,
    *,
    token_storage: TokenStorage | None = None,
) -> GraphQLClient:
    """Create a GraphQL client for ``settings.graphql_url``."""
    settings = settings or get_settings()
    client = GraphQLClient(settings.graphql_config())
    _attach_auth(client, token_storage)
    logger.info(
        "client_created",
        component="settings",
        kind="graphql",
        base_url=client.config.base_url,
        auth=token_storage is not None,
    )
    return client


def create_cube_client(
    settings: ClientSettings | None = None,
    *,
    token_storage: TokenStorage | None = None,
) -> CubeGraphQLClient:
    """Create a Cube client for ``settings.cube_url``."""
    settings = settings or get_settings()
    client = CubeGraphQLClient(settings.cube_config())
    _attach_auth(client, token_storage)
    logger.info(
        "client_created",
        component="settings",
        kind="cube",
        base_url=client.config.base_url,
        auth=token_storage is not None,
    )
    return client

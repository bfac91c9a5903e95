"""Cube analytics client built on the GraphQL envelope."""

from collections.abc import Mapping
from typing import Any

import structlog

from request_layer.graphql.client import GraphQLEnvelopeClient
from request_layer.graphql.models import CubeQueryOptions
from request_layer.graphql.query_builder import build_cube_query
from request_layer.http.client import CallbacksArg


logger = structlog.get_logger()


class CubeGraphQLClient(GraphQLEnvelopeClient):
    """Client that synthesizes Cube queries from structured options.

    Results arrive as ``{"data": {"cube": ...}}``; callbacks and response
    interceptors receive the ``cube`` content.

    Example:
        >>> client = CubeGraphQLClient(ClientConfig(base_url="http://localhost:4000"))
        >>> await client.query(
        ...     "/cubejs-api/graphql",
        ...     {
        ...         "limit": 10,
        ...         "where": {"sales": {"total": {"greaterThan": 1000}}},
        ...         "fields": {"sales": {"id": True, "total": True}},
        ...     },
        ...     RequestCallbacks(on_success=lambda r: print(r.data)),
        ... )
    """

    envelope_path = ("data", "cube")

    async def query(
        self,
        url: str,
        options: CubeQueryOptions | Mapping[str, Any] | None = None,
        callbacks: CallbacksArg = None,
    ) -> None:
        """Synthesize and run a Cube query.

        Args:
            url: GraphQL path relative to the base address.
            options: Pagination, filters and field selection.
            callbacks: Completion callbacks.
        """
        text = build_cube_query(options)
        logger.debug("cube_query_built", component="graphql", url=url, query=text)
        await self._execute(url, text, None, callbacks)

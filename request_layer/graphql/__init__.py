"""GraphQL clients and Cube query synthesis."""

from request_layer.graphql.client import GraphQLClient, GraphQLEnvelopeClient
from request_layer.graphql.cube import CubeGraphQLClient
from request_layer.graphql.models import (
    CubeQueryFields,
    CubeQueryOptions,
    CubeQueryWhere,
)
from request_layer.graphql.query_builder import (
    build_cube_query,
    build_fields,
    build_where_clause,
)


__all__ = [
    # Clients
    "CubeGraphQLClient",
    "GraphQLClient",
    "GraphQLEnvelopeClient",
    # Models
    "CubeQueryFields",
    "CubeQueryOptions",
    "CubeQueryWhere",
    # Query synthesis
    "build_cube_query",
    "build_fields",
    "build_where_clause",
]

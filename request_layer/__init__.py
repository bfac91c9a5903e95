"""Typed request layer for REST and GraphQL backends.

Normalizes success and error shapes, runs ordered interceptor chains
around every call, and synthesizes Cube analytics queries from
structured filter/field options.
"""

from request_layer.graphql.client import GraphQLClient
from request_layer.graphql.cube import CubeGraphQLClient
from request_layer.graphql.models import CubeQueryOptions
from request_layer.graphql.query_builder import build_cube_query
from request_layer.http.client import ApiClient
from request_layer.http.interceptors import InterceptorRegistry
from request_layer.http.models import (
    ApiError,
    ApiResponse,
    ClientConfig,
    Recovered,
    RequestCallbacks,
    RequestConfig,
    StillFailing,
)


__all__ = [
    # Clients
    "ApiClient",
    "CubeGraphQLClient",
    "GraphQLClient",
    # Interceptors
    "InterceptorRegistry",
    # Models
    "ApiError",
    "ApiResponse",
    "ClientConfig",
    "CubeQueryOptions",
    "Recovered",
    "RequestCallbacks",
    "RequestConfig",
    "StillFailing",
    # Query synthesis
    "build_cube_query",
]

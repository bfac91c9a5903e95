"""GraphQL envelope over the request pipeline."""

from collections.abc import Mapping
from typing import Any

import httpx

from request_layer.http.client import BaseHttpClient, CallbacksArg
from request_layer.http.constants import (
    DEFAULT_GRAPHQL_TIMEOUT_SECONDS,
    NO_RESPONSE_STATUS,
)
from request_layer.http.errors import EnvelopeError
from request_layer.http.models import (
    ApiError,
    ApiResponse,
    ClientConfig,
    ErrorCode,
    RequestCallbacks,
    RequestConfig,
)
from request_layer.http.normalizer import decode_body, normalize_response
from request_layer.observability.metrics import RequestMetrics


GraphQLVariables = Mapping[str, Any]


class GraphQLEnvelopeClient(BaseHttpClient):
    """Posts ``{query, variables}`` bodies and unwraps ``data`` envelopes.

    ``envelope_path`` lists the keys unwrapped from the response body
    before the response interceptors see the payload.
    """

    envelope_path: tuple[str, ...] = ("data",)

    def __init__(
        self,
        config: ClientConfig,
        http_client: httpx.AsyncClient | None = None,
        metrics: RequestMetrics | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Endpoint configuration. Without an explicit timeout
                the GraphQL default of 30 seconds applies.
            http_client: Pre-built transport.
            metrics: Metrics sink; the shared instance when None.
        """
        if "timeout_seconds" not in config.model_fields_set:
            config = config.model_copy(
                update={"timeout_seconds": DEFAULT_GRAPHQL_TIMEOUT_SECONDS}
            )
        super().__init__(config, http_client, metrics)

    async def _execute(
        self,
        url: str,
        query: str,
        variables: GraphQLVariables | None,
        callbacks: CallbacksArg,
    ) -> None:
        body = {"query": query, "variables": dict(variables or {})}
        await self._dispatch(
            RequestConfig(method="POST", url=url, headers={}, data=body),
            RequestCallbacks.coerce(callbacks),
        )

    def _build_response(self, response: httpx.Response) -> ApiResponse:
        """Unwrap the GraphQL envelope of a 2xx response.

        Raises:
            EnvelopeError: When the endpoint reported errors without data,
                or when an envelope key is missing.
        """
        payload = decode_body(response)

        if isinstance(payload, Mapping):
            errors = payload.get("errors")
            if errors and payload.get("data") is None:
                first = errors[0] if isinstance(errors, list) else errors
                message = first.get("message") if isinstance(first, Mapping) else None
                raise EnvelopeError(
                    ApiError(
                        message=message or "GraphQL request returned errors",
                        status=response.status_code,
                        code=ErrorCode.GRAPHQL_ERROR.value,
                        details=payload,
                    )
                )

        data = payload
        for key in self.envelope_path:
            if not isinstance(data, Mapping) or key not in data:
                raise EnvelopeError(
                    ApiError(
                        message=f"Response is missing the '{key}' envelope key",
                        status=NO_RESPONSE_STATUS,
                        code=ErrorCode.INVALID_ENVELOPE.value,
                        details=payload,
                    )
                )
            data = data[key]

        return normalize_response(response, data, use_payload_message=False)


class GraphQLClient(GraphQLEnvelopeClient):
    """Client for queries and mutations against one GraphQL endpoint.

    The endpoint is the client's base address; requests are posted to it
    as an absolute URL, so no trailing slash is added.

    Example:
        >>> client = GraphQLClient(ClientConfig(base_url="https://api.example.com/graphql"))
        >>> await client.query(
        ...     "query GetUser($id: ID!) { user(id: $id) { id name } }",
        ...     {"id": "123"},
        ...     RequestCallbacks(on_success=lambda r: print(r.data["user"])),
        ... )
    """

    async def query(
        self,
        query: str,
        variables: GraphQLVariables | None = None,
        callbacks: CallbacksArg = None,
    ) -> None:
        """Execute a GraphQL query.

        Args:
            query: GraphQL document text.
            variables: Variables for the document.
            callbacks: Completion callbacks; ``on_success`` receives the
                content of the ``data`` envelope.
        """
        await self._execute(self._config.base_url, query, variables, callbacks)

    async def mutate(
        self,
        mutation: str,
        variables: GraphQLVariables | None = None,
        callbacks: CallbacksArg = None,
    ) -> None:
        """Execute a GraphQL mutation.

        Identical to ``query`` on the wire.
        """
        await self.query(mutation, variables, callbacks)

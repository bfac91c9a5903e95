"""Unit tests for the Cube analytics client."""

import json

import pytest

from request_layer.graphql.cube import CubeGraphQLClient
from request_layer.graphql.query_builder import build_cube_query
from request_layer.http.models import ApiResponse, ClientConfig, ErrorCode
from tests.helpers.transport import CallbackRecorder, RecordingHandler, make_http_client


BASE = "http://localhost:4000"
OPTIONS = {
    "limit": 10,
    "where": {"driver": {"driver_id": {"equals": 1}}},
    "fields": {"driver": {"driver_name": True, "driver_id": True}},
}


def _make_client(handler: RecordingHandler) -> CubeGraphQLClient:
    return CubeGraphQLClient(
        ClientConfig(base_url=BASE),
        make_http_client(handler, base_url=BASE),
    )


class TestCubeQuery:
    """Tests for CubeGraphQLClient.query."""

    @pytest.mark.asyncio
    async def test_posts_synthesized_query_once(self) -> None:
        """The synthesized text is posted once to the given path."""
        handler = RecordingHandler(json={"data": {"cube": []}})

        async with _make_client(handler) as client:
            await client.query("/cubejs-api/graphql", OPTIONS)

        assert len(handler.requests) == 1
        assert handler.last.url.path == "/cubejs-api/graphql"
        body = json.loads(handler.last.content)
        assert body == {"query": build_cube_query(OPTIONS), "variables": {}}

    @pytest.mark.asyncio
    async def test_unwraps_cube_envelope(self) -> None:
        """on_success receives data.cube."""
        rows = [{"driver": {"driver_name": "Ana", "driver_id": 1}}]
        handler = RecordingHandler(json={"data": {"cube": rows}})
        recorder = CallbackRecorder()

        async with _make_client(handler) as client:
            await client.query("/cubejs-api/graphql", OPTIONS, recorder.callbacks)

        assert recorder.successes == [
            ApiResponse(data=rows, status=200, message="Request completed successfully")
        ]

    @pytest.mark.asyncio
    async def test_response_interceptor_sees_unwrapped_payload(self) -> None:
        """Response interceptors run after the cube key is unwrapped."""
        handler = RecordingHandler(json={"data": {"cube": [{"n": 1}, {"n": 2}]}})
        recorder = CallbackRecorder()
        seen: list[object] = []

        def capture(response: ApiResponse) -> ApiResponse:
            seen.append(response.data)
            return response

        async with _make_client(handler) as client:
            client.add_response_interceptor(capture)
            await client.query("/cubejs-api/graphql", None, recorder.callbacks)

        assert seen == [[{"n": 1}, {"n": 2}]]

    @pytest.mark.asyncio
    async def test_missing_cube_key_is_an_error(self) -> None:
        """A data envelope without cube is reported as invalid."""
        handler = RecordingHandler(json={"data": {"other": []}})
        recorder = CallbackRecorder()

        async with _make_client(handler) as client:
            await client.query("/cubejs-api/graphql", OPTIONS, recorder.callbacks)

        assert recorder.successes == []
        assert recorder.errors[0].code == ErrorCode.INVALID_ENVELOPE.value
        assert "cube" in recorder.errors[0].message

    @pytest.mark.asyncio
    async def test_http_failure_goes_to_on_error(self) -> None:
        """Transport-level failures follow the normal error path."""
        handler = RecordingHandler(status_code=400, json={"message": "bad query"})
        recorder = CallbackRecorder()

        async with _make_client(handler) as client:
            await client.query("/cubejs-api/graphql", OPTIONS, recorder.callbacks)

        assert recorder.errors[0].status == 400
        assert recorder.errors[0].message == "bad query"

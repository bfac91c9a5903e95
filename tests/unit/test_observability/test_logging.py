"""Unit tests for logging configuration."""

import io
import json
import logging
from collections.abc import Iterator

import pytest
import structlog

from request_layer.auth.storage import InMemoryTokenStorage, TokenPair
from request_layer.observability.logging import TRANSPORT_LOGGERS, configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    levels = {name: logging.getLogger(name).level for name in TRANSPORT_LOGGERS}
    yield
    structlog.reset_defaults()
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)


def _records(output: io.StringIO) -> list[dict[str, object]]:
    return [json.loads(line) for line in output.getvalue().strip().splitlines()]


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_json_output(self) -> None:
        """JSON mode writes one JSON object per event."""
        output = io.StringIO()
        configure_logging(output=output, json_format=True)

        structlog.get_logger().info("request_complete", status=200)

        record = _records(output)[0]
        assert record["event"] == "request_complete"
        assert record["status"] == 200
        assert record["level"] == "info"
        assert "timestamp" in record

    def test_events_without_component_are_tagged(self) -> None:
        """A missing component defaults to the library name."""
        output = io.StringIO()
        configure_logging(output=output)

        structlog.get_logger().info("untagged")
        structlog.get_logger().bind(component="auth").info("tagged")

        untagged, tagged = _records(output)
        assert untagged["component"] == "request_layer"
        assert tagged["component"] == "auth"

    def test_level_filters_events(self) -> None:
        """Events below the level are dropped."""
        output = io.StringIO()
        configure_logging(level=logging.WARNING, output=output)

        structlog.get_logger().info("dropped")
        structlog.get_logger().warning("kept")

        records = _records(output)
        assert len(records) == 1
        assert records[0]["event"] == "kept"

    def test_reconfigure_reroutes_existing_loggers(self) -> None:
        """A logger that already logged follows a second configuration."""
        log = structlog.get_logger()
        first, second = io.StringIO(), io.StringIO()

        configure_logging(output=first)
        log.info("first_event")
        configure_logging(output=second)
        log.info("second_event")

        assert [r["event"] for r in _records(first)] == ["first_event"]
        assert [r["event"] for r in _records(second)] == ["second_event"]

    def test_library_module_events_are_routed(self) -> None:
        """Events from package modules reach the configured stream."""
        output = io.StringIO()
        configure_logging(output=output)

        InMemoryTokenStorage().set_tokens(TokenPair(access_token="abc"))

        record = _records(output)[0]
        assert record["event"] == "tokens_stored"
        assert record["component"] == "auth"
        assert "abc" not in output.getvalue()

    def test_transport_loggers_level(self) -> None:
        """httpx and httpcore loggers get the transport level."""
        configure_logging(output=io.StringIO(), transport_level=logging.ERROR)

        for name in TRANSPORT_LOGGERS:
            assert logging.getLogger(name).level == logging.ERROR

"""Structured logging configuration for applications using the request layer."""

import logging
import sys
from collections.abc import MutableMapping
from typing import Any, TextIO

import structlog


DEFAULT_COMPONENT = "request_layer"

# stdlib loggers of the transport; httpx logs every request at INFO
TRANSPORT_LOGGERS = ("httpx", "httpcore")


def _default_component(
    _logger: Any, _method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    event_dict.setdefault("component", DEFAULT_COMPONENT)
    return event_dict


def _build_processors(json_format: bool) -> list[structlog.types.Processor]:
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer(sort_keys=True)
        if json_format
        else structlog.dev.ConsoleRenderer(colors=True)
    )
    return [
        structlog.contextvars.merge_contextvars,
        _default_component,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        renderer,
    ]


def configure_logging(
    level: int = logging.INFO,
    output: TextIO = sys.stderr,
    json_format: bool = True,
    transport_level: int = logging.WARNING,
) -> None:
    """Route request layer events to ``output``.

    Library modules only call ``structlog.get_logger()``; the embedding
    application decides where events go by calling this function. It may
    be called again at any time: loggers are not cached, so module-level
    loggers that already logged pick up the new settings. Events without
    a ``component`` are tagged ``request_layer``.

    Args:
        level: Minimum level for request layer events.
        output: Output stream (default: stderr).
        json_format: Render JSON lines when True, colored console output
            otherwise.
        transport_level: Level applied to the ``httpx``/``httpcore``
            stdlib loggers, which otherwise repeat every request at INFO.
    """
    structlog.configure(
        processors=_build_processors(json_format),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=False,
    )

    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)

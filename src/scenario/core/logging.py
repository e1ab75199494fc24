"""
Scenario logging - structured events via structlog.

The library emits two events and nothing else:

    fallible_thunk_raised     debug    Option/Result.from_fallible swallowed an
                                       exception (only when settings ``debug``)
    signal_handler_returned   warning  a signal handler returned instead of
                                       raising (non-strict mode only)

Both go through module loggers created with ``get_logger(__name__)``. The
library never configures structlog on import; applications call
``configure_logging()`` (or ``configure_logging_from_settings()``) once at
startup to choose level and rendering.

Architecture:
    ::

        configure_logging(level="INFO", json_format=None)
            │
            ▼
        TimeStamper(iso) ─> add_log_level ─> add_library_name
            ─> JSONRenderer (json_format or stdout not a tty)
             | ConsoleRenderer

Examples:
    >>> from scenario.core.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", json_format=True)
    >>> get_logger(__name__).info("invoice_checked", invoice_id=7)

Tags:
    logging, structlog, observability, scenario-core
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

LIBRARY_NAME = "scenario"


def _add_library_name(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Tag every event with the emitting library."""
    event_dict.setdefault("library", LIBRARY_NAME)
    return event_dict


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    add_timestamp: bool = True,
) -> None:
    """Configure structlog rendering for scenario's events.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: True for JSON, False for console, None for auto (JSON if not tty)
        add_timestamp: Include ISO timestamp in logs
    """
    if json_format is None:
        json_format = not sys.stdout.isatty()

    processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        _add_library_name,
    ]
    if add_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger (usually ``get_logger(__name__)``).

    PrintLogger carries no name of its own, so the name goes into the
    initial context as ``logger_name``. The proxy stays lazy until first
    use; module loggers created at import honour a later configure_logging().
    """
    if name:
        return structlog.get_logger(logger_name=name)
    return structlog.get_logger()


__all__ = [
    "LIBRARY_NAME",
    "configure_logging",
    "get_logger",
]

"""
crudkit logging - structured events for the data-access facades.

Every kit logs through :func:`get_logger` and names its events
``<kit>.<operation>`` (``orm.insert``, ``mongo.find_one``,
``raw.query_failed`` …) with the entity, collection or query as keys.
:func:`configure_logging` installs a structlog chain that splits such
event names into ``kit`` and ``operation`` fields so log backends can
filter on them without parsing the event string.  Host applications
call it once at startup; without it structlog's defaults apply.

Architecture:
    ::

        configure_logging(level="INFO", json_format=None, service="crudkit")
            │
            ▼
        structlog processor chain:
          1. TimeStamper (iso)
          2. add_log_level / add_logger_name
          3. _add_kit_fields      "orm.insert" → kit="orm", operation="insert"
          4. JSONRenderer (json) or ConsoleRenderer (tty)

Examples:
    >>> from crudkit.core.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", json_format=True)
    >>> get_logger(__name__).debug("orm.insert", entity="User")
    {"entity": "User", "event": "orm.insert", "kit": "orm", "operation": "insert", ...}

Tags:
    logging, structlog, observability, crudkit
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

KITS = frozenset({"orm", "mongo", "raw", "connection", "container"})
"""Event prefixes emitted by crudkit components."""


def _add_kit_fields(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Split ``<kit>.<operation>`` event names into separate fields."""
    event = event_dict.get("event")
    if isinstance(event, str):
        kit, sep, operation = event.partition(".")
        if sep and kit in KITS:
            event_dict.setdefault("kit", kit)
            event_dict.setdefault("operation", operation)
    return event_dict


def _service_processor(service: str) -> Processor:
    def add_service(
        logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        event_dict.setdefault("service", service)
        return event_dict

    return add_service


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    service: str = "crudkit",
) -> None:
    """Configure structlog for crudkit events.

    Args:
        level: Minimum level (DEBUG logs one event per kit operation)
        json_format: True for JSON, False for console, None for auto (JSON if not tty)
        service: Value of the ``service`` field on every event
    """
    if json_format is None:
        json_format = not sys.stdout.isatty()

    processors: list[Processor] = [
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _add_kit_fields,
        _service_processor(service),
    ]
    if json_format:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level.upper())),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # SQLAlchemy and pymongo log through the standard library
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level.upper())


def configure_from_settings(settings: Any) -> None:
    """Apply ``log_level`` / ``log_format`` from a :class:`CrudKitSettings`."""
    configure_logging(level=settings.log_level, json_format=settings.log_format == "json")


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger (usually ``get_logger(__name__)``)."""
    return structlog.get_logger(name)


__all__ = [
    "KITS",
    "configure_logging",
    "configure_from_settings",
    "get_logger",
]

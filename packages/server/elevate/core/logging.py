"""
structlog setup for the API server and the seeding script.

Services log dotted events (``ownership.reconciled``, ``actor.unresolved``)
through ``structlog.get_logger()``; this module decides how they render.
"""

from __future__ import annotations

import logging

import structlog

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def level_number(level: str) -> int:
    """Map a level name from settings to its numeric value (unknown → INFO)."""
    return _LEVELS.get(level.strip().lower(), logging.INFO)


def configure_logging(level: str = "info", fmt: str = "json") -> None:
    """Render events as JSON lines (``fmt="json"``) or for a terminal."""
    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if fmt == "json":
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_number(level)),
        cache_logger_on_first_use=False,
    )

"""structlog setup for entrypoints.

Library modules only call `structlog.get_logger()`; processes that want
leveled, timestamped console output call configure_logging once at startup.
"""

from __future__ import annotations

import logging

import structlog


def configure_logging(level: str | int = "INFO") -> None:
    """Configure structlog with a level filter.

    Args:
        level: Level name ("DEBUG", "info", ...) or numeric level

    Raises:
        ValueError: If the level name is unknown
    """
    if isinstance(level, str):
        numeric = logging.getLevelName(level.upper())
        if not isinstance(numeric, int):
            raise ValueError(f"Unknown log level: {level}")
        level = numeric

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


__all__ = ["configure_logging"]

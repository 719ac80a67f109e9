"""Structured logging helpers for the registry and its hosts.

All components log through structlog. `configure_logging` is called once by
host entry points (the CLI); library code only asks for loggers.
"""

import logging
import sys
from typing import Any, Optional

import structlog


def get_component_logger(component: str, logger: Optional[Any] = None) -> Any:
    """Get logger bound to a component name.

    Args:
        component: Component name (e.g., "CapabilityRegistry", "TaggedSource")
        logger: Optional injected logger. If None, uses default structlog logger.

    Returns:
        Logger bound to the component name
    """
    base = logger or structlog.get_logger()
    return base.bind(component=component)


def get_logger() -> Any:
    """Get default structured logger."""
    return structlog.get_logger()


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """Configure structlog rendering and the minimum level.

    Args:
        level: Standard level name ("DEBUG", "INFO", ...)
        json_logs: Render one JSON object per line instead of console output
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

"""structlog setup for scripts and hosting processes.

Library code only calls ``structlog.get_logger()``; the process that hosts
the pool decides how log events are rendered.
"""

import logging

import structlog

from simpleswap.config import PoolConfig


def configure_logging(level: str = "INFO", json: bool = False) -> None:
    """Install structlog processors and a level filter.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ...)
        json: Render JSON lines instead of the colored console format
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level}")

    renderer = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )


def configure_from_config(config: PoolConfig) -> None:
    """Configure logging from a PoolConfig."""
    configure_logging(config.log_level, config.log_json)

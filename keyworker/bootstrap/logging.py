"""Bootstrap wiring for logging configuration."""

from __future__ import annotations

import os

import structlog

from keyworker.infrastructure.observability import configure_structlog

ENVIRONMENT_VAR = "ENVIRONMENT"
DEFAULT_ENVIRONMENT = "development"


def configure_logging() -> str:
    """Configure structlog from the ENVIRONMENT variable.

    ``production`` renders JSON lines, anything else the console renderer.
    Services bind their loggers when constructed, so this runs before the
    engine is built.

    Returns:
        The environment logging was configured for.
    """
    environment = os.getenv(ENVIRONMENT_VAR, DEFAULT_ENVIRONMENT)
    configure_structlog(environment=environment)
    structlog.get_logger().bind(component="bootstrap").info(
        "structured_logging_configured", environment=environment
    )
    return environment


__all__ = ["configure_logging"]

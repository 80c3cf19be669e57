"""
Centralized logging configuration for tradesim.

Logging goes through structlog on top of the standard library backend so
that configuration loading emits structured, keyword-based events that can
be rendered for a console or as JSON.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_config_logger(name: str) -> FilteringBoundLogger:
    """Get a logger bound to the configuration subsystem."""
    return get_logger(name).bind(subsystem="configuration")


def log_property_resolved(
    logger: FilteringBoundLogger,
    property_name: str,
    raw_value: Optional[str],
    resolved: Any,
) -> None:
    """
    Log the outcome of resolving a single property.

    Args:
        logger: Structlog logger instance
        property_name: Key that was read from the property source
        raw_value: Raw string found under the key, None when absent
        resolved: Value derived from the raw string
    """
    logger.debug(
        "Property resolved",
        property_name=property_name,
        raw_value=raw_value,
        resolved=repr(resolved),
        absent=raw_value is None,
    )

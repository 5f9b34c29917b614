"""techradar.core -- errors, logging and clock primitives shared by every layer.

Layer map::

    errors.py       Structured error hierarchy (RadarError, SchemaValidationError)
    logging.py      structlog configuration + get_logger()
    timestamps.py   UTC clock and YYYY-MM-DD helpers
"""

from techradar.core.errors import (
    BlipNotFoundError,
    ConfigError,
    ContentError,
    ErrorCategory,
    ErrorContext,
    FrontMatterError,
    ImportRowError,
    RadarError,
    SchemaValidationError,
    UnknownQuadrantError,
    Violation,
)
from techradar.core.logging import LogContext, configure_logging, get_logger

__all__ = [
    "BlipNotFoundError",
    "ConfigError",
    "ContentError",
    "ErrorCategory",
    "ErrorContext",
    "FrontMatterError",
    "ImportRowError",
    "RadarError",
    "SchemaValidationError",
    "UnknownQuadrantError",
    "Violation",
    "LogContext",
    "configure_logging",
    "get_logger",
]

"""JSON structured logging for the edge load balancer.

Provides structured logging with correlation IDs (the name of the load
balancer being reconciled), severity levels, and contextual metadata.
Uses python-json-logger for JSON formatting.
"""

import logging
import sys
from typing import Any

from pythonjsonlogger.json import JsonFormatter

from packages.common.config import get_config
from packages.common.tracing import get_correlation_id


class CorrelationIdFilter(logging.Filter):
    """Stamp each record with the load balancer being reconciled, if any."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id()
        return True


class CustomJsonFormatter(JsonFormatter):
    """JSON formatter adding level, source location and correlation_id."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = record.created
        log_record["level"] = record.levelname
        log_record["module"] = record.module
        log_record["function"] = record.funcName
        log_record["line"] = record.lineno

        if hasattr(record, "correlation_id"):
            log_record["correlation_id"] = record.correlation_id


def setup_logging(level: str | None = None) -> None:
    """Configure JSON structured logging for the application.

    Sets up:
    - JSON formatter with correlation IDs
    - Console handler writing to stdout
    - Log level from config or parameter

    Args:
        level: Optional log level override (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               If not provided, uses LOG_LEVEL from config.

    Example:
        >>> setup_logging("DEBUG")
        >>> logger = logging.getLogger(__name__)
        >>> logger.info("Adding port mapping", extra={"external_port": 80})
    """
    log_level = (level or get_config().log_level).upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        CustomJsonFormatter("%(timestamp)s %(level)s %(module)s %(function)s %(message)s")
    )
    console_handler.addFilter(CorrelationIdFilter())

    root_logger.addHandler(console_handler)


# Export public API
__all__ = ["CorrelationIdFilter", "CustomJsonFormatter", "setup_logging"]

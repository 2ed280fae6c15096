"""structlog setup for applications embedding the PlacetoPay SDK."""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from placetopay.config import PlacetoPaySettings

SDK_LOGGER_NAME = "placetopay"

REDACTED = "[REDACTED]"

# Keys whose values are credentials or derived from them
SENSITIVE_KEYS = frozenset(
    {"auth", "tranKey", "tran_key", "secretKey", "secret_key", "secret_key_override"}
)


def redact_credentials(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Mask credential values, including inside nested request bodies."""
    return _redact(event_dict)


def _redact(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            key: REDACTED if key in SENSITIVE_KEYS else _redact(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [_redact(item) for item in value]
    return value


def configure_logging(
    log_level: str | None = None,
    format_as_json: bool = True,
    sdk_log_level: str | None = None,
) -> None:
    """
    Configure structlog for scripts and services without their own setup.

    The SDK only emits events through ``structlog.get_logger``, so calling
    this is optional. Credentials are masked before rendering.

    Args:
        log_level: Root level; defaults to ``PLACETOPAY_LOG_LEVEL`` or INFO
        format_as_json: JSON lines when True, console output otherwise
        sdk_log_level: Separate level for the ``placetopay`` loggers
    """
    level = (log_level or PlacetoPaySettings().log_level).upper()
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level),
    )
    if sdk_log_level:
        logging.getLogger(SDK_LOGGER_NAME).setLevel(getattr(logging, sdk_log_level.upper()))

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
        redact_credentials,
    ]

    if format_as_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = SDK_LOGGER_NAME) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)

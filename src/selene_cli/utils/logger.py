"""Structured logging configuration using structlog."""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

import structlog
from structlog.types import EventDict, Processor

# Event keys whose values are never written out
SECRET_KEYS = frozenset({"mnemonic", "wallet_mnemonic", "faucet_mnemonic", "private_key"})


def add_short_timestamp(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add shortened timestamp (HH:MM:SS.ss) to log entries."""
    now = datetime.now(timezone.utc)
    event_dict["timestamp"] = now.strftime("%H:%M:%S") + f".{now.microsecond // 10000:02d}"
    return event_dict


def redact_secrets(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Mask secret values passed as log fields."""
    for key in SECRET_KEYS.intersection(event_dict):
        event_dict[key] = "***"
    return event_dict


def configure_logging(
    log_level: str = "WARNING",
    json_logs: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Configure structured logging for the application.

    Logs default to stderr: stdout belongs to the interactive prompts.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Whether to output logs in JSON format (default: False for human-readable)
        stream: Destination stream (default: sys.stderr)
    """
    numeric_level = getattr(logging, log_level.upper(), logging.WARNING)

    logging.basicConfig(
        format="%(message)s",
        stream=stream or sys.stderr,
        level=numeric_level,
        force=True,
    )

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_short_timestamp,
        redact_secrets,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a configured structlog logger.

    Args:
        name: Logger name (typically __name__ of the module)
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context variables included in all subsequent log entries.

    Example:
        bind_context(wallet="archway1...", market_id=0)
    """
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all context variables."""
    structlog.contextvars.clear_contextvars()

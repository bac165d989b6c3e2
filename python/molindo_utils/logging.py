"""Structured logging for molindo-utils.

This module provides structured logging functions on top of the
standard library ``logging`` module. Structured fields are stringified
and attached to each record as ``record.fields``, and appended to the
message so they survive plain formatters.

Example:
    >>> from molindo_utils import log_debug
    >>>
    >>> log_debug("Resolved class loader", {
    ...     "loader": "system",
    ...     "operation": "get_class_loader",
    ... })
"""

from __future__ import annotations

import logging
from typing import Any

from .types import LogContext

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

_LEVELS = {
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

logger = logging.getLogger("molindo_utils")


def set_log_level(level: str) -> None:
    """Set the level of the ``molindo_utils`` logger.

    Args:
        level: One of trace, debug, info, warn, error.

    Raises:
        ValueError: If the level name is unknown.
    """
    try:
        logger.setLevel(_LEVELS[level.lower()])
    except KeyError:
        raise ValueError(f"Unknown log level: '{level}'") from None


def log_error(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log an ERROR level message with structured fields.

    Args:
        message: The log message.
        fields: Optional structured fields for context. Can be a dict
                or a LogContext instance.
    """
    _log(logging.ERROR, message, fields)


def log_warn(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log a WARN level message with structured fields.

    Args:
        message: The log message.
        fields: Optional structured fields for context.
    """
    _log(logging.WARNING, message, fields)


def log_info(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log an INFO level message with structured fields.

    Args:
        message: The log message.
        fields: Optional structured fields for context.
    """
    _log(logging.INFO, message, fields)


def log_debug(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log a DEBUG level message with structured fields.

    Use this for class loading and resolution diagnostics.

    Args:
        message: The log message.
        fields: Optional structured fields for context.
    """
    _log(logging.DEBUG, message, fields)


def log_trace(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log a TRACE level message with structured fields.

    Use this for very verbose logging, like per-supplier chain steps.

    Args:
        message: The log message.
        fields: Optional structured fields for context.
    """
    _log(TRACE, message, fields)


def _log(
    level: int,
    message: str,
    fields: dict[str, Any] | LogContext | None,
) -> None:
    if not logger.isEnabledFor(level):
        return

    fields_dict = _normalize_fields(fields)
    if fields_dict:
        rendered = " ".join(f"{k}={v}" for k, v in fields_dict.items())
        message = f"{message} [{rendered}]"

    logger.log(level, message, extra={"fields": fields_dict or {}})


def _normalize_fields(
    fields: dict[str, Any] | LogContext | None,
) -> dict[str, str] | None:
    """Normalize fields to a dict of strings.

    Args:
        fields: Input fields as dict, LogContext, or None.

    Returns:
        Dict with string values, or None if no fields.
    """
    if fields is None:
        return None

    if isinstance(fields, LogContext):
        # Convert LogContext to dict, excluding None values
        return {k: str(v) for k, v in fields.model_dump().items() if v is not None}

    return {k: str(v) for k, v in fields.items()}


__all__ = [
    "TRACE",
    "log_error",
    "log_warn",
    "log_info",
    "log_debug",
    "log_trace",
    "set_log_level",
]

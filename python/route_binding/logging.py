"""Structured logging for route_binding.

This module provides structured logging functions that attach a flat
dictionary of string fields to every record, so binding decisions can
be correlated with the request that triggered them.

Records are emitted on the ``route_binding`` logger; configure handlers
and levels with the standard ``logging`` machinery of the host app.

Example:
    >>> from route_binding import log_info, log_error
    >>>
    >>> log_info("Resolving bindings", {
    ...     "correlation_id": "abc-123",
    ...     "parameters": "user,post"
    ... })
    >>>
    >>> try:
    ...     resolve()
    ... except Exception as e:
    ...     log_error(f"Binding failed: {e}", {
    ...         "correlation_id": "abc-123",
    ...         "error_type": type(e).__name__
    ...     })
"""

from __future__ import annotations

import logging
from typing import Any

from .types import LogContext

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

_logger = logging.getLogger("route_binding")


def log_error(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log an ERROR level message with structured fields.

    Use this for unrecoverable failures that require intervention.

    Args:
        message: The log message.
        fields: Optional structured fields for context. Can be a dict
                or a LogContext instance.
    """
    _emit(logging.ERROR, message, fields)


def log_warn(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log a WARN level message with structured fields.

    Use this for degraded operation, such as a binder failure that an
    error handler recovered from.

    Args:
        message: The log message.
        fields: Optional structured fields for context.
    """
    _emit(logging.WARNING, message, fields)


def log_info(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log an INFO level message with structured fields.

    Args:
        message: The log message.
        fields: Optional structured fields for context.
    """
    _emit(logging.INFO, message, fields)


def log_debug(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log a DEBUG level message with structured fields.

    Args:
        message: The log message.
        fields: Optional structured fields for context.
    """
    _emit(logging.DEBUG, message, fields)


def log_trace(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log a TRACE level message with structured fields.

    Use this for very verbose logging, like per-parameter decisions.
    This level is typically disabled in production.

    Args:
        message: The log message.
        fields: Optional structured fields for context.
    """
    _emit(TRACE, message, fields)


def get_logger() -> logging.Logger:
    """Return the package logger."""
    return _logger


def _emit(
    level: int, message: str, fields: dict[str, Any] | LogContext | None
) -> None:
    if not _logger.isEnabledFor(level):
        return
    fields_dict = _normalize_fields(fields)
    _logger.log(level, message, extra={"fields": fields_dict or {}})


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
        return {
            k: str(v) for k, v in fields.model_dump(mode="json").items() if v is not None
        }

    return {k: str(v) for k, v in fields.items()}


__all__ = [
    "TRACE",
    "get_logger",
    "log_error",
    "log_warn",
    "log_info",
    "log_debug",
    "log_trace",
]

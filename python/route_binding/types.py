"""Pydantic models for route_binding.

This module provides the type-safe data models shared across the
package: logging context and the descriptive records returned by
resolver introspection.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class BindingKind(str, Enum):
    """Kinds of bindings a resolver can hold."""

    EXPLICIT = "explicit"
    """Binder registered for one parameter name."""

    IMPLICIT = "implicit"
    """Namespace + affix rule tried against every parameter name."""

    COMPOSITE = "composite"
    """Binder registered for an exact ordered set of parameter names."""


class LogContext(BaseModel):
    """Context fields for structured logging.

    This model provides structured context for log messages,
    enabling correlation and filtering.

    Example:
        >>> context = LogContext(
        ...     correlation_id="abc-123",
        ...     parameter="user",
        ...     operation="resolve_bindings"
        ... )
        >>> log_info("Binding resolved", context)
    """

    correlation_id: str | None = Field(
        default=None,
        description="Correlation ID for request tracing.",
    )
    parameter: str | None = Field(
        default=None,
        description="Route parameter (wildcard) name.",
    )
    binding_kind: BindingKind | None = Field(
        default=None,
        description="Kind of binding involved.",
    )
    identifier: str | None = Field(
        default=None,
        description="Entity identifier involved.",
    )
    operation: str | None = Field(
        default=None,
        description="Operation being performed.",
    )


class BindingInfo(BaseModel):
    """Description of one registered binding (for debugging).

    Example:
        >>> [info.model_dump() for info in resolver.binding_info()]
        [{'kind': 'explicit', 'keys': ['user'], 'binder': 'App\\\\Models\\\\User', ...}]
    """

    kind: BindingKind
    keys: list[str] = Field(
        default_factory=list,
        description="Parameter names the binding applies to (empty for implicit rules).",
    )
    binder: str = Field(description="Human-readable binder description.")
    has_error_handler: bool = False
    pattern: str | None = Field(
        default=None,
        description="Candidate identifier pattern for implicit rules.",
    )


__all__ = [
    "BindingKind",
    "LogContext",
    "BindingInfo",
]

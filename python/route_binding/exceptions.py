"""Custom exceptions for route_binding.

This module provides the exception hierarchy raised while registering
and resolving route parameter bindings.

Failures raised by user-supplied binders (closures, entity methods,
failed lookups) are eligible for recovery by the binding's error
handler. Failures raised by the resolver itself before a binder is
invoked (malformed registrations, unknown entities, wrong composite
result shapes) always propagate to the caller.
"""

from __future__ import annotations

from typing import Any


class RouteBindingError(Exception):
    """Base exception for all route_binding errors.

    All exceptions raised by route_binding inherit from this class,
    making it easy to catch every binding-related error.

    Example:
        >>> try:
        ...     params = resolver.resolve_bindings({"user": "42"})
        ... except RouteBindingError as e:
        ...     print(f"Binding failed: {e}")
    """

    pass


class InvalidConfigurationError(RouteBindingError, ValueError):
    """Raised when a binding is registered with malformed arguments.

    Composite bindings and error handlers are validated at registration
    time. Explicit binders are parsed lazily, so an invalid explicit
    binder only fails when its key is resolved.

    Example:
        >>> resolver.composite_bind(["post"], find_post)
        Traceback (most recent call last):
        ...
        InvalidConfigurationError: ... expected a list of more than one wildcard
    """

    pass


class EntityNotFoundError(RouteBindingError, LookupError):
    """Raised when an entity identifier or a route-key lookup finds nothing.

    Two situations produce this error:
    - A binder names an identifier the entity factory cannot construct.
    - The default lookup finds no entity whose route key equals the value.

    Attributes:
        identifier: The entity identifier involved.
        field: The route-key field that was queried (lookups only).
        value: The raw parameter value that was queried (lookups only).
    """

    def __init__(
        self,
        message: str,
        *,
        identifier: str | None = None,
        field: str | None = None,
        value: Any = None,
    ) -> None:
        super().__init__(message)
        self.identifier = identifier
        self.field = field
        self.value = value

    @classmethod
    def for_identifier(cls, identifier: str) -> EntityNotFoundError:
        """Build the error for an identifier that does not resolve.

        Args:
            identifier: The unresolvable entity identifier.

        Returns:
            EntityNotFoundError with a descriptive message.
        """
        return cls(
            f"Route-Model-Binding : Model not found : [{identifier}]",
            identifier=identifier,
        )

    @classmethod
    def for_lookup(
        cls, identifier: str | None, field: str, value: Any
    ) -> EntityNotFoundError:
        """Build the error for a route-key lookup with zero matches.

        Args:
            identifier: Name of the entity that was queried, if known.
            field: The route-key field.
            value: The value that was searched for.

        Returns:
            EntityNotFoundError with a descriptive message.
        """
        target = identifier or "entity"
        return cls(
            f"No query results for [{target}] where {field} = {value!r}",
            identifier=identifier,
            field=field,
            value=value,
        )


class CompositeShapeError(RouteBindingError):
    """Raised when a composite binder returns the wrong shape.

    A composite binder must return a list or tuple with exactly one item
    per wildcard. This error is never routed to an error handler.

    Attributes:
        expected: Number of wildcards in the matched route.
        actual: Length of the returned sequence, or None if not a sequence.
    """

    def __init__(self, expected: int, actual: int | None) -> None:
        super().__init__(
            "Route-Model-Binding (composite-bind) : Return value must be a list "
            "or tuple of the same count as the wildcards! "
            f"(expected {expected}, got "
            f"{'a non-sequence value' if actual is None else actual})"
        )
        self.expected = expected
        self.actual = actual


class BindingConfigError(InvalidConfigurationError):
    """Raised when a declarative bindings configuration cannot be loaded.

    Wraps YAML parse errors, unreadable files, and schema validation
    failures so callers only need to handle one exception type.
    """

    pass


__all__ = [
    "RouteBindingError",
    "InvalidConfigurationError",
    "EntityNotFoundError",
    "CompositeShapeError",
    "BindingConfigError",
]

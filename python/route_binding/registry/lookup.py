"""Default route-key lookup.

When a binding names an entity without a method, the resolver falls back
to the default lookup: find the single entity whose route-key field
equals the wildcard value, failing if there is none.

The resolver only needs a narrow capability from entities:

    entity.get_route_key_name()           -> "id", "slug", "code", ...
    entity.where(field, value)            -> query
    query.first_or_fail()                 -> the match, or raise EntityNotFoundError

Any data-access layer can satisfy it; ``route_binding.repository``
ships an in-memory implementation.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class RouteQuery(Protocol):
    """Query filtered to a route-key value."""

    def first_or_fail(self) -> Any:
        """Return the first match or raise EntityNotFoundError."""
        ...


@runtime_checkable
class RouteBindable(Protocol):
    """Entity that can be looked up by its route key."""

    def get_route_key_name(self) -> str:
        """Return the name of the field used as route key."""
        ...

    def where(self, field: str, value: Any) -> RouteQuery:
        """Return a query filtered on ``field == value``."""
        ...


class DefaultLookupResolver:
    """Zero-argument callable performing the default route-key lookup.

    The raw wildcard value is baked in at construction, so the resolver
    invokes it without arguments. Everything, including reading the
    route-key name, happens on call so that every failure is visible to
    the binding's error handler.

    Example:
        >>> lookup = DefaultLookupResolver(CountryRepository(), "X1")
        >>> lookup()   # CountryRepository().where("code", "X1").first_or_fail()
        <Country code='X1'>
    """

    def __init__(self, instance: Any, value: Any) -> None:
        self._instance = instance
        self._value = value

    @property
    def instance(self) -> Any:
        return self._instance

    @property
    def value(self) -> Any:
        return self._value

    def __call__(self) -> Any:
        field = self._instance.get_route_key_name()
        return self._instance.where(field, self._value).first_or_fail()

    def __repr__(self) -> str:
        return (
            f"DefaultLookupResolver({self._instance.__class__.__name__}, "
            f"value={self._value!r})"
        )


__all__ = ["DefaultLookupResolver", "RouteBindable", "RouteQuery"]

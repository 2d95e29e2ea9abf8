"""Binder variants for route parameter bindings.

A binder is the configured resolution strategy for a wildcard. Users
pass one of three shapes when registering a binding:

- a callable, invoked with the raw wildcard value(s);
- ``"ClassName"``, resolved through the default route-key lookup;
- ``"ClassName@method"``, resolved by calling ``method`` on a fresh
  instance of ``ClassName``.

``parse_binder`` turns that user input into a tagged variant. Names are
never resolved here; the resolver looks them up at call time so a typo
only fails when its route is actually hit.

Example:
    >>> parse_binder("App\\\\Models\\\\User@findForRoute")
    EntityMethodBinder(identifier='App\\\\Models\\\\User', method='findForRoute')
    >>> parse_binder(lambda value: value.upper())
    CallableBinder(callback=<function <lambda> at ...>)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Union

METHOD_SEPARATOR = "@"


@dataclass(frozen=True)
class CallableBinder:
    """Binder backed by a user callable."""

    callback: Callable[..., Any]

    def describe(self) -> str:
        return getattr(self.callback, "__qualname__", None) or repr(self.callback)


@dataclass(frozen=True)
class EntityBinder:
    """Binder naming an entity resolved with the default route-key lookup."""

    identifier: str

    def describe(self) -> str:
        return self.identifier


@dataclass(frozen=True)
class EntityMethodBinder:
    """Binder naming an entity and the method to call on a fresh instance."""

    identifier: str
    method: str

    def describe(self) -> str:
        return f"{self.identifier}{METHOD_SEPARATOR}{self.method}"


@dataclass(frozen=True)
class InvalidBinder:
    """Binder value of an unsupported shape.

    Kept instead of rejected so explicit bindings keep failing lazily,
    at the moment their key is resolved.
    """

    value: Any

    def describe(self) -> str:
        return f"<invalid {type(self.value).__name__}>"


Binder = Union[CallableBinder, EntityBinder, EntityMethodBinder, InvalidBinder]


def parse_binder(value: Any) -> Binder:
    """Parse user binder input into a tagged variant.

    Already-parsed binders are returned unchanged. Strings are split on
    the first ``@`` only.

    Args:
        value: A callable, a ``"Class"`` or ``"Class@method"`` string, or
            a Binder instance.

    Returns:
        The matching Binder variant, or InvalidBinder for anything else.
    """
    if isinstance(value, (CallableBinder, EntityBinder, EntityMethodBinder, InvalidBinder)):
        return value

    if isinstance(value, str):
        if METHOD_SEPARATOR in value:
            identifier, method = value.split(METHOD_SEPARATOR, 1)
            if identifier and method:
                return EntityMethodBinder(identifier=identifier, method=method)
            return InvalidBinder(value)
        if value:
            return EntityBinder(identifier=value)
        return InvalidBinder(value)

    if callable(value):
        return CallableBinder(callback=value)

    return InvalidBinder(value)


__all__ = [
    "Binder",
    "CallableBinder",
    "EntityBinder",
    "EntityMethodBinder",
    "InvalidBinder",
    "METHOD_SEPARATOR",
    "parse_binder",
]

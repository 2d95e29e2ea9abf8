"""Binding definition types held by the BindingResolver registries.

This module defines the dataclasses that carry everything needed to
resolve one kind of binding: the explicit per-key binding, the implicit
namespace rule and the composite multi-key binding.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .binder import Binder

ErrorHandler = Callable[[Exception], Any]


def capitalize_key(key: str) -> str:
    """Upper-case the first character of a wildcard name.

    Unlike ``str.capitalize`` the rest of the name is left untouched.

    Example:
        >>> capitalize_key("myTest")
        'MyTest'
        >>> capitalize_key("")
        ''
    """
    return key[:1].upper() + key[1:]


@dataclass(frozen=True)
class ExplicitBinding:
    """Binder registered for one specific wildcard.

    Attributes:
        key: Wildcard name.
        binder: Parsed binder (may be an InvalidBinder, which fails when hit).
        error_handler: Optional recovery callback for binder failures.
    """

    key: str
    binder: Binder
    error_handler: ErrorHandler | None = None


@dataclass(frozen=True)
class ImplicitBindingRule:
    """Namespace + affix pattern tried against every wildcard name.

    Attributes:
        namespace: Namespace the candidate entities live in.
        prefix: Prepended to the capitalized wildcard name.
        suffix: Appended to the capitalized wildcard name.
        method: Method called on the entity instance; None means the
            default route-key lookup.
        error_handler: Optional recovery callback for binder failures.

    Example:
        >>> rule = ImplicitBindingRule(namespace="App\\\\Repositories", suffix="Repository")
        >>> rule.candidate_identifier("user", "\\\\")
        'App\\\\Repositories\\\\UserRepository'
    """

    namespace: str
    prefix: str = ""
    suffix: str = ""
    method: str | None = None
    error_handler: ErrorHandler | None = None

    def candidate_identifier(self, key: str, separator: str) -> str:
        """Build the entity identifier this rule proposes for ``key``."""
        return f"{self.namespace}{separator}{self.prefix}{capitalize_key(key)}{self.suffix}"

    def pattern(self, separator: str) -> str:
        """Describe the rule as an identifier pattern (for debugging)."""
        return f"{self.namespace}{separator}{self.prefix}{{Key}}{self.suffix}"


@dataclass(frozen=True)
class CompositeBinding:
    """Binder registered for an exact ordered sequence of wildcards.

    Attributes:
        keys: Wildcard names, at least two, in route order.
        binder: Parsed binder (CallableBinder or EntityMethodBinder).
        error_handler: Optional recovery callback for binder failures.
    """

    keys: tuple[str, ...]
    binder: Binder
    error_handler: ErrorHandler | None = None

    def matches(self, keys: tuple[str, ...]) -> bool:
        """Check ordered equality against a request's wildcard names."""
        return self.keys == keys


__all__ = [
    "ErrorHandler",
    "ExplicitBinding",
    "ImplicitBindingRule",
    "CompositeBinding",
    "capitalize_key",
]

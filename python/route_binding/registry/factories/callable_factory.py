"""Factory adapter for host container functions.

Host frameworks usually already own a container with a ``make(name)``
style function and a ``has(name)`` style predicate.
``CallableEntityFactory`` adapts that pair to the EntityFactory contract
so it can be handed straight to the resolver.

Example:
    >>> factory = CallableEntityFactory(container.make, exists=container.has)
    >>> resolver = BindingResolver(factory)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ...exceptions import InvalidConfigurationError
from ..base_factory import EntityFactory


class CallableEntityFactory(EntityFactory):
    """EntityFactory backed by an ``identifier -> instance`` callable.

    Existence is answered by the ``exists`` predicate only; the factory
    itself is called once per create().
    """

    def __init__(
        self,
        factory: Callable[[str], Any],
        exists: Callable[[str], bool],
    ) -> None:
        """Initialize the adapter.

        Args:
            factory: Called with an identifier, returns a new instance.
            exists: Predicate answering whether an identifier exists.

        Raises:
            InvalidConfigurationError: If either argument is not callable.
        """
        if not callable(factory) or not callable(exists):
            raise InvalidConfigurationError(
                "Route-Model-Binding : CallableEntityFactory needs a factory and "
                "an exists predicate"
            )
        self._factory = factory
        self._exists = exists

    def exists(self, identifier: str) -> bool:
        return bool(self._exists(identifier))

    def create(self, identifier: str) -> Any:
        return self._factory(identifier)

    def __repr__(self) -> str:
        name = getattr(self._factory, "__qualname__", repr(self._factory))
        return f"CallableEntityFactory({name})"

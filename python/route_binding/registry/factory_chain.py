"""Factory Chain - Ordered Entity Lookup.

The FactoryChain combines several entity factories behind one
EntityFactory interface. Factories are consulted in the order they
were added; the first one that reports an identifier as existing
builds it.

Default Chain (when using .default()):
- EntityRegistry      - explicitly registered entities
- ClassLookupFactory  - importlib class path inference

Usage:
    # Create default chain
    chain = FactoryChain.default()
    chain.register("App\\\\Models\\\\User", UserRepository)

    # Or build a custom chain
    chain = FactoryChain()
    chain.add_factory(EntityRegistry({"App\\\\Models\\\\Post": PostRepository}))
    chain.add_factory(CallableEntityFactory(container.make, container.has))

    resolver = BindingResolver(chain)
"""

from __future__ import annotations

import threading
from typing import Any

from ..exceptions import EntityNotFoundError
from ..logging import log_debug
from .base_factory import EntityFactory


class FactoryChain(EntityFactory):
    """Ordered chain of entity factories.

    Attributes:
        factories: Factories in lookup order.
    """

    def __init__(self, *factories: EntityFactory) -> None:
        """Initialize the chain with optional factories."""
        self._factories: list[EntityFactory] = []
        self._lock = threading.RLock()
        for factory in factories:
            self.add_factory(factory)

    @classmethod
    def default(cls) -> FactoryChain:
        """Create a chain with the default factories.

        Returns:
            Chain with EntityRegistry + ClassLookupFactory.
        """
        from .factories import ClassLookupFactory, EntityRegistry

        return cls(EntityRegistry(), ClassLookupFactory())

    def add_factory(self, factory: EntityFactory) -> FactoryChain:
        """Append a factory to the chain.

        Args:
            factory: Factory to add.

        Returns:
            Self for method chaining.
        """
        with self._lock:
            self._factories.append(factory)
        return self

    @property
    def factories(self) -> list[EntityFactory]:
        """Factories in lookup order."""
        return list(self._factories)

    @property
    def entity_registry(self) -> EntityFactory | None:
        """Get the first EntityRegistry in the chain (convenience method)."""
        from .factories import EntityRegistry

        for factory in self._factories:
            if isinstance(factory, EntityRegistry):
                return factory
        return None

    def register(self, identifier: str, entity: Any) -> FactoryChain:
        """Register an entity directly (convenience method for EntityRegistry).

        Args:
            identifier: Entity identifier.
            entity: Entity class or factory function.

        Returns:
            Self for method chaining.

        Raises:
            RuntimeError: If no EntityRegistry in chain.
        """
        registry = self.entity_registry
        if registry is None:
            raise RuntimeError("No EntityRegistry in chain")

        registry.register(identifier, entity)  # type: ignore[attr-defined]
        return self

    def exists(self, identifier: str) -> bool:
        return self._find(identifier) is not None

    def create(self, identifier: str) -> Any:
        """Build the entity with the first factory that knows it.

        Raises:
            EntityNotFoundError: If no factory in the chain knows the identifier.
        """
        factory = self._find(identifier)
        if factory is None:
            log_debug(f"FactoryChain: No factory could build '{identifier}'")
            raise EntityNotFoundError.for_identifier(identifier)
        return factory.create(identifier)

    def registered_identifiers(self) -> list[str]:
        """Get all registered identifiers across all factories."""
        identifiers: list[str] = []
        for factory in self._factories:
            for identifier in factory.registered_identifiers():
                if identifier not in identifiers:
                    identifiers.append(identifier)
        return identifiers

    def __len__(self) -> int:
        """Return number of factories in chain."""
        return len(self._factories)

    def _find(self, identifier: str) -> EntityFactory | None:
        for factory in self._factories:
            if factory.exists(identifier):
                return factory
        return None

"""Abstract base class for entity factories.

An entity factory is the resolver's only way to turn an identifier
(``"App\\\\Models\\\\User"``) into an object. It answers two questions:

1. exists() - Is there a constructible entity under this identifier?
2. create() - Build a fresh instance of it.

The resolver never caches instances; create() is called every time a
binder needs one.

Example Implementation:
    class SettingsFactory(EntityFactory):
        def exists(self, identifier: str) -> bool:
            return identifier == "App\\\\Settings"

        def create(self, identifier: str) -> Any:
            if not self.exists(identifier):
                raise EntityNotFoundError.for_identifier(identifier)
            return Settings.load()
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class EntityFactory(ABC):
    """Abstract base class for entity factories.

    Defines the contract between the BindingResolver and whatever
    builds entities in the host application.
    """

    @abstractmethod
    def exists(self, identifier: str) -> bool:
        """Quick check whether an entity is registered under ``identifier``.

        Args:
            identifier: Fully qualified entity identifier.

        Returns:
            True if create() would be able to build it.
        """
        ...

    @abstractmethod
    def create(self, identifier: str) -> Any:
        """Build a fresh instance of the entity.

        Args:
            identifier: Fully qualified entity identifier.

        Returns:
            The new instance.

        Raises:
            EntityNotFoundError: If nothing is registered under ``identifier``.
        """
        ...

    def registered_identifiers(self) -> list[str]:
        """Return all identifiers this factory knows about.

        Used for debugging and introspection. Inferential factories
        return an empty list.

        Returns:
            List of identifiers.
        """
        return []

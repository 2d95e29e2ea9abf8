"""Explicit entity registry.

The registry maps identifiers to entity classes (or zero-argument
factory functions) registered at application startup. It is the
default way to make entities visible to implicit and explicit bindings
without reflecting over modules.

Example:
    >>> registry = EntityRegistry()
    >>> registry.register("App\\\\Models\\\\User", UserRepository)
    >>> registry.exists("App\\\\Models\\\\User")
    True
    >>> user_repo = registry.create("App\\\\Models\\\\User")
    >>> assert isinstance(user_repo, UserRepository)
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from ...exceptions import EntityNotFoundError, InvalidConfigurationError
from ...logging import log_debug
from ..base_factory import EntityFactory


class EntityRegistry(EntityFactory):
    """Factory for explicitly registered entities.

    Supports registering:
    - Entity classes (instantiated with no arguments on create)
    - Factory functions (called with no arguments on create)

    Every create() call builds a new instance.

    Thread-safe for concurrent registration and creation.
    """

    def __init__(
        self, entities: Mapping[str, type | Callable[[], Any]] | None = None
    ) -> None:
        """Initialize the registry.

        Args:
            entities: Optional initial identifier -> class/factory mapping.
        """
        self._entities: dict[str, type | Callable[[], Any]] = {}
        self._lock = threading.RLock()
        if entities:
            self.register_many(entities.items())

    def exists(self, identifier: str) -> bool:
        """Check if an entity is registered under ``identifier``."""
        return identifier in self._entities

    def create(self, identifier: str) -> Any:
        """Build a fresh instance of a registered entity.

        Args:
            identifier: Registered identifier.

        Returns:
            New entity instance.

        Raises:
            EntityNotFoundError: If the identifier is not registered.
        """
        entry = self._entities.get(identifier)
        if entry is None:
            raise EntityNotFoundError.for_identifier(identifier)
        return entry()

    def register(self, identifier: str, entity: type | Callable[[], Any]) -> None:
        """Register an entity class or factory function.

        Registering an identifier twice replaces the earlier entry.

        Args:
            identifier: Identifier the resolver will look up.
            entity: Class or zero-argument callable producing an instance.

        Raises:
            InvalidConfigurationError: If the identifier is empty or the
                entity is not callable.
        """
        if not isinstance(identifier, str) or not identifier:
            raise InvalidConfigurationError(
                "Route-Model-Binding : Entity identifier must be a non-empty string"
            )
        if not callable(entity):
            raise InvalidConfigurationError(
                f"Route-Model-Binding : Entity for [{identifier}] must be a class "
                "or a factory function"
            )
        with self._lock:
            self._entities[identifier] = entity
        log_debug(f"EntityRegistry: Registered '{identifier}'")

    def register_many(
        self, entities: Iterable[tuple[str, type | Callable[[], Any]]]
    ) -> None:
        """Register several ``(identifier, entity)`` pairs."""
        for identifier, entity in entities:
            self.register(identifier, entity)

    def unregister(self, identifier: str) -> bool:
        """Unregister an entity.

        Args:
            identifier: Identifier to remove.

        Returns:
            True if the entity was removed, False if not found.
        """
        with self._lock:
            if identifier in self._entities:
                del self._entities[identifier]
                return True
            return False

    def registered_identifiers(self) -> list[str]:
        """Return all registered identifiers in registration order."""
        return list(self._entities.keys())

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._entities

    def __len__(self) -> int:
        return len(self._entities)

"""pytest configuration and fixtures for route_binding tests.

This module provides shared fixtures for testing the binding resolver,
including a fresh EntityRegistry, a resolver wired to it, mock entities
that record the lookups made against them, and a sample wildcard map.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import pytest

from route_binding import BindingResolver, EntityRegistry

MockEntityFactory = Callable[..., MagicMock]


@pytest.fixture
def registry() -> EntityRegistry:
    """Provide an empty EntityRegistry."""
    return EntityRegistry()


@pytest.fixture
def resolver(registry: EntityRegistry) -> BindingResolver:
    """Provide a BindingResolver backed by the registry fixture."""
    return BindingResolver(registry)


@pytest.fixture
def mock_entity(registry: EntityRegistry) -> MockEntityFactory:
    """Provide a builder for mock entities registered in the registry.

    The built mock supports the default route-key lookup:
    ``where(route_key, value).first_or_fail()`` returns ``result``, or
    raises ``error`` when given. The same mock instance is returned by
    every create() call so tests can assert on it.
    """

    def build(
        identifier: str,
        *,
        route_key: str = "route_key",
        result: Any = "bind_result",
        error: Exception | None = None,
    ) -> MagicMock:
        entity = MagicMock(name=identifier)
        entity.get_route_key_name.return_value = route_key
        if error is not None:
            entity.where.return_value.first_or_fail.side_effect = error
        else:
            entity.where.return_value.first_or_fail.return_value = result
        registry.register(identifier, lambda: entity)
        return entity

    return build


@pytest.fixture
def model(mock_entity: MockEntityFactory) -> MagicMock:
    """Mock entity registered as App\\Models\\Model."""
    return mock_entity(r"App\Models\Model")


@pytest.fixture
def my_test_repo(mock_entity: MockEntityFactory) -> MagicMock:
    """Mock entity registered as App\\Repositories\\MyTestRepo."""
    return mock_entity(r"App\Repositories\MyTestRepo")


@pytest.fixture
def wildcards() -> dict[str, str]:
    """Provide a wildcard map no binding applies to."""
    return {
        "zero": "val zero",
        "one": "val one",
        "two": "val two",
        "three": "val three",
    }

"""Built-in entity factory implementations.

This module provides the factories the resolver can construct entities with:
- EntityRegistry: explicit identifier -> class mappings
- ClassLookupFactory: class path inference via importlib
- CallableEntityFactory: adapter for a host container's ``make`` function
"""

from __future__ import annotations

from .callable_factory import CallableEntityFactory
from .class_lookup import ClassLookupFactory
from .entity_registry import EntityRegistry

__all__ = [
    "EntityRegistry",
    "ClassLookupFactory",
    "CallableEntityFactory",
]

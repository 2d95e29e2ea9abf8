r"""Binding registry infrastructure.

This package holds the building blocks the BindingResolver works with:

Binders:
- CallableBinder / EntityBinder / EntityMethodBinder / InvalidBinder,
  produced by ``parse_binder`` from user input.

Binding definitions:
- ExplicitBinding, ImplicitBindingRule, CompositeBinding

Entity factories (the resolver's only way to build entities):
- EntityRegistry: explicit identifier -> class mappings
- ClassLookupFactory: class path inference via importlib
- CallableEntityFactory: adapter for a host container function
- FactoryChain: several factories tried in order

Invocation helpers:
- EntityMethodCall: ``instance.method`` for ``Class@method`` binders
- DefaultLookupResolver: ``where(route_key, value).first_or_fail()``

Custom factories extend EntityFactory:

    from route_binding.registry import EntityFactory

    class ContainerFactory(EntityFactory):
        def exists(self, identifier):
            return container.has(identifier)

        def create(self, identifier):
            return container.make(identifier)
"""

from __future__ import annotations

from .base_factory import EntityFactory
from .binder import (
    Binder,
    CallableBinder,
    EntityBinder,
    EntityMethodBinder,
    InvalidBinder,
    parse_binder,
)
from .binding_definition import (
    CompositeBinding,
    ErrorHandler,
    ExplicitBinding,
    ImplicitBindingRule,
    capitalize_key,
)
from .factories import CallableEntityFactory, ClassLookupFactory, EntityRegistry
from .factory_chain import FactoryChain
from .lookup import DefaultLookupResolver, RouteBindable, RouteQuery
from .method_dispatch import EntityMethodCall

__all__ = [
    # Binders
    "Binder",
    "CallableBinder",
    "EntityBinder",
    "EntityMethodBinder",
    "InvalidBinder",
    "parse_binder",
    # Binding definitions
    "ErrorHandler",
    "ExplicitBinding",
    "ImplicitBindingRule",
    "CompositeBinding",
    "capitalize_key",
    # Entity factories
    "EntityFactory",
    "EntityRegistry",
    "ClassLookupFactory",
    "CallableEntityFactory",
    "FactoryChain",
    # Invocation helpers
    "EntityMethodCall",
    "DefaultLookupResolver",
    "RouteBindable",
    "RouteQuery",
]

"""
Route Binding

This package resolves the wildcard values of a matched route into
runtime values (typically entities looked up by route key) before the
route handler is invoked.

Example:
    >>> import route_binding
    >>> from route_binding import BindingResolver, EntityRegistry
    >>>
    >>> registry = EntityRegistry({"App\\\\Models\\\\User": UserRepository})
    >>> resolver = BindingResolver(registry)

    >>> # Bind every wildcard to an entity of the same name
    >>> resolver.implicit_bind("App\\\\Models")

    >>> # Explicit bindings take precedence over implicit ones
    >>> resolver.bind("slug", lambda value: value.lower())

    >>> # Composite bindings resolve several wildcards together
    >>> resolver.composite_bind(["post", "comment"], find_post_comment)

    >>> resolver.resolve_bindings({"user": "42", "slug": "Hello"})
    {'user': {'id': '42', ...}, 'slug': 'hello'}

    >>> # Use structured logging
    >>> route_binding.log_info("Routes loaded", {"count": "12"})
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from route_binding.bootstrap import bootstrap_dispatcher, bootstrap_resolver
from route_binding.config import BindingsConfig, find_bindings_config
from route_binding.dispatcher import (
    BindingDispatcher,
    RouteMatch,
    RouteMatcher,
    RouteStatus,
)
from route_binding.exceptions import (
    BindingConfigError,
    CompositeShapeError,
    EntityNotFoundError,
    InvalidConfigurationError,
    RouteBindingError,
)
from route_binding.logging import (
    log_debug,
    log_error,
    log_info,
    log_trace,
    log_warn,
)
from route_binding.registry import (
    CallableBinder,
    CallableEntityFactory,
    ClassLookupFactory,
    CompositeBinding,
    DefaultLookupResolver,
    EntityBinder,
    EntityFactory,
    EntityMethodBinder,
    EntityMethodCall,
    EntityRegistry,
    ExplicitBinding,
    FactoryChain,
    ImplicitBindingRule,
    RouteBindable,
    parse_binder,
)
from route_binding.repository import InMemoryQuery, InMemoryRepository
from route_binding.resolver import BindingResolver
from route_binding.types import BindingInfo, BindingKind, LogContext

try:
    __version__ = version("route-binding")
except PackageNotFoundError:
    __version__ = "0.0.0+local"


__all__ = [
    # Version
    "__version__",
    # Resolver
    "BindingResolver",
    # Bindings
    "ExplicitBinding",
    "ImplicitBindingRule",
    "CompositeBinding",
    "CallableBinder",
    "EntityBinder",
    "EntityMethodBinder",
    "parse_binder",
    # Entity factories
    "EntityFactory",
    "EntityRegistry",
    "ClassLookupFactory",
    "CallableEntityFactory",
    "FactoryChain",
    "EntityMethodCall",
    "DefaultLookupResolver",
    "RouteBindable",
    # Repositories
    "InMemoryRepository",
    "InMemoryQuery",
    # Dispatcher
    "BindingDispatcher",
    "RouteMatch",
    "RouteMatcher",
    "RouteStatus",
    # Configuration and bootstrap
    "BindingsConfig",
    "find_bindings_config",
    "bootstrap_resolver",
    "bootstrap_dispatcher",
    # Types
    "BindingInfo",
    "BindingKind",
    "LogContext",
    # Exceptions
    "RouteBindingError",
    "InvalidConfigurationError",
    "EntityNotFoundError",
    "CompositeShapeError",
    "BindingConfigError",
    # Logging
    "log_error",
    "log_warn",
    "log_info",
    "log_debug",
    "log_trace",
]

"""Resolver bootstrap.

This module provides the high-level API for building a BindingResolver
at application startup, optionally applying a declarative YAML
configuration, and attaching it to a dispatcher.

Example:
    >>> from route_binding import EntityRegistry, bootstrap_resolver
    >>>
    >>> registry = EntityRegistry({"App\\\\Models\\\\User": UserRepository})
    >>> resolver = bootstrap_resolver(registry, config_path="config/route_bindings.yaml")
    >>> resolver.resolve_bindings({"user": "42"})
    {'user': {...}}
"""

from __future__ import annotations

from pathlib import Path

from .config import BindingsConfig, find_bindings_config
from .dispatcher import BindingDispatcher, RouteMatcher, RoutesResolver
from .logging import log_info
from .registry.base_factory import EntityFactory
from .resolver import DEFAULT_NAMESPACE_SEPARATOR, BindingResolver


def bootstrap_resolver(
    entity_factory: EntityFactory,
    config: BindingsConfig | None = None,
    config_path: str | Path | None = None,
    *,
    discover: bool = False,
) -> BindingResolver:
    """Build a BindingResolver and apply configuration.

    Args:
        entity_factory: Factory used to build entities.
        config: Already-loaded configuration. Takes precedence over
            ``config_path``.
        config_path: YAML file to load configuration from.
        discover: When no config or path is given, look for the
            configuration file with find_bindings_config().

    Returns:
        The configured resolver.

    Raises:
        BindingConfigError: If the configuration file is invalid.
        InvalidConfigurationError: If a configured binding is invalid.
    """
    if config is None:
        if config_path is None and discover:
            config_path = find_bindings_config()
        if config_path is not None:
            config = BindingsConfig.from_yaml(config_path)

    separator = config.namespace_separator if config is not None else DEFAULT_NAMESPACE_SEPARATOR
    resolver = BindingResolver(entity_factory, namespace_separator=separator)

    if config is not None:
        config.apply(resolver)

    log_info("Binding resolver ready", {"registrations": len(resolver)})
    return resolver


def bootstrap_dispatcher(
    resolver: BindingResolver,
    matcher: RouteMatcher | None = None,
    routes_resolver: RoutesResolver | None = None,
) -> BindingDispatcher:
    """Create a BindingDispatcher wired to ``resolver``.

    Args:
        resolver: Binding resolver to attach.
        matcher: Route matcher, if routes are already known.
        routes_resolver: Callable providing the matcher lazily on dispatch.

    Returns:
        The dispatcher.
    """
    return BindingDispatcher(
        matcher=matcher,
        binding_resolver=resolver,
        routes_resolver=routes_resolver,
    )


__all__ = [
    "bootstrap_resolver",
    "bootstrap_dispatcher",
]

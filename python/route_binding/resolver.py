r"""Binding Resolver - Route Parameter Binding.

The BindingResolver turns the raw wildcard values of a matched route
into runtime values (usually entities looked up by route key) before
the route handler sees them.

Three kinds of bindings compete for each request:

1. Composite bindings - keyed to the exact ordered list of wildcards of
   the route. A match replaces the whole parameter map and skips
   everything else.
2. Explicit bindings - one binder per wildcard name.
3. Implicit rules - namespace + prefix/suffix patterns tried against
   every wildcard name that has no explicit binding. First rule whose
   candidate entity exists wins.

Binders:
- a callable:            called with the wildcard value(s)
- "Class":               default route-key lookup on a fresh instance
- "Class@method":        ``method`` called on a fresh instance

Error Handling:
Every failure raised while a resolved binder runs can be recovered by
the binding's error handler, whose return value is used as the bound
value. Without a handler the failure aborts the whole call and no
parameter map is returned.

Usage:
    registry = EntityRegistry({
        "App\\Models\\User": UserRepository,
        "App\\Models\\Post": PostRepository,
    })
    resolver = BindingResolver(registry)

    # Bind every wildcard to App\Models\{Wildcard} when it exists
    resolver.implicit_bind("App\\Models")

    # Explicit bindings win over implicit ones
    resolver.bind("article", lambda slug: articles.find_by_slug(slug))
    resolver.bind("user", "App\\Models\\User", lambda e: guest_user())

    # Composite bindings resolve several wildcards together
    resolver.composite_bind(["post", "comment"], "App\\Models\\Post@findWithComment")

    params = resolver.resolve_bindings({"user": "42", "post": "hello-world"})
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from .exceptions import CompositeShapeError, EntityNotFoundError, InvalidConfigurationError
from .logging import log_debug, log_trace, log_warn
from .registry.base_factory import EntityFactory
from .registry.binder import (
    Binder,
    CallableBinder,
    EntityBinder,
    EntityMethodBinder,
    parse_binder,
)
from .registry.binding_definition import (
    CompositeBinding,
    ErrorHandler,
    ExplicitBinding,
    ImplicitBindingRule,
)
from .registry.lookup import DefaultLookupResolver
from .registry.method_dispatch import EntityMethodCall
from .types import BindingInfo, BindingKind, LogContext

DEFAULT_NAMESPACE_SEPARATOR = "\\"


def invoke_with_handler(
    fn: Callable[..., Any],
    args: Sequence[Any],
    error_handler: ErrorHandler | None,
    context: LogContext | None = None,
) -> Any:
    """Call a resolved binder, routing failures to its error handler.

    Args:
        fn: The resolved binder callable.
        args: Positional arguments for the call.
        error_handler: Recovery callback, or None to re-raise.
        context: Log context describing the binding.

    Returns:
        The binder's result, or the error handler's result on failure.
        The handler's result is not validated.
    """
    try:
        return fn(*args)
    except Exception as e:
        if error_handler is None:
            log_debug(f"BindingResolver: Unrecovered binder failure: {e!r}", context)
            raise
        log_warn(f"BindingResolver: Binder failed, using error handler: {e!r}", context)
        return error_handler(e)


class BindingResolver:
    """Resolves route wildcards to bound values.

    Registries are filled at application startup and are read-only
    afterwards. Registration is guarded by a lock and resolve_bindings()
    works on a snapshot, so a shared resolver can serve concurrent
    requests.

    Attributes:
        entity_factory: Factory used to build entity instances by identifier.
        namespace_separator: Joins implicit rule namespaces and class names.
    """

    def __init__(
        self,
        entity_factory: EntityFactory,
        *,
        namespace_separator: str = DEFAULT_NAMESPACE_SEPARATOR,
    ) -> None:
        """Initialize an empty resolver.

        Args:
            entity_factory: Factory used to build entities. Wrap a container's
                ``make``/``has`` pair in a CallableEntityFactory.
            namespace_separator: Separator placed between an implicit rule's
                namespace and the candidate class name.

        Raises:
            InvalidConfigurationError: If ``entity_factory`` is not an EntityFactory.
        """
        if not isinstance(entity_factory, EntityFactory):
            raise InvalidConfigurationError(
                "Route-Model-Binding : entity_factory must be an EntityFactory; "
                "wrap plain callables in CallableEntityFactory(make, exists)"
            )
        self._factory = entity_factory

        self._namespace_separator = namespace_separator
        self._bindings: dict[str, ExplicitBinding] = {}
        self._implicit_bindings: list[ImplicitBindingRule] = []
        self._composite_bindings: list[CompositeBinding] = []
        self._lock = threading.RLock()

    @property
    def entity_factory(self) -> EntityFactory:
        return self._factory

    @property
    def namespace_separator(self) -> str:
        return self._namespace_separator

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def register_explicit(
        self,
        key: str,
        binder: Any,
        error_handler: ErrorHandler | None = None,
    ) -> BindingResolver:
        r"""Explicitly bind a wildcard to a binder.

        A second registration for the same key replaces the first. The
        binder is only parsed here; entity names are resolved when the
        key is hit.

        Args:
            key: Wildcard name.
            binder: Callable, ``"Class"`` or ``"Class@method"`` string.
            error_handler: Called with the exception if the binder fails.

        Returns:
            Self for method chaining.

        Example:
            >>> resolver.bind("user", "App\\Models\\User")
            >>> resolver.bind("article", lambda slug: Article.by_slug(slug))
            >>> resolver.bind("post", "App\\Models\\Post", lambda e: None)
        """
        self._validate_key(key)
        self._validate_error_handler(error_handler)

        binding = ExplicitBinding(
            key=key, binder=parse_binder(binder), error_handler=error_handler
        )
        with self._lock:
            self._bindings[key] = binding

        log_debug(
            f"BindingResolver: Explicit binding '{key}' -> {binding.binder.describe()}",
            LogContext(parameter=key, binding_kind=BindingKind.EXPLICIT),
        )
        return self

    def register_implicit(
        self,
        namespace: str,
        prefix: str = "",
        suffix: str = "",
        method: str | None = None,
        error_handler: ErrorHandler | None = None,
    ) -> BindingResolver:
        r"""Implicitly bind every wildcard to entities in a namespace.

        For a wildcard ``key`` the candidate identifier is
        ``namespace + separator + prefix + Key + suffix``. Rules are tried
        in registration order and the first candidate that exists wins.

        Args:
            namespace: Namespace the entities live in.
            prefix: Added before the capitalized wildcard name.
            suffix: Added after the capitalized wildcard name.
            method: Method called on the instance with the value; omit it
                to use the default route-key lookup.
            error_handler: Called with the exception if the binder fails.

        Returns:
            Self for method chaining.

        Example:
            >>> resolver.implicit_bind("App\\Models")
            >>> resolver.implicit_bind("App\\Repositories", "", "Repository")
            >>> resolver.implicit_bind("App\\Repositories", "", "Repository", "findForRoute")
        """
        if not isinstance(namespace, str) or not namespace:
            raise InvalidConfigurationError(
                "Route-Model-Binding : Invalid namespace value, Expected non-empty string"
            )
        if not isinstance(prefix, str) or not isinstance(suffix, str):
            raise InvalidConfigurationError(
                "Route-Model-Binding : Invalid prefix/suffix value, Expected string"
            )
        if method is not None and not isinstance(method, str):
            raise InvalidConfigurationError(
                "Route-Model-Binding : Invalid method value, Expected string or None"
            )
        self._validate_error_handler(error_handler)

        rule = ImplicitBindingRule(
            namespace=namespace,
            prefix=prefix,
            suffix=suffix,
            method=method or None,
            error_handler=error_handler,
        )
        with self._lock:
            self._implicit_bindings.append(rule)

        log_debug(
            f"BindingResolver: Implicit rule {rule.pattern(self._namespace_separator)}",
            LogContext(binding_kind=BindingKind.IMPLICIT, identifier=namespace),
        )
        return self

    def register_composite(
        self,
        keys: Sequence[str],
        binder: Any,
        error_handler: ErrorHandler | None = None,
    ) -> BindingResolver:
        """Bind an exact ordered set of wildcards together.

        The binder receives the wildcard values positionally, in ``keys``
        order, and must return a list or tuple of the same length.

        Args:
            keys: Two or more wildcard names, in route order.
            binder: Callable or ``"Class@method"`` string.
            error_handler: Called with the exception if the binder fails;
                its return value must have the same shape.

        Returns:
            Self for method chaining.

        Raises:
            InvalidConfigurationError: If ``keys`` is not a list of at least
                two names, or ``binder`` is not a callable or a
                ``"Class@method"`` string.

        Example:
            >>> def find_comment(post, comment):
            ...     post = Post.find_or_fail(post)
            ...     return [post, post.comments.find_or_fail(comment)]
            >>> resolver.composite_bind(["post", "comment"], find_comment)
        """
        if isinstance(keys, str) or not isinstance(keys, (list, tuple)):
            raise InvalidConfigurationError(
                "Route-Model-Binding : Invalid keys value, Expected list of wildcards names"
            )
        if len(keys) < 2:
            raise InvalidConfigurationError(
                "Route-Model-Binding : Invalid keys value, Expected list of more than one wildcard"
            )
        for key in keys:
            self._validate_key(key)

        parsed = parse_binder(binder)
        if not isinstance(parsed, (CallableBinder, EntityMethodBinder)):
            raise InvalidConfigurationError(
                "Route-Model-Binding (composite-bind) : Binder must be a callable "
                "or a 'Class@method' string"
            )
        self._validate_error_handler(error_handler)

        binding = CompositeBinding(
            keys=tuple(keys), binder=parsed, error_handler=error_handler
        )
        with self._lock:
            self._composite_bindings.append(binding)

        log_debug(
            f"BindingResolver: Composite binding {list(binding.keys)} -> {parsed.describe()}",
            LogContext(binding_kind=BindingKind.COMPOSITE),
        )
        return self

    bind = register_explicit
    implicit_bind = register_implicit
    composite_bind = register_composite

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def resolve_bindings(self, params: Mapping[str, Any] | None) -> dict[str, Any]:
        """Resolve bindings for route parameters.

        Args:
            params: Wildcard name -> raw value, in route order.

        Returns:
            New mapping with the same keys in the same order and bound
            values substituted. The input is never mutated.

        Raises:
            CompositeShapeError: If a composite binder returns the wrong shape.
            EntityNotFoundError: If a binder names an unknown entity, or an
                unrecovered lookup finds nothing.
            InvalidConfigurationError: If an explicit binder has an invalid shape.
            Exception: Any unrecovered failure raised by a binder.
        """
        if not params:
            return {}

        with self._lock:
            bindings = dict(self._bindings)
            implicit_bindings = list(self._implicit_bindings)
            composite_bindings = list(self._composite_bindings)

        # First check if the parameters as a whole match a composite binding
        if len(params) > 1 and composite_bindings:
            resolved = self._resolve_composite_binding(params, composite_bindings)
            if resolved is not None:
                return resolved

        if not bindings and not implicit_bindings:
            return dict(params)

        return {
            key: self._resolve_binding(key, value, bindings, implicit_bindings)
            for key, value in params.items()
        }

    def _resolve_composite_binding(
        self,
        params: Mapping[str, Any],
        composite_bindings: list[CompositeBinding],
    ) -> dict[str, Any] | None:
        """Resolve the first composite binding matching the wildcard names.

        Returns:
            The resolved mapping, or None if no composite binding matches.
        """
        keys = tuple(params.keys())

        for binding in composite_bindings:
            if not binding.matches(keys):
                continue

            context = LogContext(
                parameter=",".join(keys),
                binding_kind=BindingKind.COMPOSITE,
                identifier=binding.binder.describe(),
            )
            log_debug(f"BindingResolver: Composite match for {list(keys)}", context)

            fn, args = self._resolve_binder(binding.binder, tuple(params.values()))
            result = invoke_with_handler(fn, args, binding.error_handler, context)

            if not isinstance(result, (list, tuple)):
                raise CompositeShapeError(expected=len(keys), actual=None)
            if len(result) != len(keys):
                raise CompositeShapeError(expected=len(keys), actual=len(result))

            return dict(zip(keys, result))

        return None

    def _resolve_binding(
        self,
        key: str,
        value: Any,
        bindings: dict[str, ExplicitBinding],
        implicit_bindings: list[ImplicitBindingRule],
    ) -> Any:
        """Resolve one wildcard through its explicit binding or implicit rules."""
        explicit = bindings.get(key)
        if explicit is not None:
            context = LogContext(
                parameter=key,
                binding_kind=BindingKind.EXPLICIT,
                identifier=explicit.binder.describe(),
            )
            log_trace(f"BindingResolver: Explicit binding for '{key}'", context)
            fn, args = self._resolve_binder(explicit.binder, (value,))
            return invoke_with_handler(fn, args, explicit.error_handler, context)

        for rule in implicit_bindings:
            identifier = rule.candidate_identifier(key, self._namespace_separator)
            if not self._factory.exists(identifier):
                continue

            context = LogContext(
                parameter=key,
                binding_kind=BindingKind.IMPLICIT,
                identifier=identifier,
            )
            log_trace(f"BindingResolver: Implicit binding '{key}' -> {identifier}", context)

            # First structural match commits, even if invoking it fails
            instance = self._factory.create(identifier)
            if rule.method:
                fn: Callable[..., Any] = EntityMethodCall(instance, rule.method)
                args: tuple[Any, ...] = (value,)
            else:
                fn, args = DefaultLookupResolver(instance, value), ()

            return invoke_with_handler(fn, args, rule.error_handler, context)

        return value

    def _resolve_binder(
        self, binder: Binder, values: tuple[Any, ...]
    ) -> tuple[Callable[..., Any], tuple[Any, ...]]:
        """Turn a binder into a callable and the arguments to call it with.

        Args:
            binder: Parsed binder.
            values: Wildcard value(s) the binder applies to.

        Returns:
            Tuple of (callable, positional arguments).

        Raises:
            EntityNotFoundError: If the binder names an unknown entity.
            InvalidConfigurationError: If the binder has an invalid shape.
        """
        if isinstance(binder, CallableBinder):
            return binder.callback, values

        if isinstance(binder, EntityBinder):
            instance = self._create_entity(binder.identifier)
            # The lookup resolver carries the value, it is called without args
            return DefaultLookupResolver(instance, values[0]), ()

        if isinstance(binder, EntityMethodBinder):
            instance = self._create_entity(binder.identifier)
            return EntityMethodCall(instance, binder.method), values

        raise InvalidConfigurationError(
            "Route-Model-Binding : Invalid binder value, Expected callable or string"
        )

    def _create_entity(self, identifier: str) -> Any:
        if not self._factory.exists(identifier):
            raise EntityNotFoundError.for_identifier(identifier)
        return self._factory.create(identifier)

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    def has_bindings(self) -> bool:
        """Check if any binding of any kind is registered."""
        return bool(self._bindings or self._implicit_bindings or self._composite_bindings)

    def explicit_keys(self) -> list[str]:
        """Wildcard names with an explicit binding, in registration order."""
        return list(self._bindings.keys())

    def explicit_binding(self, key: str) -> ExplicitBinding | None:
        """Get the explicit binding registered for ``key``."""
        return self._bindings.get(key)

    def implicit_rules(self) -> list[ImplicitBindingRule]:
        """Implicit rules in the order they are tried."""
        return list(self._implicit_bindings)

    def composite_bindings(self) -> list[CompositeBinding]:
        """Composite bindings in the order they are tried."""
        return list(self._composite_bindings)

    def binding_info(self) -> list[BindingInfo]:
        """Describe every registration, for debugging.

        Returns:
            BindingInfo records: composite first, then explicit, then
            implicit, each group in lookup order.
        """
        with self._lock:
            composite = [
                BindingInfo(
                    kind=BindingKind.COMPOSITE,
                    keys=list(binding.keys),
                    binder=binding.binder.describe(),
                    has_error_handler=binding.error_handler is not None,
                )
                for binding in self._composite_bindings
            ]
            explicit = [
                BindingInfo(
                    kind=BindingKind.EXPLICIT,
                    keys=[binding.key],
                    binder=binding.binder.describe(),
                    has_error_handler=binding.error_handler is not None,
                )
                for binding in self._bindings.values()
            ]
            implicit = [
                BindingInfo(
                    kind=BindingKind.IMPLICIT,
                    binder=rule.method or "<default lookup>",
                    has_error_handler=rule.error_handler is not None,
                    pattern=rule.pattern(self._namespace_separator),
                )
                for rule in self._implicit_bindings
            ]
        return composite + explicit + implicit

    def clear(self) -> None:
        """Remove every registration."""
        with self._lock:
            self._bindings.clear()
            self._implicit_bindings.clear()
            self._composite_bindings.clear()

    def __len__(self) -> int:
        """Return the total number of registrations."""
        return (
            len(self._bindings)
            + len(self._implicit_bindings)
            + len(self._composite_bindings)
        )

    def __repr__(self) -> str:
        return (
            f"BindingResolver(explicit={len(self._bindings)}, "
            f"implicit={len(self._implicit_bindings)}, "
            f"composite={len(self._composite_bindings)})"
        )

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    @staticmethod
    def _validate_key(key: Any) -> None:
        if not isinstance(key, str) or not key:
            raise InvalidConfigurationError(
                "Route-Model-Binding : Invalid wildcard name, Expected non-empty string"
            )

    @staticmethod
    def _validate_error_handler(error_handler: Any) -> None:
        if error_handler is not None and not callable(error_handler):
            raise InvalidConfigurationError(
                "Route-Model-Binding : Invalid error handler, Expected callable or None"
            )


__all__ = [
    "BindingResolver",
    "DEFAULT_NAMESPACE_SEPARATOR",
    "invoke_with_handler",
]

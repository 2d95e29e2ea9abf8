"""Router dispatcher integration.

BindingDispatcher sits between the host router and its route matcher.
It lets the matcher do the matching, then hands the extracted wildcard
values of a found route to a BindingResolver and substitutes the result
before the route handler is invoked.

Routes are often registered after the dispatcher is created, so the
matcher can be supplied lazily through a routes resolver: a zero-argument
callable returning a fresh matcher, called on every dispatch.

Example:
    >>> dispatcher = BindingDispatcher(binding_resolver=resolver)
    >>> dispatcher.set_routes_resolver(lambda: router.build_matcher())
    >>> match = dispatcher.dispatch("GET", "/users/42")
    >>> match.params
    {'user': <User id=42>}
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from .exceptions import InvalidConfigurationError
from .logging import log_debug

if TYPE_CHECKING:
    from .resolver import BindingResolver


class RouteStatus(str, Enum):
    """Outcome of matching a request against the route table."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    METHOD_NOT_ALLOWED = "method_not_allowed"


@dataclass(frozen=True)
class RouteMatch:
    """Result of matching a request.

    Attributes:
        status: Match outcome.
        handler: Route handler (FOUND only).
        params: Wildcard name -> value (FOUND only, may be empty or None).
        allowed_methods: Allowed HTTP methods (METHOD_NOT_ALLOWED only).
    """

    status: RouteStatus
    handler: Any = None
    params: Mapping[str, Any] | None = None
    allowed_methods: tuple[str, ...] = ()

    @property
    def found(self) -> bool:
        return self.status is RouteStatus.FOUND


@runtime_checkable
class RouteMatcher(Protocol):
    """Route matching algorithm (provided by the host router)."""

    def match(self, http_method: str, uri: str) -> RouteMatch:
        """Match a request to a route."""
        ...


RoutesResolver = Callable[[], RouteMatcher]


class BindingDispatcher:
    """Route dispatcher that resolves bindings for matched routes.

    Attributes:
        matcher: Matcher used when no routes resolver is set.
        binding_resolver: Resolver applied to found routes' wildcards.
    """

    def __init__(
        self,
        matcher: RouteMatcher | None = None,
        binding_resolver: BindingResolver | None = None,
        routes_resolver: RoutesResolver | None = None,
    ) -> None:
        self._matcher = matcher
        self._binding_resolver = binding_resolver
        self._routes_resolver = routes_resolver

    @property
    def binding_resolver(self) -> BindingResolver | None:
        return self._binding_resolver

    def set_binding_resolver(self, binding_resolver: BindingResolver | None) -> None:
        """Attach (or detach, with None) the binding resolver."""
        self._binding_resolver = binding_resolver

    def set_routes_resolver(self, routes_resolver: RoutesResolver | None) -> None:
        """Set the callable that provides the matcher on each dispatch."""
        self._routes_resolver = routes_resolver

    def dispatch(self, http_method: str, uri: str) -> RouteMatch:
        """Match a request and resolve its wildcard bindings.

        Args:
            http_method: Request method.
            uri: Request path.

        Returns:
            The route match, with bound values substituted for FOUND routes.

        Raises:
            InvalidConfigurationError: If neither a matcher nor a routes
                resolver is configured.
            Exception: Any unrecovered binding failure.
        """
        # Routes may have been loaded after the dispatcher was created
        if self._routes_resolver is not None:
            self._matcher = self._routes_resolver()

        if self._matcher is None:
            raise InvalidConfigurationError(
                "BindingDispatcher: No route matcher or routes resolver configured"
            )

        match = self._matcher.match(http_method, uri)
        return self.resolve_match(match)

    def resolve_match(self, match: RouteMatch) -> RouteMatch:
        """Apply the binding resolver to a route match.

        Matches that were not found, carry no wildcards, or arrive while
        no resolver is attached are returned unchanged.
        """
        if not match.found or not match.params or self._binding_resolver is None:
            return match

        log_debug(
            f"BindingDispatcher: Resolving bindings for {list(match.params)}",
            {"handler": repr(match.handler)},
        )
        params = self._binding_resolver.resolve_bindings(match.params)
        return replace(match, params=params)


__all__ = [
    "BindingDispatcher",
    "RouteMatch",
    "RouteMatcher",
    "RouteStatus",
    "RoutesResolver",
]

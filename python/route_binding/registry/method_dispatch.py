"""Method dispatch wrapper for ``Class@method`` binders.

When a binder names a method (``"App\\\\Repos\\\\UserRepo@findForRoute"``),
or an implicit rule is registered with ``method="findForRoute"``, the
resolver wraps a fresh entity instance in an EntityMethodCall. Calling
the wrapper calls the named method with the wildcard value(s).

The method is looked up when the wrapper is called, not when it is
built, so a misspelled method name raises AttributeError inside the
error-handling protocol where the binding's error handler can see it.

Example:
    >>> class UserRepo:
    ...     def find_for_route(self, value):
    ...         return {"id": value}
    ...
    >>> call = EntityMethodCall(UserRepo(), "find_for_route")
    >>> call("42")
    {'id': '42'}
    >>> call.unwrap()
    <UserRepo object>
"""

from __future__ import annotations

from typing import Any


class EntityMethodCall:
    """Callable that forwards to a named method on an entity instance.

    Attributes:
        instance: The wrapped entity instance.
        method_name: The method name to invoke.
    """

    def __init__(self, instance: Any, method_name: str) -> None:
        """Initialize the wrapper.

        Args:
            instance: The entity instance to wrap.
            method_name: The method name to invoke on call.
        """
        self._instance = instance
        self._method_name = method_name

    @property
    def instance(self) -> Any:
        """Get the wrapped entity instance."""
        return self._instance

    @property
    def method_name(self) -> str:
        """Get the target method name."""
        return self._method_name

    def __call__(self, *args: Any) -> Any:
        """Invoke the target method on the wrapped instance.

        Raises:
            AttributeError: If the instance has no such method.
        """
        method = getattr(self._instance, self._method_name, None)
        if method is None or not callable(method):
            raise AttributeError(
                f"{self._instance.__class__.__name__} has no callable method "
                f"'{self._method_name}'"
            )
        return method(*args)

    def unwrap(self) -> Any:
        """Get the original unwrapped instance.

        Useful for testing and debugging.
        """
        return self._instance

    def __repr__(self) -> str:
        return (
            f"EntityMethodCall("
            f"{self._instance.__class__.__name__}, "
            f"method_name={self._method_name!r})"
        )

"""Class lookup factory.

This factory infers entity classes from identifiers using Python's
importlib. It handles ``module.path.ClassName`` identifiers, and also
accepts backslash-separated namespaces (``app\\models\\User``) by
normalising them to dots, so implicit rules written with the default
namespace separator work unchanged.

Example:
    >>> factory = ClassLookupFactory()
    >>> factory.exists("myapp.models.User")
    True
    >>> user_repo = factory.create("myapp.models.User")
    >>> assert user_repo.__class__.__name__ == "User"
"""

from __future__ import annotations

import importlib
import re
from typing import Any

from ...exceptions import EntityNotFoundError
from ..base_factory import EntityFactory


class ClassLookupFactory(EntityFactory):
    """Factory that imports entity classes from identifier strings.

    Inferential: any import problem means "no such entity", so implicit
    rules simply skip identifiers that do not import.

    The identifier must look like a dotted Python path (at least one dot);
    it exists when the module imports and the attribute is a class.
    """

    # Must have at least one dot
    CLASS_PATTERN = re.compile(
        r"^[a-zA-Z_][a-zA-Z0-9_]*(\.[a-zA-Z_][a-zA-Z0-9_]*)+$"
    )

    def exists(self, identifier: str) -> bool:
        """Check if the identifier imports to a class."""
        return self._import_class(identifier) is not None

    def create(self, identifier: str) -> Any:
        """Import the class and instantiate it without arguments.

        Raises:
            EntityNotFoundError: If the identifier does not import to a class.
        """
        entity_class = self._import_class(identifier)
        if entity_class is None:
            raise EntityNotFoundError.for_identifier(identifier)
        return entity_class()

    @staticmethod
    def normalize(identifier: str) -> str:
        """Convert a backslash-separated namespace into a dotted path."""
        return identifier.strip("\\").replace("\\", ".")

    def _import_class(self, identifier: str) -> type | None:
        """Import a class from a module path string.

        Args:
            identifier: Full class path (e.g., "module.ClassName").

        Returns:
            The class or None if not found.
        """
        class_path = self.normalize(identifier)
        if not self.CLASS_PATTERN.match(class_path):
            return None

        module_path, class_name = class_path.rsplit(".", 1)

        try:
            module = importlib.import_module(module_path)
        except ImportError:
            # Module not found - expected for non-existent paths
            return None

        entity_class = getattr(module, class_name, None)
        if not isinstance(entity_class, type):
            return None

        return entity_class

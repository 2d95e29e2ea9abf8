r"""Declarative binding configuration loaded from YAML.

Bindings that only use entity names (``"Class"`` / ``"Class@method"``)
can be declared in a YAML file instead of code. Error handlers are
callables and are attached in code.

File format:

    namespace_separator: "\\"
    explicit:
      - key: user
        binder: "App\\Models\\User"
      - key: cat
        binder: "App\\Models\\Cat@findCat"
    implicit:
      - namespace: "App\\Repos"
        suffix: "Repo"
        method: findForRoute
      - namespace: "App\\Models"
    composite:
      - keys: [post, comment]
        binder: "App\\Repos\\PostRepo@findWithComment"

The configuration file is located with this priority:
1. ROUTE_BINDING_CONFIG environment variable (explicit override)
2. WORKSPACE_PATH/config/route_bindings.yaml
3. Auto-detected workspace root + config/route_bindings.yaml
4. ./config/route_bindings.yaml

Example:
    >>> path = find_bindings_config()
    >>> if path:
    ...     BindingsConfig.from_yaml(path).apply(resolver)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import BindingConfigError
from .logging import log_debug, log_info, log_warn
from .registry.binder import METHOD_SEPARATOR

if TYPE_CHECKING:
    from .resolver import BindingResolver

CONFIG_ENV_VAR = "ROUTE_BINDING_CONFIG"
CONFIG_RELATIVE_PATH = Path("config") / "route_bindings.yaml"

# Workspace marker files for detecting project root
WORKSPACE_MARKERS = (
    "pyproject.toml",
    "setup.cfg",
    ".git",
)


class ExplicitBindingConfig(BaseModel):
    """One explicit binding: wildcard name -> entity binder string."""

    model_config = ConfigDict(extra="forbid")

    key: str = Field(..., min_length=1)
    binder: str = Field(..., min_length=1, description="'Class' or 'Class@method'")


class ImplicitBindingConfig(BaseModel):
    """One implicit namespace rule."""

    model_config = ConfigDict(extra="forbid")

    namespace: str = Field(..., min_length=1)
    prefix: str = ""
    suffix: str = ""
    method: str | None = None


class CompositeBindingConfig(BaseModel):
    """One composite binding: ordered wildcard names -> 'Class@method'."""

    model_config = ConfigDict(extra="forbid")

    keys: list[str] = Field(..., min_length=2)
    binder: str = Field(..., min_length=3)

    @field_validator("binder")
    @classmethod
    def validate_binder(cls, v: str) -> str:
        """Composite binders from config must name a method."""
        identifier, _, method = v.partition(METHOD_SEPARATOR)
        if not identifier or not method:
            raise ValueError("composite binder must be a 'Class@method' string")
        return v


class BindingsConfig(BaseModel):
    """Complete declarative binding configuration."""

    model_config = ConfigDict(extra="forbid")

    namespace_separator: str = "\\"
    explicit: list[ExplicitBindingConfig] = Field(default_factory=list)
    implicit: list[ImplicitBindingConfig] = Field(default_factory=list)
    composite: list[CompositeBindingConfig] = Field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> BindingsConfig:
        """Validate parsed configuration data.

        Raises:
            BindingConfigError: If the data does not match the schema.
        """
        try:
            return cls.model_validate(data or {})
        except ValidationError as e:
            raise BindingConfigError(f"Invalid bindings configuration: {e}") from e

    @classmethod
    def from_yaml(cls, path: str | Path) -> BindingsConfig:
        """Load configuration from a YAML file.

        Raises:
            BindingConfigError: If the file cannot be read, parsed, or validated.
        """
        config_path = Path(path)
        try:
            with config_path.open() as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise BindingConfigError(
                f"Failed to load bindings configuration {config_path}: {e}"
            ) from e

        if data is not None and not isinstance(data, dict):
            raise BindingConfigError(
                f"Bindings configuration {config_path} must be a mapping"
            )

        config = cls.from_dict(data)
        log_debug(
            f"Loaded bindings configuration from {config_path}",
            {
                "explicit": len(config.explicit),
                "implicit": len(config.implicit),
                "composite": len(config.composite),
            },
        )
        return config

    def apply(self, resolver: BindingResolver) -> BindingResolver:
        """Register every configured binding on ``resolver``.

        Composite bindings are registered first, then explicit bindings,
        then implicit rules, each in file order.

        Returns:
            The resolver, for chaining.

        Raises:
            BindingConfigError: If the configured namespace separator differs
                from the resolver's. Nothing is registered in that case.
        """
        if self.namespace_separator != resolver.namespace_separator:
            raise BindingConfigError(
                "Bindings configuration uses namespace separator "
                f"{self.namespace_separator!r} but the resolver uses "
                f"{resolver.namespace_separator!r}; build the resolver with "
                "bootstrap_resolver() or a matching namespace_separator"
            )

        for composite in self.composite:
            resolver.register_composite(composite.keys, composite.binder)
        for explicit in self.explicit:
            resolver.register_explicit(explicit.key, explicit.binder)
        for implicit in self.implicit:
            resolver.register_implicit(
                implicit.namespace, implicit.prefix, implicit.suffix, implicit.method
            )

        log_info(
            "Applied bindings configuration",
            {
                "explicit": len(self.explicit),
                "implicit": len(self.implicit),
                "composite": len(self.composite),
            },
        )
        return resolver


def find_bindings_config() -> Path | None:
    """Find the bindings configuration file.

    Returns:
        Path to the YAML file, or None if not found.
    """
    # 1. Explicit override via environment variable
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(env_path)
        if path.is_file():
            log_debug(f"Using {CONFIG_ENV_VAR}: {path}")
            return path
        log_warn(f"{CONFIG_ENV_VAR} does not exist: {env_path}")

    # 2. WORKSPACE_PATH environment variable
    workspace_path = os.environ.get("WORKSPACE_PATH")
    if workspace_path:
        path = Path(workspace_path) / CONFIG_RELATIVE_PATH
        if path.is_file():
            log_debug(f"Using WORKSPACE_PATH config: {path}")
            return path

    # 3. Auto-detect workspace root
    workspace_root = _detect_workspace_root()
    if workspace_root:
        path = workspace_root / CONFIG_RELATIVE_PATH
        if path.is_file():
            log_debug(f"Using detected workspace config: {path}")
            return path

    # 4. Fallback to current directory
    fallback_path = Path.cwd() / CONFIG_RELATIVE_PATH
    if fallback_path.is_file():
        log_debug(f"Using fallback config path: {fallback_path}")
        return fallback_path

    log_debug("No bindings configuration file found")
    return None


def _detect_workspace_root() -> Path | None:
    """Detect workspace root by searching up for marker files."""
    current = Path.cwd()

    # Search up to 10 levels
    for _ in range(10):
        for marker in WORKSPACE_MARKERS:
            if (current / marker).exists():
                return current

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


__all__ = [
    "BindingsConfig",
    "CompositeBindingConfig",
    "ExplicitBindingConfig",
    "ImplicitBindingConfig",
    "CONFIG_ENV_VAR",
    "find_bindings_config",
]

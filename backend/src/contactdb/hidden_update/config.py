"""Hidden update configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from contactdb.hooks.registry import HookRegistry
from contactdb.hooks.types import HookFn

CONFIG_ENV_VAR = "CONTACTDB_CONFIG"


@dataclass
class HiddenUpdateConfig:
    """Settings for the hidden update extension.

    Attributes:
        functions: Hidden update functions, by registered name or
            ``module:attribute`` path, in the order they run
        suppress_on_notice: Suppress change hooks for the whole notice call
        suppress_during_updates: Also suppress change hooks while the
            hidden update functions run, independently of the notice scope
    """

    functions: list[str] = field(default_factory=list)
    suppress_on_notice: bool = True
    suppress_during_updates: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> HiddenUpdateConfig:
        """Create config from a parsed YAML document.

        Accepts either the full document or just its ``hidden_update``
        section.
        """
        data = data or {}
        if not isinstance(data, dict):
            raise ValueError("Configuration must be a mapping")
        section = data.get("hidden_update", data) or {}
        if not isinstance(section, dict):
            raise ValueError("'hidden_update' must be a mapping")

        functions = section.get("functions", [])
        if isinstance(functions, str):
            functions = [functions]
        if not isinstance(functions, list) or not all(
            isinstance(f, str) for f in functions
        ):
            raise ValueError("'functions' must be a list of hook names")

        flags = {}
        for key in ("suppress_on_notice", "suppress_during_updates"):
            if key in section:
                if not isinstance(section[key], bool):
                    raise ValueError(f"'{key}' must be true or false")
                flags[key] = section[key]

        return cls(functions=list(functions), **flags)

    @classmethod
    def from_yaml(cls, path: Path) -> HiddenUpdateConfig:
        try:
            data = yaml.safe_load(Path(path).read_text())
        except (OSError, yaml.YAMLError) as e:
            raise ValueError(f"Cannot read configuration {path}: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def from_env(cls) -> HiddenUpdateConfig:
        """Create config from the environment.

        Resolution order:
        1. CONTACTDB_CONFIG env var (path to a YAML file)
        2. Defaults
        """
        path = os.environ.get(CONFIG_ENV_VAR)
        if path:
            return cls.from_yaml(Path(path))
        return cls()

    def resolve_functions(self) -> list[HookFn]:
        """Resolve every configured function.

        Raises:
            ValueError: If any entry is not registered or cannot be imported
        """
        return [HookRegistry.resolve(ref) for ref in self.functions]

# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Layered configuration: YAML/TOML files, env vars, and dataclass binding."""

from __future__ import annotations

import dataclasses
import importlib.resources
import os
import re
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, get_type_hints

import yaml  # type: ignore[import-untyped]

T = TypeVar("T")

_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")

_CONFIG_PROPERTIES_ATTR = "__plasm_config_prefix__"

_ENV_PREFIX = "PLASM_"

_MAX_PLACEHOLDER_DEPTH = 10


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Mark a class as bindable to a configuration prefix.

    Works with dataclasses and Pydantic ``BaseModel`` subclasses::

        @config_properties(prefix="plasm.query")
        @dataclass
        class QuerySettings:
            inserted_at_field: str = "inserted_at"
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _CONFIG_PROPERTIES_ATTR, prefix)
        return cls

    return decorator


class Config:
    """Hierarchical configuration with dot-notation access and env var overrides.

    Priority (highest wins):
    1. Environment variables (``plasm.query.default_limit`` -> ``PLASM_QUERY_DEFAULT_LIMIT``)
    2. Configuration dict / file values
    3. Dataclass defaults
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}
        self._loaded_sources: list[str] = []

    @property
    def loaded_sources(self) -> list[str]:
        """Config file paths that were loaded, in merge order."""
        return list(self._loaded_sources)

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def from_sources(
        cls,
        base_dir: str | Path,
        active_profiles: list[str] | None = None,
        load_defaults: bool = True,
    ) -> Config:
        """Load and merge ``plasm.yaml`` / ``plasm.toml`` from *base_dir*.

        Merge order (later wins):
        1. Library defaults (``plasm-defaults.yaml`` shipped in the package)
        2. ``config/plasm.{yaml,toml}``
        3. ``plasm.{yaml,toml}``
        4. Profile overlays: ``config/plasm-{profile}.*`` then ``plasm-{profile}.*``
        """
        base_dir = Path(base_dir)
        candidates: list[tuple[Path, str]] = []
        for search_dir in (base_dir / "config", base_dir):
            for ext in (".yaml", ".toml"):
                candidates.append((search_dir / f"plasm{ext}", ""))
        for profile in active_profiles or []:
            for search_dir in (base_dir / "config", base_dir):
                for ext in (".yaml", ".toml"):
                    candidates.append((search_dir / f"plasm-{profile}{ext}", f" (profile: {profile})"))

        return cls._merge_files(candidates, load_defaults)

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        active_profiles: list[str] | None = None,
        load_defaults: bool = True,
    ) -> Config:
        """Load a single YAML or TOML file plus its ``{stem}-{profile}`` overlays.

        Files named ``plasm.*`` delegate to :meth:`from_sources` so the
        ``config/`` subdirectory is searched as well.
        """
        path = Path(path)
        if path.stem == "plasm":
            return cls.from_sources(path.parent, active_profiles, load_defaults)

        candidates = [(path, "")]
        for profile in active_profiles or []:
            candidates.append((path.parent / f"{path.stem}-{profile}{path.suffix}", f" (profile: {profile})"))
        return cls._merge_files(candidates, load_defaults)

    @classmethod
    def _merge_files(cls, candidates: list[tuple[Path, str]], load_defaults: bool) -> Config:
        data: dict[str, Any] = {}
        sources: list[str] = []

        if load_defaults:
            data = cls._load_library_defaults()
            sources.append("plasm-defaults.yaml (library defaults)")

        for candidate, label in candidates:
            if candidate.is_file():
                data = cls._deep_merge(data, cls._load_config_data(candidate))
                sources.append(f"{candidate}{label}")

        instance = cls(data)
        instance._loaded_sources = sources
        return instance

    @staticmethod
    def _load_config_data(path: Path) -> dict[str, Any]:
        if path.suffix == ".toml":
            with open(path, "rb") as f:
                return tomllib.load(f) or {}
        with open(path) as f:
            return yaml.safe_load(f) or {}

    @staticmethod
    def _load_library_defaults() -> dict[str, Any]:
        defaults_file = importlib.resources.files("sqlplasm.resources").joinpath("plasm-defaults.yaml")
        with importlib.resources.as_file(defaults_file) as p, open(p) as f:
            return yaml.safe_load(f) or {}

    @staticmethod
    def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Recursively merge *override* into *base*, override values winning."""
        merged = dict(base)
        for key, value in override.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = Config._deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def _lookup(self, key: str) -> Any:
        """Walk the nested data for a dot-notation *key*; ``None`` when absent."""
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict):
                return None
            current = current.get(part)
            if current is None:
                return None
        return current

    @staticmethod
    def env_key(key: str) -> str:
        """Environment variable name overriding *key*."""
        base = key.removeprefix("plasm.")
        return _ENV_PREFIX + base.upper().replace(".", "_").replace("-", "_")

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key, checking env vars first.

        String values containing ``${...}`` placeholders are resolved from
        the environment, then from other config keys, then from an inline
        ``${key:default}``.
        """
        env_val = os.environ.get(self.env_key(key))
        if env_val is not None:
            return env_val

        value = self._lookup(key)
        if value is None:
            return default
        if isinstance(value, str) and "${" in value:
            return self._resolve_placeholders(value)
        return value

    def _resolve_placeholders(self, value: str, _depth: int = 0) -> str:
        if _depth > _MAX_PLACEHOLDER_DEPTH:
            raise ValueError(
                f"Max recursion depth exceeded resolving placeholders in '{value}'. Check for circular references."
            )

        def _replace(match: re.Match[str]) -> str:
            inner = match.group(1)
            ref_key, sep, default_val = inner.partition(":")

            env_val = os.environ.get(ref_key)
            if env_val is not None:
                return env_val

            ref = self._lookup(ref_key)
            if ref is not None:
                resolved = str(ref)
                if "${" in resolved:
                    resolved = self._resolve_placeholders(resolved, _depth + 1)
                return resolved

            if sep:
                return default_val

            raise ValueError(f"Cannot resolve placeholder '${{{inner}}}': not found in environment or config")

        return _PLACEHOLDER_RE.sub(_replace, value)

    def get_section(self, prefix: str) -> dict[str, Any]:
        """Get all values under a prefix as a dict (empty when absent)."""
        section = self._lookup(prefix)
        return section if isinstance(section, dict) else {}

    # ------------------------------------------------------------------
    # Binding
    # ------------------------------------------------------------------

    def bind(self, config_cls: type[T]) -> T:
        """Bind configuration to a ``@config_properties`` dataclass or Pydantic model."""
        prefix = getattr(config_cls, _CONFIG_PROPERTIES_ATTR, None)
        if prefix is None:
            raise ValueError(f"{config_cls.__name__} is not decorated with @config_properties")

        from pydantic import BaseModel, ValidationError

        if isinstance(config_cls, type) and issubclass(config_cls, BaseModel):
            try:
                return config_cls.model_validate(self.get_section(prefix))
            except ValidationError as exc:
                raise ValueError(
                    f"Configuration validation failed for '{config_cls.__name__}' (prefix='{prefix}'):\n{exc}"
                ) from exc

        hints = get_type_hints(config_cls)
        kwargs: dict[str, Any] = {}
        for field in dataclasses.fields(config_cls):  # type: ignore[arg-type]
            value = self.get(f"{prefix}.{field.name}")
            if value is None:
                continue
            expected_type = hints.get(field.name)
            if expected_type is int and isinstance(value, str):
                value = int(value)
            elif expected_type is float and isinstance(value, str):
                value = float(value)
            elif expected_type is bool and isinstance(value, str):
                value = value.lower() in ("true", "1", "yes")
            kwargs[field.name] = value

        return config_cls(**kwargs)

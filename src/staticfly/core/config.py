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
"""Type-safe configuration with YAML/TOML files, env vars, and dataclass binding."""

from __future__ import annotations

import dataclasses
import importlib.resources
import os
import re
import tomllib
import types
from collections.abc import Callable
from datetime import timedelta
from pathlib import Path
from typing import Any, TypeVar, Union, cast, get_args, get_origin, get_type_hints

import structlog
import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, ValidationError

from staticfly.core.duration import parse_duration
from staticfly.kernel.exceptions import (
    ConfigurationError,
    PropertyConversionError,
    UnknownPropertyError,
)

T = TypeVar("T")

logger = structlog.get_logger("staticfly.core.config")

_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")

_CONFIG_PROPERTIES_ATTR = "__staticfly_config_prefix__"

_ENV_PREFIX = "STATICFLY_"

_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})
_FALSE_VALUES = frozenset({"false", "0", "no", "off"})


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Mark a class as bindable to a configuration prefix.

    Works with both dataclasses and Pydantic BaseModel subclasses.
    Dataclasses are bound strictly: every key under the prefix must map to a
    field (``kebab-case`` and ``snake_case`` keys are both accepted), nested
    dataclasses are bound recursively and unknown keys raise
    :class:`UnknownPropertyError`. Pydantic models go through
    ``model_validate()``.

    Usage:
        @config_properties(prefix="staticfly.resources")
        @dataclass
        class ResourceProperties:
            add_mappings: bool = True
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _CONFIG_PROPERTIES_ATTR, prefix)
        return cls

    return decorator


def _env_key(key: str) -> str:
    """Environment variable overriding *key*: staticfly.a.b-c -> STATICFLY_A_B_C."""
    base = key.removeprefix("staticfly.")
    return _ENV_PREFIX + base.upper().replace(".", "_").replace("-", "_")


def _kebab(name: str) -> str:
    return name.replace("_", "-")


class Config:
    """Hierarchical configuration with dot-notation access and env var overrides.

    Priority (highest wins):
    1. Environment variables (STATICFLY_SECTION_KEY format)
    2. Configuration dict / YAML file values
    3. Dataclass defaults
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}
        self._loaded_sources: list[str] = []

    @property
    def loaded_sources(self) -> list[str]:
        """List of config file paths that were loaded, in merge order."""
        return list(self._loaded_sources)

    def to_dict(self) -> dict[str, Any]:
        """Return a shallow copy of the raw configuration data."""
        return dict(self._data)

    @classmethod
    def from_sources(
        cls,
        base_dir: str | Path,
        active_profiles: list[str] | None = None,
        load_defaults: bool = True,
    ) -> Config:
        """Load and merge config from multiple sources.

        Merge order (later wins):
        1. Framework defaults (staticfly-defaults.yaml from package)
        2. config/staticfly.yaml or config/staticfly.toml
        3. staticfly.yaml or staticfly.toml (project root)
        4. Profile overlays: config/staticfly-{profile}.yaml, staticfly-{profile}.yaml
        5. Environment variables (handled at read time in get() and bind())
        """
        base_dir = Path(base_dir)
        data: dict[str, Any] = {}
        sources: list[str] = []

        if load_defaults:
            data = cls._load_framework_defaults()
            sources.append("staticfly-defaults.yaml (framework defaults)")

        for search_dir in (base_dir / "config", base_dir):
            for ext in (".yaml", ".toml"):
                candidate = search_dir / f"staticfly{ext}"
                if candidate.is_file():
                    data = cls._deep_merge(data, cls._load_config_data(candidate))
                    sources.append(str(candidate))

        for profile in active_profiles or []:
            for search_dir in (base_dir / "config", base_dir):
                for ext in (".yaml", ".toml"):
                    candidate = search_dir / f"staticfly-{profile}{ext}"
                    if candidate.is_file():
                        data = cls._deep_merge(data, cls._load_config_data(candidate))
                        sources.append(f"{candidate} (profile: {profile})")

        logger.debug("config.loaded", sources=sources)
        instance = cls(data)
        instance._loaded_sources = sources
        return instance

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        active_profiles: list[str] | None = None,
        load_defaults: bool = True,
    ) -> Config:
        """Load configuration from a YAML or TOML file.

        If *path* is a standard staticfly config (staticfly.yaml / staticfly.toml),
        delegates to :meth:`from_sources` for full multi-source loading.
        Otherwise loads the single file plus ``{stem}-{profile}{suffix}``
        overlays next to it.
        """
        path = Path(path)

        if path.stem == "staticfly" or path.stem.startswith("staticfly-"):
            return cls.from_sources(
                base_dir=path.parent,
                active_profiles=active_profiles,
                load_defaults=load_defaults,
            )

        data: dict[str, Any] = {}
        sources: list[str] = []

        if load_defaults:
            data = cls._load_framework_defaults()
            sources.append("staticfly-defaults.yaml (framework defaults)")

        if path.exists():
            data = cls._deep_merge(data, cls._load_config_data(path))
            sources.append(str(path))

            for profile in active_profiles or []:
                profile_path = path.parent / f"{path.stem}-{profile}{path.suffix}"
                if profile_path.exists():
                    data = cls._deep_merge(data, cls._load_config_data(profile_path))
                    sources.append(f"{profile_path} (profile: {profile})")

        logger.debug("config.loaded", sources=sources)
        instance = cls(data)
        instance._loaded_sources = sources
        return instance

    @staticmethod
    def _load_config_data(path: Path) -> dict[str, Any]:
        """Load config data from a YAML or TOML file."""
        try:
            if path.suffix == ".toml":
                with open(path, "rb") as f:
                    return tomllib.load(f) or {}
            with open(path) as f:
                return yaml.safe_load(f) or {}
        except (tomllib.TOMLDecodeError, yaml.YAMLError) as exc:
            raise ConfigurationError(
                f"Cannot parse configuration file '{path}': {exc}",
                context={"path": str(path)},
            ) from exc

    @staticmethod
    def _load_framework_defaults() -> dict[str, Any]:
        """Load built-in framework defaults from staticfly.resources."""
        defaults_file = importlib.resources.files("staticfly.resources").joinpath("staticfly-defaults.yaml")
        with importlib.resources.as_file(defaults_file) as p, open(p) as f:
            return yaml.safe_load(f) or {}

    @staticmethod
    def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Recursively merge override into base, with override values winning."""
        merged = dict(base)
        for key, value in override.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = Config._deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key, checking env vars first.

        String values containing ``${...}`` placeholders are resolved:
        - ``${ENV_VAR}`` resolved from environment variables
        - ``${config.key}`` resolved from other config values
        - ``${key:default}`` uses default if key/env not found
        """
        env_val = os.environ.get(_env_key(key))
        if env_val is not None:
            return env_val

        parts = key.split(".")
        current: Any = self._data
        for part in parts:
            if isinstance(current, dict):
                current = current.get(part)
                if current is None:
                    return default
            else:
                return default

        if isinstance(current, str) and "${" in current:
            return self._resolve_placeholders(current)

        return current

    def _resolve_placeholders(self, value: str, _depth: int = 0) -> str:
        """Resolve ``${...}`` placeholders in a string value.

        Supports environment variables, config references, and defaults.
        Guards against circular references with a max recursion depth.
        """
        if _depth > 10:
            raise ConfigurationError(
                f"Max recursion depth exceeded resolving placeholders in '{value}'. Check for circular references."
            )

        def _replace(match: re.Match[str]) -> str:
            inner = match.group(1)

            if ":" in inner:
                ref_key, default_val = inner.split(":", 1)
            else:
                ref_key, default_val = inner, None

            env_val = os.environ.get(ref_key)
            if env_val is not None:
                return env_val

            current: Any = self._data
            for part in ref_key.split("."):
                if isinstance(current, dict):
                    current = current.get(part)
                    if current is None:
                        break
                else:
                    current = None
                    break

            if current is not None:
                resolved = str(current)
                if "${" in resolved:
                    resolved = self._resolve_placeholders(resolved, _depth + 1)
                return resolved

            if default_val is not None:
                return cast(str, default_val)

            raise ConfigurationError(
                f"Cannot resolve placeholder '${{{inner}}}': not found in environment or config",
                context={"placeholder": inner},
            )

        return _PLACEHOLDER_RE.sub(_replace, value)

    def get_section(self, prefix: str) -> dict[str, Any]:
        """Get all values under a prefix as a nested dict."""
        parts = prefix.split(".")
        current: Any = self._data
        for part in parts:
            if isinstance(current, dict):
                current = current.get(part, {})
            else:
                return {}
        return current if isinstance(current, dict) else {}

    def bind(self, config_cls: type[T]) -> T:
        """Bind configuration to a @config_properties dataclass or Pydantic model."""
        prefix = getattr(config_cls, _CONFIG_PROPERTIES_ATTR, None)
        if prefix is None:
            raise ConfigurationError(f"{config_cls.__name__} is not decorated with @config_properties")

        section = self.get_section(prefix)

        if isinstance(config_cls, type) and issubclass(config_cls, BaseModel):
            try:
                instance = config_cls.model_validate(section)
            except ValidationError as exc:
                raise ConfigurationError(
                    f"Configuration validation failed for '{config_cls.__name__}' (prefix='{prefix}'):\n{exc}",
                    context={"prefix": prefix},
                ) from exc
        else:
            instance = self._bind_dataclass(config_cls, section, prefix)

        logger.debug("config.bound", prefix=prefix, properties=config_cls.__name__)
        return cast(T, instance)

    def _bind_dataclass(self, cls: type[Any], section: Any, path: str) -> Any:
        """Strictly bind *section* onto dataclass *cls*, recursing into nested dataclasses."""
        if not isinstance(section, dict):
            raise PropertyConversionError(path, section, cls.__name__, "expected a mapping")

        hints = get_type_hints(cls)
        fields = {f.name: f for f in dataclasses.fields(cls) if f.init}

        by_name: dict[str, Any] = {}
        raw_keys: dict[str, str] = {}
        for raw_key, value in section.items():
            name = str(raw_key).replace("-", "_")
            if name not in fields:
                raise UnknownPropertyError(f"{path}.{raw_key}")
            if name in by_name:
                raise ConfigurationError(
                    f"Configuration property '{path}.{_kebab(name)}' is set twice "
                    f"(as '{raw_keys[name]}' and '{raw_key}')",
                    code="CONFIG_DUPLICATE_PROPERTY",
                    context={"key": f"{path}.{_kebab(name)}", "keys": [raw_keys[name], str(raw_key)]},
                )
            by_name[name] = value
            raw_keys[name] = str(raw_key)

        kwargs: dict[str, Any] = {}
        for name in fields:
            key = f"{path}.{_kebab(name)}"
            expected = hints.get(name, Any)

            if dataclasses.is_dataclass(expected):
                nested = by_name.get(name)
                kwargs[name] = self._bind_dataclass(cast(type, expected), {} if nested is None else nested, key)
                continue

            env_val = os.environ.get(_env_key(key))
            if env_val is not None:
                kwargs[name] = self._convert(env_val, expected, key)
            elif name in by_name:
                kwargs[name] = self._convert(by_name[name], expected, key)

        return cls(**kwargs)

    def _convert(self, value: Any, expected: Any, key: str) -> Any:
        """Convert a raw configuration value to the *expected* field type."""
        if isinstance(value, str) and "${" in value:
            value = self._resolve_placeholders(value)

        origin = get_origin(expected)

        if origin in (Union, types.UnionType):
            args = [a for a in get_args(expected) if a is not type(None)]
            if value is None:
                return None
            if len(args) == 1:
                return self._convert(value, args[0], key)
            return value

        if value is None:
            raise PropertyConversionError(key, value, _type_name(expected), "value is required")

        if expected is bool:
            if isinstance(value, bool):
                return value
            if isinstance(value, str) and value.strip().lower() in _TRUE_VALUES | _FALSE_VALUES:
                return value.strip().lower() in _TRUE_VALUES
            raise PropertyConversionError(key, value, "bool")

        if expected is int or expected is float:
            if isinstance(value, bool) or not isinstance(value, int | float | str):
                raise PropertyConversionError(key, value, expected.__name__)
            try:
                return expected(value)
            except ValueError as exc:
                raise PropertyConversionError(key, value, expected.__name__) from exc

        if expected is str:
            if isinstance(value, dict | list):
                raise PropertyConversionError(key, value, "str")
            return str(value)

        if expected is timedelta:
            try:
                return parse_duration(value)
            except ValueError as exc:
                raise PropertyConversionError(key, value, "duration", str(exc)) from exc

        if expected is list or origin is list:
            item_type = get_args(expected)[0] if get_args(expected) else Any
            if isinstance(value, str):
                items: list[Any] = [part.strip() for part in value.split(",") if part.strip()]
            elif isinstance(value, list | tuple):
                items = list(value)
            else:
                raise PropertyConversionError(key, value, _type_name(expected))
            return [self._convert(item, item_type, f"{key}[{i}]") for i, item in enumerate(items)]

        if expected is dict or origin is dict:
            if not isinstance(value, dict):
                raise PropertyConversionError(key, value, "dict")
            return value

        return value


def _type_name(tp: Any) -> str:
    return getattr(tp, "__name__", None) or str(tp)

"""
slidemark.config.loader - Find, parse and merge configuration files.

Configuration lives in ``.slidemark.toml``, parsed with tomlkit and
merged over DEFAULT_CONFIG. Environment variables named
``SLIDEMARK_<SECTION>_<KEY>`` override file values.
"""

from __future__ import annotations

import copy
import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import ParseError as TOMLParseError

from slidemark.config.defaults import CONFIG_FILE_NAME, DEFAULT_CONFIG

ENV_PREFIX = "SLIDEMARK_"


class ConfigError(ValueError):
    """A configuration file could not be read or parsed."""


def parse_toml_document(content: str) -> tomlkit.TOMLDocument:
    """Parse TOML text, keeping formatting for round-trip edits."""
    return tomlkit.parse(content)


def parse_toml(content: str) -> dict[str, Any]:
    """Parse TOML text into plain Python values."""
    return parse_toml_document(content).unwrap()


def find_config_file(start_dir: Path) -> Path | None:
    """
    Find the configuration file in ``start_dir`` or one of its parents.

    Args:
        start_dir: Directory to start searching from

    Returns:
        Path to the config file, or None if there is none
    """
    current = Path(start_dir).resolve()
    while True:
        candidate = current / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
        if current == current.parent:
            return None
        current = current.parent


def merge_configs(defaults: Mapping[str, Any], user: Mapping[str, Any]) -> dict[str, Any]:
    """
    Deep-merge ``user`` over ``defaults``.

    Nested tables are merged key by key; any other value in ``user``
    replaces the default. Neither argument is modified.
    """
    merged = copy.deepcopy(dict(defaults))
    for key, value in user.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _try_parse_env_value(value: str) -> Any:
    """Interpret an environment value as a bool, number, JSON list/object or string."""
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if value[:1] in ("[", "{"):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value
    try:
        return int(value)
    except ValueError:
        return value


def _apply_env_overrides(
    config: dict[str, Any], environ: Mapping[str, str] | None = None
) -> dict[str, Any]:
    """Apply ``SLIDEMARK_<SECTION>_<KEY>`` variables to ``config`` in place."""
    environ = os.environ if environ is None else environ
    for name, raw in environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        section, _, key = name[len(ENV_PREFIX) :].lower().partition("_")
        if not section or not key:
            continue
        table = config.setdefault(section, {})
        if isinstance(table, dict):
            table[key] = _try_parse_env_value(raw)
    return config


def load_config(
    config_path: Path | None = None, environ: Mapping[str, str] | None = None
) -> dict[str, Any]:
    """
    Load configuration merged over the defaults.

    Args:
        config_path: TOML file to load; None uses only the defaults
        environ: Environment to read overrides from (default os.environ)

    Returns:
        The merged configuration dict

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML
    """
    user: dict[str, Any] = {}
    if config_path is not None:
        try:
            user = parse_toml(Path(config_path).read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigError(f"cannot read {config_path}: {e}") from e
        except TOMLParseError as e:
            raise ConfigError(f"invalid TOML in {config_path}: {e}") from e

    return _apply_env_overrides(merge_configs(DEFAULT_CONFIG, user), environ)


class ConfigLoader:
    """Read-only view over a configuration dict with dotted-key access."""

    def __init__(self, data: dict[str, Any]) -> None:
        self._data = data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ConfigLoader:
        return cls(data)

    @classmethod
    def from_file(cls, path: Path | None = None) -> ConfigLoader:
        return cls(load_config(path))

    def get(self, key: str, default: Any = None) -> Any:
        """Look up ``"parser.profile_url"``-style keys."""
        value: Any = self._data
        for part in key.split("."):
            if not isinstance(value, Mapping) or part not in value:
                return default
            value = value[part]
        return value

    def as_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)

"""
slidemark.config - Configuration loading and defaults
"""

from slidemark.config.defaults import CONFIG_FILE_NAME, DEFAULT_CONFIG
from slidemark.config.loader import (
    ConfigError,
    ConfigLoader,
    _apply_env_overrides,
    _try_parse_env_value,
    find_config_file,
    load_config,
    merge_configs,
    parse_toml,
    parse_toml_document,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "ConfigLoader",
    "DEFAULT_CONFIG",
    "find_config_file",
    "load_config",
    "merge_configs",
    "parse_toml",
    "parse_toml_document",
]

"""
Configuration loading and management.

This module provides tools for loading YAML configuration files and accessing
their contents in a structured way. The active configuration is process-wide;
it is read from the file named by the ``STROOM_CONFIG`` environment variable
the first time it is needed, merged over the defaults below.
"""

import copy
import logging
import os
import threading
from typing import Any, Dict, Optional

import yaml

CONFIG_ENV_VAR = "STROOM_CONFIG"

DEFAULTS: Dict[str, Any] = {
    "conduit": {
        "poll_interval": 0.05,
        "daemon": True,
    },
    "adapters": {
        "strict": False,
    },
    "logging": {
        "level": "WARNING",
    },
}


class Config:
    """
    A wrapper around a dictionary for managing configuration.

    It provides a `get` method that allows accessing nested values using
    dot-notation (e.g., 'conduit.poll_interval').
    """

    def __init__(self, config_data: Optional[Dict[str, Any]] = None):
        self._config = config_data or {}

    def get(self, key: str, default: Any = None) -> Any:
        """
        Access a config value using dot notation.

        Example:
            >>> config = Config({'a': {'b': 1}})
            >>> config.get('a.b')
            1
            >>> config.get('a.c', 'default_value')
            'default_value'

        :param key: The dot-separated key for the desired value.
        :param default: The value to return if the key is not found.
        :return: The configuration value or the default.
        """
        keys = key.split(".")
        value = self._config
        for k in keys:
            if not isinstance(value, dict) or k not in value:
                return default
            value = value[k]
        return value

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._config)

    def __repr__(self) -> str:
        return f"Config(config_data={self._config})"


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Optional[str]) -> Config:
    """
    Loads a YAML configuration file from the given path and merges it over
    the defaults.

    If the path is None or does not exist, it returns a Config holding only
    the defaults.

    :param path: The path to the YAML configuration file.
    :return: A Config object with the loaded data.
    """
    if not path or not os.path.exists(path):
        return Config(copy.deepcopy(DEFAULTS))

    with open(path, "r") as f:
        # Use safe_load to avoid arbitrary code execution
        config_data = yaml.safe_load(f) or {}

    if not isinstance(config_data, dict):
        raise ValueError(f"Configuration file '{path}' must contain a mapping")

    return Config(_merge(DEFAULTS, config_data))


_active_config: Optional[Config] = None
_config_lock = threading.Lock()


def get_config() -> Config:
    """Returns the active configuration, loading it on first use."""
    global _active_config
    with _config_lock:
        if _active_config is None:
            _active_config = load_config(os.environ.get(CONFIG_ENV_VAR))
        return _active_config


def set_config(config: Optional[Config]) -> None:
    """
    Replaces the active configuration. Passing None resets it, so the next
    `get_config` call reloads from the environment.

    A `logging.level` in `config` is applied to the ``stroom`` logger at once.
    """
    global _active_config
    with _config_lock:
        _active_config = config
    if config is not None:
        apply_logging_level(config)


def apply_logging_level(config: Config) -> None:
    """Sets the level of the ``stroom`` logger from ``logging.level``, if present."""
    level = config.get("logging.level")
    if level is not None:
        logging.getLogger("stroom").setLevel(str(level).upper())

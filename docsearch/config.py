"""
Configuration management for docsearch.
Simple YAML-based configuration with sensible defaults.
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from colored_logger import get_colored_logger

logger = get_colored_logger(__name__)

ENV_PREFIX = "DOCSEARCH_"

DEFAULT_CONFIG = {
    "search": {
        "snippet_length": 150,
        "max_snippets": 3,
        "snippet_padding": 20,
        "score_per_match": 25,
        "max_score": 100,
        "workers": 1,
    },
    "tags": {
        "default_color": "#3b82f6",
        "key_prefix": "doc_tags_",
    },
    "storage": {
        "path": "docsearch.db",
    },
    "highlight": {
        "style": "background-color: #fbbf24; padding: 2px 4px; border-radius: 3px;",
    },
    "loader": {
        "extensions": [".txt", ".md"],
        "recursive": True,
        "max_workers": 4,
    },
}

DEFAULT_CONFIG_PATHS = ["docsearch.yml", ".docsearch.yml"]


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from a YAML file with fallback to defaults.

    Args:
        config_path: Optional path to config file. When omitted the default
            locations in the current directory are tried.

    Returns:
        Configuration dictionary
    """
    if config_path:
        config_file = Path(config_path)
    else:
        config_file = None
        for candidate in DEFAULT_CONFIG_PATHS:
            path = Path(candidate)
            if path.exists():
                config_file = path
                break

    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_file and config_file.exists():
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                user_config = yaml.safe_load(f) or {}

            if isinstance(user_config, dict):
                config = _deep_merge(config, user_config)
                logger.debug("Loaded configuration from %s", config_file)
            else:
                logger.warning(
                    "Config file %s is not a mapping, using defaults", config_file
                )

        except (OSError, yaml.YAMLError) as e:
            logger.warning(
                "Failed to load config from %s, using defaults: %s", config_file, e
            )
    elif config_path:
        logger.warning("Config file not found: %s, using defaults", config_path)

    return _apply_env_overrides(config)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Dictionary to merge into base

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def _apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply environment variable overrides to config.

    Sections and keys are separated by a double underscore so keys may
    contain single underscores:
    DOCSEARCH_SEARCH__SNIPPET_LENGTH=200 -> config["search"]["snippet_length"]

    Args:
        config: Base configuration

    Returns:
        Configuration with environment overrides applied
    """
    for env_key, env_value in os.environ.items():
        if not env_key.startswith(ENV_PREFIX):
            continue

        key_parts = env_key[len(ENV_PREFIX) :].lower().split("__")
        if len(key_parts) < 2 or not all(key_parts):
            continue

        current = config
        for part in key_parts[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]

        final_key = key_parts[-1]
        current[final_key] = _convert_env_value(
            env_value, as_list=isinstance(current.get(final_key), list)
        )

    return config


def _convert_env_value(value: str, as_list: bool = False) -> Any:
    """
    Convert environment variable string to appropriate Python type.

    Args:
        value: Environment variable value
        as_list: Split on commas, for keys whose default is a list

    Returns:
        Converted value
    """
    if as_list:
        return [item.strip() for item in value.split(",") if item.strip()]

    if value.lower() in ("true", "yes", "on"):
        return True
    elif value.lower() in ("false", "no", "off"):
        return False

    try:
        return int(value)
    except ValueError:
        pass

    try:
        return float(value)
    except ValueError:
        pass

    return value

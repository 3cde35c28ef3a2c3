"""Configuration hierarchy — merges sources in priority order.

Precedence (later overrides earlier):
  1. Package defaults
  2. Global config   (~/.desmos_graph/config.yaml)
  3. Project config   (./desmos-graph.yaml)
  4. Environment variables (DESMOS_GRAPH_*)
  5. Runtime arguments
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from desmos_graph.config.defaults import get_defaults
from desmos_graph.config.schema import CacheSettings, Settings

logger = logging.getLogger(__name__)

_GLOBAL_CONFIG_PATH = Path.home() / ".desmos_graph" / "config.yaml"
_PROJECT_CONFIG_NAME = "desmos-graph.yaml"

# Map of environment variables to config keys
_ENV_MAP: dict[str, str] = {
    "DESMOS_GRAPH_DEBOUNCE": "debounce",
    "DESMOS_GRAPH_CACHE_ENABLED": "cache_enabled",
    "DESMOS_GRAPH_CACHE_LOCATION": "cache_location",
    "DESMOS_GRAPH_CACHE_DIRECTORY": "cache_directory",
    "DESMOS_GRAPH_ORIGIN": "origin",
    "DESMOS_GRAPH_LOG_LEVEL": "log_level",
}

# Keys that should be parsed as specific types
_TYPE_MAP: dict[str, type] = {
    "debounce": int,
}

# Boolean env var values
_TRUTHY = {"1", "true", "yes", "on"}


def load_config_hierarchy(**runtime_overrides: Any) -> dict[str, Any]:
    """Load and merge configuration from all sources.

    Returns a merged dict with the final resolved values.
    """
    config = get_defaults()

    # Layer 2: Global config
    global_cfg = _load_yaml_config(_GLOBAL_CONFIG_PATH)
    if global_cfg:
        config.update(global_cfg)

    # Layer 3: Project config (search from cwd upward)
    project_path = _find_project_config()
    if project_path:
        project_cfg = _load_yaml_config(project_path)
        if project_cfg:
            config.update(project_cfg)

    # Layer 4: Environment variables
    env_cfg = _load_env_vars()
    config.update(env_cfg)

    # Layer 5: Runtime arguments (highest priority)
    # Filter out None values — only override when explicitly set
    for key, value in runtime_overrides.items():
        if value is not None:
            config[key] = value

    return config


def load_settings(**runtime_overrides: Any) -> Settings:
    """Resolve the hierarchy into a validated Settings object."""
    config = load_config_hierarchy(**runtime_overrides)
    return Settings(
        version=str(config["version"]),
        debounce=config["debounce"],
        origin=config["origin"],
        log_level=config["log_level"],
        cache=CacheSettings(
            enabled=config["cache_enabled"],
            location=config["cache_location"],
            directory=config["cache_directory"],
        ),
    )


def _load_yaml_config(path: Path) -> dict[str, Any] | None:
    """Load a YAML config file if it exists."""
    if not path.exists() or not path.is_file():
        return None
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
        if isinstance(data, dict):
            return _flatten_sections(data)
        logger.warning("Config file %s is not a mapping, ignoring", path)
    except Exception as e:
        logger.warning("Failed to load config %s: %s", path, e)
    return None


def _flatten_sections(data: dict[str, Any]) -> dict[str, Any]:
    """Accept a nested ``cache:`` section as well as flat ``cache_*`` keys."""
    result = {k: v for k, v in data.items() if k != "cache"}
    section = data.get("cache")
    if isinstance(section, dict):
        for key, value in section.items():
            result[f"cache_{key}"] = value
    elif "cache" in data:
        logger.warning("Config key 'cache' must be a mapping, ignoring")
    return result


def _find_project_config() -> Path | None:
    """Search for desmos-graph.yaml from cwd upward."""
    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        candidate = parent / _PROJECT_CONFIG_NAME
        if candidate.exists():
            return candidate
    return None


def _load_env_vars() -> dict[str, Any]:
    """Read DESMOS_GRAPH_* environment variables."""
    result: dict[str, Any] = {}
    for env_key, config_key in _ENV_MAP.items():
        value = os.environ.get(env_key)
        if value is None:
            continue
        result[config_key] = _coerce_env_value(config_key, value)
    return result


def _coerce_env_value(key: str, value: str) -> Any:
    """Coerce an environment variable string to the appropriate type."""
    if key.endswith("_enabled"):
        return value.lower() in _TRUTHY

    target_type = _TYPE_MAP.get(key)
    if target_type:
        try:
            return target_type(value)
        except (ValueError, TypeError):
            logger.warning(
                "Cannot convert env var for '%s' to %s: %s", key, target_type.__name__, value
            )
            return value

    return value

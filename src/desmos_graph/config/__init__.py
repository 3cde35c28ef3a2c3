"""Configuration — defaults, layered loading and settings models."""

from desmos_graph.config.hierarchy import load_config_hierarchy, load_settings
from desmos_graph.config.schema import CacheLocation, CacheSettings, Settings

__all__ = [
    "CacheLocation",
    "CacheSettings",
    "Settings",
    "load_config_hierarchy",
    "load_settings",
]

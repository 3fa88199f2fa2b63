"""Configuration loading for Whisker.

Bundled defaults are layered with project YAML and WHISKER_* environment
overrides, then validated against ``config.schema.yaml``.
"""
from __future__ import annotations

from .cache import clear_all_caches, get_cached_config
from .manager import ConfigManager
from .rendering import RenderingConfig

__all__ = [
    "ConfigManager",
    "RenderingConfig",
    "get_cached_config",
    "clear_all_caches",
]

"""Centralized configuration caching.

Loaded configuration is cached per project root. The cache key includes a
fingerprint of WHISKER_* environment variables so overrides applied after an
initial load are picked up.
"""
from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .manager import ENV_PREFIX, ConfigManager

_config_cache: Dict[str, Dict[str, Any]] = {}


def _cache_key(project_root: Optional[Path]) -> str:
    base = str(Path(project_root).expanduser().resolve()) if project_root else "__bundled__"
    env_items = sorted(
        (k, os.environ.get(k, ""))
        for k in os.environ.keys()
        if k.startswith(ENV_PREFIX)
    )
    env_fp = hashlib.sha256(repr(env_items).encode("utf-8")).hexdigest()[:12]
    return f"{base}:{env_fp}"


def get_cached_config(project_root: Optional[Path] = None) -> Dict[str, Any]:
    """Return the merged config for ``project_root``, loading it on first use."""
    key = _cache_key(project_root)
    if key not in _config_cache:
        _config_cache[key] = ConfigManager(project_root).load_config()
    return _config_cache[key]


def clear_all_caches() -> None:
    """Drop every cached configuration (useful for testing)."""
    _config_cache.clear()


__all__ = ["get_cached_config", "clear_all_caches"]

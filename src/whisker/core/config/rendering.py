"""Domain accessor for the ``rendering`` configuration section."""
from __future__ import annotations

import logging
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .cache import get_cached_config


class RenderingConfig:
    """Typed view over the ``rendering`` section.

    Usage:
        cfg = RenderingConfig()
        cfg.path_separator      # "."
        cfg.strict_keys         # False

    An explicit ``config`` mapping bypasses loading, which keeps tests and
    embedded callers independent of the filesystem.
    """

    def __init__(
        self,
        project_root: Optional[Path] = None,
        *,
        config: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._project_root = project_root
        self._config = config if config is not None else get_cached_config(project_root)

    @cached_property
    def section(self) -> Dict[str, Any]:
        return self._config.get("rendering", {}) or {}

    @cached_property
    def path_separator(self) -> str:
        return str(self.section.get("path_separator", "."))

    @cached_property
    def current_value_keys(self) -> Tuple[str, ...]:
        return tuple(self.section.get("current_value_keys", [".", "this"]))

    @cached_property
    def escape(self) -> str:
        return str(self.section.get("escape", "html"))

    @cached_property
    def provider(self) -> Optional[str]:
        return self.section.get("provider")

    @cached_property
    def strict_keys(self) -> bool:
        return bool(self.section.get("strict_keys", False))

    @cached_property
    def missing_key_log_level(self) -> int:
        name = str(self.section.get("missing_key_log_level", "DEBUG")).upper()
        level = logging.getLevelName(name)
        return level if isinstance(level, int) else logging.DEBUG


__all__ = ["RenderingConfig"]

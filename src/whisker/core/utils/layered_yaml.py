"""Layered YAML loading helpers.

- Deterministic iteration of YAML files in a directory
- Deep-merge semantics consistent with ConfigManager
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import yaml

from .merge import deep_merge


def iter_yaml_files(directory: Path) -> List[Path]:
    """Return ``*.yaml`` and ``*.yml`` files in ``directory`` sorted by name."""
    d = Path(directory)
    if not d.is_dir():
        return []
    files = [p for p in d.iterdir() if p.is_file() and p.suffix in {".yaml", ".yml"}]
    return sorted(files, key=lambda p: p.name)


def read_yaml_file(path: Path, default: Any = None, raise_on_error: bool = False) -> Any:
    """Read YAML with error handling.

    Returns default if file is missing or invalid, unless raise_on_error is True.
    """
    path = Path(path)
    if not path.exists():
        if raise_on_error:
            raise FileNotFoundError(f"File not found: {path}")
        return default

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data if data is not None else default
    except (OSError, yaml.YAMLError):
        if raise_on_error:
            raise
        return default


def merge_yaml_directory(base: Dict[str, Any], directory: Path) -> Dict[str, Any]:
    """Merge all YAML files from ``directory`` into ``base``.

    Files are merged in deterministic order. Missing directories are ignored.
    YAML must be valid; invalid YAML raises.
    """
    cfg: Dict[str, Any] = dict(base)
    for path in iter_yaml_files(directory):
        module_cfg = read_yaml_file(path, default={}, raise_on_error=True) or {}
        cfg = deep_merge(cfg, module_cfg)
    return cfg


__all__ = ["iter_yaml_files", "read_yaml_file", "merge_yaml_directory"]

"""Shared helpers for Whisker core modules."""
from __future__ import annotations

from .merge import deep_merge, merge_arrays
from .layered_yaml import iter_yaml_files, merge_yaml_directory, read_yaml_file

__all__ = [
    "deep_merge",
    "merge_arrays",
    "iter_yaml_files",
    "merge_yaml_directory",
    "read_yaml_file",
]

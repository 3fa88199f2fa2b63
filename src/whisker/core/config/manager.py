"""
Whisker configuration management (YAML layers + environment overrides).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from whisker.core.exceptions import ConfigError, SchemaValidationError
from whisker.core.schemas.validation import validate_payload
from whisker.core.utils.layered_yaml import merge_yaml_directory
from whisker.core.utils.merge import deep_merge as _deep_merge
from whisker.data import get_data_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "WHISKER_"
PROJECT_CONFIG_DIRNAME = ".whisker"


class ConfigManager:
    """Load, merge, and validate Whisker configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: WHISKER_<SECTION>__<KEY>
    2. Project config: <project_root>/.whisker/config/*.yaml (alphabetical order)
    3. Bundled defaults: whisker.data/config/*.yaml (alphabetical order)
    """

    def __init__(self, project_root: Optional[Path] = None) -> None:
        self.project_root = project_root

        # Bundled defaults from whisker.data package (always available)
        self.core_config_dir = get_data_path("config")

        self.project_config_dir: Optional[Path] = None
        if project_root is not None:
            self.project_config_dir = Path(project_root) / PROJECT_CONFIG_DIRNAME / "config"

    def deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge dictionaries. Delegates to shared implementation."""
        return _deep_merge(base, override)

    def validate_schema(self, config: Dict[str, Any], schema_name: str = "config") -> None:
        try:
            validate_payload(config, schema_name)
        except SchemaValidationError as exc:
            raise ConfigError(str(exc), context=exc.context) from exc

    # ---------- environment overrides ----------

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except json.JSONDecodeError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        if value.strip().lower() == "null":
            return None
        return value.strip()

    def _parse_env_key(self, raw: str, *, strict: bool) -> List[Union[str, int]]:
        if not raw:
            return []
        segs = raw.split("__") if "__" in raw else raw.split("_")
        processed: List[Union[str, int]] = []
        for seg in segs:
            if seg == "":
                if strict:
                    raise ConfigError(
                        f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.",
                        context={"key": raw},
                    )
                return []
            if seg.isdigit():
                processed.append(int(seg))
            else:
                processed.append(seg.lower())
        return processed

    def _iter_env_overrides(self, *, strict: bool) -> Iterator[Tuple[List[Union[str, int]], Any, str]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX):]
            path = self._parse_env_key(raw, strict=strict)
            if not path:
                continue
            yield path, self._coerce_type(os.environ[key]), raw

    def _set_nested(self, root: Dict[str, Any], path: List[Union[str, int]], value: Any) -> None:
        cur: Any = root
        for part, nxt in zip(path, path[1:]):
            if isinstance(part, int):
                raise ConfigError("Invalid path: list index may only appear at leaf")
            if not isinstance(cur, dict):
                raise ConfigError("Path traverses non-dict container")
            if part not in cur or cur[part] is None:
                cur[part] = [] if isinstance(nxt, int) else {}
            cur = cur[part]

        leaf = path[-1]
        if isinstance(leaf, int):
            if not isinstance(cur, list):
                raise ConfigError("Index assignment requires list")
            while len(cur) <= leaf:
                cur.append(None)
            cur[leaf] = value
            return
        if not isinstance(cur, dict):
            raise ConfigError("Key assignment requires dict")
        cur[leaf] = value

    def apply_env_overrides(self, cfg: Dict[str, Any], *, strict: bool = False) -> None:
        for path, typed_value, raw in self._iter_env_overrides(strict=strict):
            logger.debug("Applying env override %s%s", ENV_PREFIX, raw)
            self._set_nested(cfg, path, typed_value)

    # ---------- loading ----------

    def load_config(self, *, validate: bool = True, strict_env: bool = False) -> Dict[str, Any]:
        """Return the merged configuration.

        Args:
            validate: Validate the merged result against the config schema.
            strict_env: Raise on malformed WHISKER_* keys instead of ignoring them.

        Raises:
            ConfigError: On invalid YAML, malformed overrides or schema failures.
        """
        try:
            cfg = merge_yaml_directory({}, self.core_config_dir)
            logger.debug("Loaded bundled config from %s", self.core_config_dir)
            if self.project_config_dir is not None and self.project_config_dir.exists():
                cfg = merge_yaml_directory(cfg, self.project_config_dir)
                logger.debug("Loaded project config from %s", self.project_config_dir)
        except Exception as exc:
            raise ConfigError(f"Failed to load configuration: {exc}") from exc

        self.apply_env_overrides(cfg, strict=strict_env)

        if validate:
            self.validate_schema(cfg)
        return cfg

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value by dot-separated path."""
        current: Any = self.load_config()
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current


__all__ = ["ConfigManager", "ENV_PREFIX", "PROJECT_CONFIG_DIRNAME"]

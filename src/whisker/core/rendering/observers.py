"""Ready-made lookup observers.

- StrictKeysObserver - raise KeyNotFoundError for unhandled missing keys
- RenderReport       - record found and missing keys for one render
- LoggingObserver    - log lookups through the standard logging module

Observers are plain callables receiving a ``KeyFoundEvent`` or
``KeyNotFoundEvent``; anything with ``attach`` can register itself on a
scope or on a ``Generator``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Protocol

from whisker.core.exceptions import KeyNotFoundError

from .scope import KeyFoundEvent, KeyNotFoundEvent

logger = logging.getLogger(__name__)


class HandlerHost(Protocol):
    """Anything that accepts lookup handlers (KeyScope, Generator)."""

    def add_key_found_handler(self, handler: Any) -> None: ...

    def add_key_not_found_handler(self, handler: Any) -> None: ...


class StrictKeysObserver:
    """Fail the render on the first missing key nobody else handled.

    Register it after any substituting handlers so they get a chance to
    mark the event as handled.
    """

    def __call__(self, event: KeyNotFoundEvent) -> None:
        if event.handled:
            return
        raise KeyNotFoundError(event.key, context={"missing_member": event.missing_member})

    def attach(self, host: HandlerHost) -> "StrictKeysObserver":
        host.add_key_not_found_handler(self)
        return self


@dataclass
class RenderReport:
    """Record of the lookups performed during a render.

    Usage:
        report = RenderReport().attach(generator)
        generator.render(data)
        report.missing   # ["user.email"]
    """

    found: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)

    @property
    def lookups(self) -> int:
        return len(self.found) + len(self.missing)

    @property
    def has_issues(self) -> bool:
        return bool(self.missing)

    def on_key_found(self, event: KeyFoundEvent) -> None:
        self.found.append(event.key)

    def on_key_not_found(self, event: KeyNotFoundEvent) -> None:
        self.missing.append(event.key)

    def attach(self, host: HandlerHost) -> "RenderReport":
        host.add_key_found_handler(self.on_key_found)
        host.add_key_not_found_handler(self.on_key_not_found)
        return self

    def reset(self) -> None:
        self.found.clear()
        self.missing.clear()

    def to_dict(self) -> Dict[str, Any]:
        """Convert report to dictionary for serialization."""
        return {
            "found": list(self.found),
            "missing": list(self.missing),
            "lookups": self.lookups,
        }


class LoggingObserver:
    """Log found keys at DEBUG and missing keys at ``missing_level``."""

    def __init__(self, missing_level: int = logging.DEBUG, log: logging.Logger = logger) -> None:
        self.missing_level = missing_level
        self.log = log

    @classmethod
    def from_settings(cls, settings: Any) -> "LoggingObserver":
        """Build an observer using ``rendering.missing_key_log_level``."""
        return cls(missing_level=settings.missing_key_log_level)

    def on_key_found(self, event: KeyFoundEvent) -> None:
        self.log.debug("Key found: %s", event.key)

    def on_key_not_found(self, event: KeyNotFoundEvent) -> None:
        self.log.log(
            self.missing_level,
            "Key not found: %s (missing member %r)",
            event.key,
            event.missing_member,
        )

    def attach(self, host: HandlerHost) -> "LoggingObserver":
        host.add_key_found_handler(self.on_key_found)
        host.add_key_not_found_handler(self.on_key_not_found)
        return self


__all__ = ["StrictKeysObserver", "RenderReport", "LoggingObserver", "HandlerHost"]

"""Recording sinks and handlers for rendering tests."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Tuple

from whisker.core.rendering.scope import KeyFoundEvent, KeyNotFoundEvent


@dataclass
class RecordingSink:
    """Sink that keeps every write separately."""

    writes: List[str] = field(default_factory=list)

    def write(self, text: str) -> int:
        self.writes.append(text)
        return len(text)

    @property
    def text(self) -> str:
        return "".join(self.writes)


@dataclass
class EventLog:
    """Collect (kind, key, value) tuples from both handler kinds."""

    events: List[Tuple[str, str, Any]] = field(default_factory=list)

    def found(self, event: KeyFoundEvent) -> None:
        self.events.append(("found", event.key, event.value))

    def not_found(self, event: KeyNotFoundEvent) -> None:
        self.events.append(("not_found", event.key, event.missing_member))

    def attach(self, host: Any) -> "EventLog":
        host.add_key_found_handler(self.found)
        host.add_key_not_found_handler(self.not_found)
        return self

    def keys(self, kind: str) -> List[str]:
        return [key for k, key, _ in self.events if k == kind]

"""Key scopes: data contexts with ancestor fallback.

A ``KeyScope`` wraps one data value and links to the scope that created it.
Looking up ``"user.name"`` resolves ``user`` against the innermost scope
first and walks outwards until some scope defines it; ``name`` is then
resolved on the value that was found, without any further fallback.

Observers attached to a scope are shared by reference with every child, so
handlers registered on the root see lookups made anywhere below it. Each
top-level ``lookup`` notifies observers exactly once, after fallback is
exhausted.

Example:
    root = KeyScope({"title": "Menu", "items": [{"name": "tea"}]})
    child = root.create_child({"name": "tea"})
    child.lookup("name")    # Found(value='tea')
    child.lookup("title")   # Found(value='Menu'), from the root
    child.lookup("price")   # NOT_FOUND
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, List, Optional, Sequence, Tuple

from .resolution import (
    NOT_FOUND,
    Found,
    ResolutionResult,
    ResolverRegistry,
    default_registry,
    resolve_segment,
    walk_path,
)

DEFAULT_SEPARATOR = "."
DEFAULT_CURRENT_VALUE_KEYS: Tuple[str, ...] = (".", "this")


@dataclass
class KeyFoundEvent:
    """Passed to key-found handlers.

    Handlers may replace ``substitute`` to change the value that is rendered.
    """

    key: str
    value: Any
    substitute: Any = field(init=False)

    def __post_init__(self) -> None:
        self.substitute = self.value


@dataclass
class KeyNotFoundEvent:
    """Passed to key-not-found handlers.

    ``missing_member`` is the segment that failed to resolve. Setting
    ``handled`` turns the lookup into ``Found(substitute)``.
    """

    key: str
    missing_member: str
    handled: bool = False
    substitute: Any = None


KeyFoundHandler = Callable[[KeyFoundEvent], Any]
KeyNotFoundHandler = Callable[[KeyNotFoundEvent], Any]


def remove_by_identity(handlers: List[Any], handler: Any) -> None:
    for i, existing in enumerate(handlers):
        if existing is handler:
            del handlers[i]
            return


class KeyScope:
    """A data context with ancestor fallback and lookup observers."""

    def __init__(
        self,
        value: Any,
        parent: Optional["KeyScope"] = None,
        *,
        registry: Optional[ResolverRegistry] = None,
        separator: str = DEFAULT_SEPARATOR,
        current_value_keys: Sequence[str] = DEFAULT_CURRENT_VALUE_KEYS,
    ) -> None:
        self.value = value
        self.parent = parent
        if parent is not None:
            # Children share the parent's handler lists and resolution settings.
            self._found_handlers: List[KeyFoundHandler] = parent._found_handlers
            self._not_found_handlers: List[KeyNotFoundHandler] = parent._not_found_handlers
            self.registry: ResolverRegistry = parent.registry
            self.separator: str = parent.separator
            self.current_value_keys: Tuple[str, ...] = parent.current_value_keys
        else:
            self._found_handlers = []
            self._not_found_handlers = []
            self.registry = registry or default_registry
            self.separator = separator
            self.current_value_keys = tuple(current_value_keys)

    def __repr__(self) -> str:
        return f"KeyScope(value={self.value!r}, depth={self.depth})"

    # ---------- observers ----------

    def add_key_found_handler(self, handler: KeyFoundHandler) -> None:
        self._found_handlers.append(handler)

    def remove_key_found_handler(self, handler: KeyFoundHandler) -> None:
        remove_by_identity(self._found_handlers, handler)

    def add_key_not_found_handler(self, handler: KeyNotFoundHandler) -> None:
        self._not_found_handlers.append(handler)

    def remove_key_not_found_handler(self, handler: KeyNotFoundHandler) -> None:
        remove_by_identity(self._not_found_handlers, handler)

    @property
    def key_found_handlers(self) -> Tuple[KeyFoundHandler, ...]:
        return tuple(self._found_handlers)

    @property
    def key_not_found_handlers(self) -> Tuple[KeyNotFoundHandler, ...]:
        return tuple(self._not_found_handlers)

    # ---------- structure ----------

    def create_child(self, value: Any) -> "KeyScope":
        """Return a scope wrapping ``value`` whose fallback is this scope."""
        return KeyScope(value, parent=self)

    def iter_chain(self) -> Iterator["KeyScope"]:
        """Yield this scope and then each ancestor up to the root."""
        scope: Optional[KeyScope] = self
        while scope is not None:
            yield scope
            scope = scope.parent

    @property
    def depth(self) -> int:
        return sum(1 for _ in self.iter_chain()) - 1

    # ---------- lookup ----------

    def lookup(self, path: str) -> ResolutionResult:
        """Resolve ``path`` and notify observers once.

        Returns ``Found(value)`` or ``NOT_FOUND``. Missing keys are never an
        error; exceptions raised by handlers propagate to the caller.
        """
        result, missing_member = self.find(path)

        if isinstance(result, Found):
            found_event = KeyFoundEvent(key=path, value=result.value)
            for handler in list(self._found_handlers):
                handler(found_event)
            return Found(found_event.substitute)

        not_found_event = KeyNotFoundEvent(key=path, missing_member=missing_member)
        for handler in list(self._not_found_handlers):
            handler(not_found_event)
        if not_found_event.handled:
            return Found(not_found_event.substitute)
        return NOT_FOUND

    def find(self, path: str) -> Tuple[ResolutionResult, str]:
        """Resolve ``path`` without notifying observers.

        Returns the result and, when it is ``NOT_FOUND``, the segment that
        failed to resolve.
        """
        if path in self.current_value_keys:
            return Found(self.value), ""

        first, *rest = path.split(self.separator)

        result: ResolutionResult = NOT_FOUND
        for scope in self.iter_chain():
            result = scope._resolve_own(first)
            if isinstance(result, Found):
                break
        if not isinstance(result, Found):
            return NOT_FOUND, first

        return walk_path(result.value, rest, self.registry)

    def _resolve_own(self, segment: str) -> ResolutionResult:
        if segment in self.current_value_keys:
            return Found(self.value)
        return resolve_segment(self.value, segment, self.registry)


__all__ = [
    "KeyScope",
    "KeyFoundEvent",
    "KeyNotFoundEvent",
    "KeyFoundHandler",
    "KeyNotFoundHandler",
    "DEFAULT_SEPARATOR",
    "DEFAULT_CURRENT_VALUE_KEYS",
]

"""Key resolution protocol.

Resolves a single path segment against a value:

1. ``None`` never resolves.
2. An all-digit segment on an indexable sequence is a bounds-checked index.
3. Anything else is named-member access (mapping key or public attribute).

A segment that does not match the shape of the value resolves to
``NOT_FOUND``; it is never retried under a different interpretation.

Member access is pluggable: each data shape is handled by a
``MemberResolver`` and resolvers are consulted in registration order.

Example:
    >>> resolve_segment({"items": [10, 20]}, "items")
    Found(value=[10, 20])
    >>> resolve_segment([10, 20], "1")
    Found(value=20)
    >>> resolve_segment([10, 20], "5")
    NOT_FOUND
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Tuple, Union


@dataclass(frozen=True)
class Found:
    """Successful resolution carrying the resolved value."""

    value: Any

    def __bool__(self) -> bool:
        return True


class _NotFound:
    """Singleton marker for a failed resolution."""

    _instance: Optional["_NotFound"] = None

    def __new__(cls) -> "_NotFound":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_FOUND"

    def __reduce__(self) -> str:
        return "NOT_FOUND"


NOT_FOUND = _NotFound()

ResolutionResult = Union[Found, _NotFound]

# Text-like sequences are scalars for resolution and iteration purposes.
TEXT_TYPES = (str, bytes, bytearray)


def is_index_segment(segment: str) -> bool:
    """Return True when ``segment`` denotes a numeric index."""
    return segment.isascii() and segment.isdigit()


def is_indexable(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, TEXT_TYPES)


class MemberResolver(ABC):
    """Resolve one path segment against one kind of data representation."""

    @abstractmethod
    def supports(self, value: Any, segment: str) -> bool:
        """Return True when this resolver owns ``segment`` on ``value``."""
        ...

    @abstractmethod
    def resolve(self, value: Any, segment: str) -> ResolutionResult:
        ...

    def get_name(self) -> str:
        """Get resolver name for logging/debugging."""
        return self.__class__.__name__


class SequenceResolver(MemberResolver):
    """Bounds-checked index access on ordered collections.

    Only numeric segments are claimed; names on a sequence fall through to
    member access, so namedtuple fields and properties still resolve.
    """

    def supports(self, value: Any, segment: str) -> bool:
        return is_indexable(value) and is_index_segment(segment)

    def resolve(self, value: Any, segment: str) -> ResolutionResult:
        index = int(segment)
        if index >= len(value):
            return NOT_FOUND
        return Found(value[index])


class MappingResolver(MemberResolver):
    """Key lookup on mappings. Keys are matched as strings, without coercion."""

    def supports(self, value: Any, segment: str) -> bool:
        return isinstance(value, Mapping)

    def resolve(self, value: Any, segment: str) -> ResolutionResult:
        if segment in value:
            return Found(value[segment])
        return NOT_FOUND


class AttributeResolver(MemberResolver):
    """Public field/property access on arbitrary objects.

    Private names and methods are not exposed.
    """

    def supports(self, value: Any, segment: str) -> bool:
        return True

    def resolve(self, value: Any, segment: str) -> ResolutionResult:
        if is_index_segment(segment) or segment.startswith("_") or not segment.isidentifier():
            return NOT_FOUND
        try:
            member = getattr(value, segment)
        except AttributeError:
            return NOT_FOUND
        if callable(member) and not isinstance(member, type):
            return NOT_FOUND
        return Found(member)


class ResolverRegistry:
    """Ordered collection of member resolvers.

    The first resolver whose ``supports`` accepts the value owns the
    segment; its answer is final.

        registry = ResolverRegistry.default()
        registry.register(MyRecordResolver(), index=0)
    """

    def __init__(self, resolvers: Optional[Iterable[MemberResolver]] = None) -> None:
        self._resolvers: List[MemberResolver] = list(resolvers or [])

    @classmethod
    def default(cls) -> "ResolverRegistry":
        return cls([SequenceResolver(), MappingResolver(), AttributeResolver()])

    def register(self, resolver: MemberResolver, index: Optional[int] = None) -> None:
        """Add a resolver, at the end or at ``index``."""
        if index is None:
            self._resolvers.append(resolver)
        else:
            self._resolvers.insert(index, resolver)

    def unregister(self, resolver: MemberResolver) -> None:
        self._resolvers = [r for r in self._resolvers if r is not resolver]

    def list_resolvers(self) -> List[str]:
        return [r.get_name() for r in self._resolvers]

    def resolve(self, value: Any, segment: str) -> ResolutionResult:
        if value is None:
            return NOT_FOUND
        for resolver in self._resolvers:
            if resolver.supports(value, segment):
                return resolver.resolve(value, segment)
        return NOT_FOUND


default_registry = ResolverRegistry.default()


def resolve_segment(
    value: Any,
    segment: str,
    registry: Optional[ResolverRegistry] = None,
) -> ResolutionResult:
    """Resolve a single segment against ``value``."""
    return (registry or default_registry).resolve(value, segment)


def walk_path(
    value: Any,
    segments: Iterable[str],
    registry: Optional[ResolverRegistry] = None,
) -> Tuple[ResolutionResult, str]:
    """Resolve consecutive segments, reporting the segment that failed.

    Returns ``(Found(value), "")`` or ``(NOT_FOUND, failing_segment)``.
    """
    current = value
    for segment in segments:
        result = resolve_segment(current, segment, registry)
        if not isinstance(result, Found):
            return NOT_FOUND, segment
        current = result.value
    return Found(current), ""


def resolve_path(
    value: Any,
    segments: Iterable[str],
    registry: Optional[ResolverRegistry] = None,
) -> ResolutionResult:
    """Resolve consecutive segments with plain member access and no fallback."""
    return walk_path(value, segments, registry)[0]


__all__ = [
    "Found",
    "NOT_FOUND",
    "ResolutionResult",
    "MemberResolver",
    "SequenceResolver",
    "MappingResolver",
    "AttributeResolver",
    "ResolverRegistry",
    "default_registry",
    "resolve_segment",
    "resolve_path",
    "walk_path",
    "is_index_segment",
    "is_indexable",
]

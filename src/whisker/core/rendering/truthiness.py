"""Truthiness and collection classification for sections.

Falsy: ``None``, ``False``, numeric zero, empty strings, empty mappings and
empty collections. Strings and mappings are scalars for iteration: a section
over a mapping renders once with the mapping as its scope value.

Sets have no stable order (string hashes vary per interpreter run), so their
elements are sorted when they are mutually comparable.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping, Set as AbstractSet
from typing import Any, List, Optional

from .resolution import TEXT_TYPES


def is_collection(value: Any) -> bool:
    """Return True when a section over ``value`` iterates its elements."""
    return (
        isinstance(value, Iterable)
        and not isinstance(value, TEXT_TYPES)
        and not isinstance(value, Mapping)
    )


def as_elements(value: Any) -> Optional[List[Any]]:
    """Materialize a collection's elements, or None for non-collections.

    One-shot iterators are consumed exactly once.
    """
    if not is_collection(value):
        return None
    if isinstance(value, AbstractSet):
        try:
            return sorted(value)
        except TypeError:
            # Mixed element types keep iteration order.
            return list(value)
    return list(value)


def is_truthy(value: Any) -> bool:
    if value is None:
        return False
    if is_collection(value):
        # Sized collections answer without consuming anything.
        if hasattr(value, "__len__"):
            return len(value) > 0
        return bool(as_elements(value))
    return bool(value)


__all__ = ["is_collection", "as_elements", "is_truthy"]

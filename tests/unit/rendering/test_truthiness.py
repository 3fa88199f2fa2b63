"""Tests for section classification."""
from __future__ import annotations

from collections import OrderedDict

import pytest

from whisker.core.rendering.truthiness import as_elements, is_collection, is_truthy


class Falsy:
    def __bool__(self) -> bool:
        return False


class TestIsCollection:
    @pytest.mark.parametrize("value", [[], (), set(), frozenset(), range(2), iter([1])])
    def test_collections(self, value) -> None:
        assert is_collection(value)

    @pytest.mark.parametrize("value", ["abc", b"abc", bytearray(b"a"), {}, OrderedDict(), 1, None, object()])
    def test_scalars(self, value) -> None:
        assert not is_collection(value)


class TestIsTruthy:
    @pytest.mark.parametrize("value", [None, False, 0, 0.0, 0j, "", b"", [], (), {}, set(), Falsy()])
    def test_falsy(self, value) -> None:
        assert not is_truthy(value)

    @pytest.mark.parametrize("value", [True, 1, -3, "0", " ", [0], {"a": None}, object()])
    def test_truthy(self, value) -> None:
        assert is_truthy(value)

    def test_empty_iterator_is_falsy(self) -> None:
        assert not is_truthy(iter([]))


class TestAsElements:
    def test_materializes_iterators(self) -> None:
        assert as_elements(n for n in range(3)) == [0, 1, 2]

    def test_none_for_scalars(self) -> None:
        assert as_elements("abc") is None
        assert as_elements({"a": 1}) is None

    def test_sets_are_sorted(self) -> None:
        assert as_elements({"pear", "apple", "fig"}) == ["apple", "fig", "pear"]
        assert as_elements(frozenset({3, 1, 2})) == [1, 2, 3]

    def test_unorderable_set_keeps_every_element(self) -> None:
        elements = as_elements({1, "a"})
        assert len(elements) == 2
        assert set(elements) == {1, "a"}

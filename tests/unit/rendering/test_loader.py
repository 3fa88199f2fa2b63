"""Tests for building node trees from plain data and YAML."""
from __future__ import annotations

from pathlib import Path

import pytest

from whisker.core.exceptions import TemplateStructureError
from whisker.core.rendering.engine import RenderEngine
from whisker.core.rendering.loader import load_tree, tree_from_dict, tree_to_dict
from whisker.core.rendering.nodes import Literal, NodeSequence, Placeholder, Section
from whisker.core.rendering.scope import KeyScope


class TestTreeFromDict:
    def test_bare_string_is_literal(self) -> None:
        assert tree_from_dict("hello") == Literal("hello")

    def test_list_is_sequence(self) -> None:
        tree = tree_from_dict(["Hi ", {"placeholder": "name"}, {"literal": "!"}])
        assert tree == NodeSequence([Literal("Hi "), Placeholder("name"), Literal("!")])

    def test_placeholder_escape(self) -> None:
        assert tree_from_dict({"placeholder": "x", "escape": True}) == Placeholder("x", escape=True)

    def test_section(self) -> None:
        tree = tree_from_dict({"section": "items", "invert": True, "body": [{"placeholder": "."}]})
        assert tree == Section("items", invert=True, body=[Placeholder(".")])

    def test_section_invert_defaults_false(self) -> None:
        tree = tree_from_dict({"section": "items", "body": []})
        assert isinstance(tree, Section)
        assert tree.invert is False

    @pytest.mark.parametrize(
        "data",
        [
            42,
            {"unknown": "x"},
            {"placeholder": ""},
            {"section": "items"},
            {"section": "items", "body": "not a list"},
            {"literal": "a", "placeholder": "b"},
            [{"placeholder": 3}],
        ],
    )
    def test_invalid_data(self, data) -> None:
        with pytest.raises(TemplateStructureError):
            tree_from_dict(data)

    def test_invalid_without_schema_still_fails(self) -> None:
        with pytest.raises(TemplateStructureError):
            tree_from_dict({"section": "items", "body": None}, validate=False)

    def test_serialization_preserves_tree(self) -> None:
        tree = NodeSequence(
            [
                Literal("<ul>"),
                Section("items", body=[Literal("<li>"), Placeholder("name", escape=True), Literal("</li>")]),
                Section("items", invert=True, body=[Literal("<li>none</li>")]),
                Literal("</ul>"),
            ]
        )
        assert tree_from_dict(tree_to_dict(tree)) == tree


class TestLoadTree:
    def test_renders_loaded_yaml(self, tmp_path: Path) -> None:
        source = tmp_path / "menu.yaml"
        source.write_text(
            "\n".join(
                [
                    "- \"Menu: \"",
                    "- placeholder: title",
                    "- section: items",
                    "  body:",
                    "    - \" * \"",
                    "    - placeholder: name",
                    "      escape: true",
                    "- section: items",
                    "  invert: true",
                    "  body:",
                    "    - \" (empty)\"",
                ]
            ),
            encoding="utf-8",
        )
        tree = load_tree(source)
        engine = RenderEngine()
        full = engine.render_to_string(tree, KeyScope({"title": "Lunch", "items": [{"name": "Tea & cake"}]}))
        empty = engine.render_to_string(tree, KeyScope({"title": "Lunch", "items": []}))
        assert full == "Menu: Lunch * Tea &amp; cake"
        assert empty == "Menu: Lunch (empty)"

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        source = tmp_path / "bad.yaml"
        source.write_text("- [unclosed", encoding="utf-8")
        with pytest.raises(TemplateStructureError):
            load_tree(source)

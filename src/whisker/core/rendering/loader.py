"""Build generator trees from plain data or YAML.

Serialized form (validated against ``template.schema.yaml``):

    - "Hello "                                  # bare string -> Literal
    - {placeholder: user.name, escape: true}
    - {literal: "!\\n"}
    - section: items
      invert: false
      body:
        - {placeholder: "."}

A list is a NodeSequence; the top level may be a list or a single node.
"""
from __future__ import annotations

from pathlib import Path
from collections.abc import Mapping
from typing import Any, List, Union

import yaml

from whisker.core.exceptions import SchemaValidationError, TemplateStructureError
from whisker.core.schemas.validation import validate_payload

from .nodes import GeneratorNode, Literal, NodeSequence, Placeholder, Section

TEMPLATE_SCHEMA = "template"


def _build(data: Any) -> GeneratorNode:
    if isinstance(data, str):
        return Literal(data)
    if isinstance(data, list):
        return _build_sequence(data)
    if isinstance(data, Mapping):
        if "literal" in data:
            return Literal(data["literal"])
        if "placeholder" in data:
            return Placeholder(data["placeholder"], escape=bool(data.get("escape", False)))
        if "section" in data:
            return Section(
                data["section"],
                invert=bool(data.get("invert", False)),
                body=_build_sequence(data.get("body")),
            )
    raise TemplateStructureError(
        "Unrecognized node data",
        context={"type": type(data).__name__},
    )


def _build_sequence(data: Any) -> NodeSequence:
    if not isinstance(data, list):
        raise TemplateStructureError(
            "Sequence data must be a list",
            context={"type": type(data).__name__},
        )
    children: List[GeneratorNode] = [_build(item) for item in data]
    return NodeSequence(children)


def tree_from_dict(data: Any, *, validate: bool = True) -> GeneratorNode:
    """Build a node tree from its serialized form.

    Raises:
        TemplateStructureError: If the data does not describe a valid tree.
    """
    if validate:
        try:
            validate_payload(data, TEMPLATE_SCHEMA)
        except SchemaValidationError as exc:
            raise TemplateStructureError(str(exc), context=exc.context) from exc
    return _build(data)


def tree_to_dict(node: GeneratorNode) -> Union[str, List[Any], dict]:
    """Serialize a node tree into the form accepted by ``tree_from_dict``."""
    if isinstance(node, Literal):
        return {"literal": node.text}
    if isinstance(node, Placeholder):
        out: dict = {"placeholder": node.path}
        if node.escape:
            out["escape"] = True
        return out
    if isinstance(node, Section):
        return {
            "section": node.path,
            "invert": node.invert,
            "body": tree_to_dict(node.body),
        }
    if isinstance(node, NodeSequence):
        return [tree_to_dict(child) for child in node.children]
    raise TemplateStructureError(
        "Cannot serialize node",
        context={"type": type(node).__name__},
    )


def load_tree(path: Path) -> GeneratorNode:
    """Read a serialized node tree from a YAML file."""
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise TemplateStructureError(
            f"Invalid YAML in {path}: {exc}",
            context={"path": str(path)},
        ) from exc
    return tree_from_dict(data)


__all__ = ["tree_from_dict", "tree_to_dict", "load_tree", "TEMPLATE_SCHEMA"]

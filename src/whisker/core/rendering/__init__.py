"""Rendering core for Whisker.

This package evaluates already-parsed generator trees against data:

- resolution: key resolution protocol and pluggable member resolvers
- truthiness: section classification (falsy, collection, scalar)
- scope: KeyScope with ancestor fallback and lookup observers
- formatting: formatter, format providers and escapers
- nodes: Literal, Placeholder, Section, NodeSequence
- engine: RenderEngine and the Generator facade
- observers: strict keys, render report, logging
- loader: node trees from plain data or YAML
"""
from __future__ import annotations

from .context import RenderContext
from .engine import Generator, RenderEngine, Sink, render
from .formatting import (
    FormatProvider,
    SpecFormatProvider,
    default_formatter,
    get_escaper,
    html_escape,
    no_escape,
)
from .loader import load_tree, tree_from_dict, tree_to_dict
from .nodes import GeneratorNode, Literal, NodeSequence, Placeholder, Section, sequence
from .observers import LoggingObserver, RenderReport, StrictKeysObserver
from .resolution import (
    NOT_FOUND,
    AttributeResolver,
    Found,
    MappingResolver,
    MemberResolver,
    ResolutionResult,
    ResolverRegistry,
    SequenceResolver,
    resolve_path,
    resolve_segment,
    walk_path,
)
from .scope import KeyFoundEvent, KeyNotFoundEvent, KeyScope
from .truthiness import as_elements, is_collection, is_truthy

__all__ = [
    # Resolution
    "Found",
    "NOT_FOUND",
    "ResolutionResult",
    "MemberResolver",
    "SequenceResolver",
    "MappingResolver",
    "AttributeResolver",
    "ResolverRegistry",
    "resolve_segment",
    "resolve_path",
    "walk_path",
    # Classification
    "is_truthy",
    "is_collection",
    "as_elements",
    # Scope
    "KeyScope",
    "KeyFoundEvent",
    "KeyNotFoundEvent",
    # Formatting
    "FormatProvider",
    "SpecFormatProvider",
    "default_formatter",
    "get_escaper",
    "html_escape",
    "no_escape",
    # Nodes
    "GeneratorNode",
    "Literal",
    "Placeholder",
    "Section",
    "NodeSequence",
    "sequence",
    # Engine
    "RenderContext",
    "RenderEngine",
    "Generator",
    "Sink",
    "render",
    # Observers
    "StrictKeysObserver",
    "RenderReport",
    "LoggingObserver",
    # Loader
    "tree_from_dict",
    "tree_to_dict",
    "load_tree",
]

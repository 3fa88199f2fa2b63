"""Generator nodes.

A parsed template is an immutable tree of nodes. Each node is a generator
factory: ``generate(scope, context)`` yields text chunks, and composite nodes
compose their children with ``yield from``. Nothing is buffered, so the
engine can forward chunks to a sink as soon as they are produced.

Node kinds:
- Literal         - fixed text
- Placeholder     - value of a key path, optionally escaped
- Section         - body rendered per element, once for a truthy value,
                    or (inverted) once when the value is missing or falsy
- NodeSequence    - ordered children sharing one scope

Trees are frozen dataclasses holding tuples, so a single tree can be rendered
concurrently from several threads.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from collections.abc import Iterable
from typing import Any, Iterator, Tuple, Union

from whisker.core.exceptions import TemplateStructureError

from .context import RenderContext
from .resolution import Found
from .scope import KeyScope
from .truthiness import as_elements, is_truthy


class GeneratorNode(ABC):
    """Abstract unit of renderable content."""

    @abstractmethod
    def generate(self, scope: KeyScope, context: RenderContext) -> Iterator[str]:
        """Yield the text this node produces for ``scope``."""
        ...

    def iter_nodes(self) -> Iterator["GeneratorNode"]:
        """Yield this node and every descendant, depth-first."""
        yield self

    def get_name(self) -> str:
        return self.__class__.__name__


def _require_path(node: str, path: Any) -> None:
    if not isinstance(path, str) or not path:
        raise TemplateStructureError(
            f"{node} requires a non-empty key path",
            context={"node": node, "path": path},
        )


@dataclass(frozen=True)
class Literal(GeneratorNode):
    """Fixed text, written verbatim."""

    text: str

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise TemplateStructureError(
                "Literal text must be a string",
                context={"node": "Literal", "type": type(self.text).__name__},
            )

    def generate(self, scope: KeyScope, context: RenderContext) -> Iterator[str]:
        if self.text:
            yield self.text


@dataclass(frozen=True)
class Placeholder(GeneratorNode):
    """Substitute the value found at ``path``.

    Missing keys produce no output; the scope still reports them to its
    not-found handlers.
    """

    path: str
    escape: bool = False

    def __post_init__(self) -> None:
        _require_path("Placeholder", self.path)

    def generate(self, scope: KeyScope, context: RenderContext) -> Iterator[str]:
        result = scope.lookup(self.path)
        if not isinstance(result, Found):
            return
        text = context.format(result.value)
        if self.escape:
            text = context.escape(text)
        if text:
            yield text


@dataclass(frozen=True)
class NodeSequence(GeneratorNode):
    """Ordered children rendered against the same scope."""

    children: Tuple[GeneratorNode, ...] = ()

    def __post_init__(self) -> None:
        if isinstance(self.children, (str, bytes)) or not isinstance(self.children, Iterable):
            raise TemplateStructureError(
                "NodeSequence children must be an iterable of nodes",
                context={"node": "NodeSequence", "type": type(self.children).__name__},
            )
        children = tuple(self.children)
        for index, child in enumerate(children):
            if not isinstance(child, GeneratorNode):
                raise TemplateStructureError(
                    f"NodeSequence child {index} is not a generator node",
                    context={"node": "NodeSequence", "index": index, "type": type(child).__name__},
                )
        object.__setattr__(self, "children", children)

    def __len__(self) -> int:
        return len(self.children)

    def generate(self, scope: KeyScope, context: RenderContext) -> Iterator[str]:
        for child in self.children:
            yield from child.generate(scope, context)

    def iter_nodes(self) -> Iterator[GeneratorNode]:
        yield self
        for child in self.children:
            yield from child.iter_nodes()


@dataclass(frozen=True)
class Section(GeneratorNode):
    """Conditional or repeated rendering of ``body``.

    Not inverted:
      missing, falsy or empty  -> nothing
      collection               -> body once per element, each in a child scope
      other truthy value       -> body once in a child scope wrapping the value
    Inverted:
      missing, falsy or empty  -> body once in the current scope
      anything else            -> nothing
    """

    path: str
    invert: bool = False
    body: NodeSequence = field(default_factory=NodeSequence)

    def __post_init__(self) -> None:
        _require_path("Section", self.path)
        body: Union[NodeSequence, Any] = self.body
        if body is None:
            raise TemplateStructureError(
                "Section body must not be None",
                context={"node": "Section", "path": self.path},
            )
        if not isinstance(body, NodeSequence):
            body = NodeSequence(body)
            object.__setattr__(self, "body", body)

    def generate(self, scope: KeyScope, context: RenderContext) -> Iterator[str]:
        result = scope.lookup(self.path)

        if self.invert:
            if not isinstance(result, Found) or not is_truthy(result.value):
                yield from self.body.generate(scope, context)
            return

        if not isinstance(result, Found):
            return

        value = result.value
        elements = as_elements(value)
        if elements is not None:
            for element in elements:
                yield from self.body.generate(scope.create_child(element), context)
            return

        if is_truthy(value):
            yield from self.body.generate(scope.create_child(value), context)

    def iter_nodes(self) -> Iterator[GeneratorNode]:
        yield self
        yield from self.body.iter_nodes()


def sequence(*children: GeneratorNode) -> NodeSequence:
    """Shorthand for ``NodeSequence(children)``."""
    return NodeSequence(children)


__all__ = [
    "GeneratorNode",
    "Literal",
    "Placeholder",
    "Section",
    "NodeSequence",
    "sequence",
]

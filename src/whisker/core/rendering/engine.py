"""Render engine and the ``Generator`` facade.

``RenderEngine.render`` walks a node tree against a root scope and writes each
chunk to the sink as soon as a node yields it. Output already written stays
written if a handler raises midway.

``Generator`` is the caller-facing wrapper around a compiled tree: it owns
the handler lists, builds a fresh root scope for every render, and returns
the produced text.

Usage:
    template = Generator(NodeSequence([Literal("Hi "), Placeholder("name"), Literal("!")]))
    template.render({"name": "Ada"})    # "Hi Ada!"
"""
from __future__ import annotations

import io
import logging
from typing import Any, Iterator, List, Optional, Protocol

from whisker.core.config.rendering import RenderingConfig
from whisker.core.exceptions import TemplateStructureError

from .context import RenderContext
from .formatting import Formatter, default_formatter, get_escaper
from .nodes import GeneratorNode
from .observers import StrictKeysObserver
from .resolution import ResolverRegistry
from .scope import KeyFoundHandler, KeyNotFoundHandler, KeyScope, remove_by_identity

logger = logging.getLogger(__name__)


class Sink(Protocol):
    """Destination for rendered text (``io.StringIO``, an open file, ...)."""

    def write(self, text: str) -> Any: ...


class RenderEngine:
    """Drive a generator tree against a scope and a sink."""

    def __init__(self, context: Optional[RenderContext] = None) -> None:
        self.context = context or RenderContext()

    @staticmethod
    def _check_root(root: Any) -> None:
        if not isinstance(root, GeneratorNode):
            raise TemplateStructureError(
                "Render root must be a generator node",
                context={"type": type(root).__name__},
            )

    def iter_render(self, root: GeneratorNode, scope: KeyScope) -> Iterator[str]:
        """Yield output chunks in document order."""
        self._check_root(root)
        yield from root.generate(scope, self.context)

    def render(self, root: GeneratorNode, scope: KeyScope, sink: Sink) -> None:
        self._check_root(root)
        logger.debug("Rendering %s at scope depth %d", root.get_name(), scope.depth)
        chunks = 0
        for chunk in self.iter_render(root, scope):
            sink.write(chunk)
            chunks += 1
        logger.debug("Rendered %s (%d chunks)", root.get_name(), chunks)

    def render_to_string(self, root: GeneratorNode, scope: KeyScope) -> str:
        buffer = io.StringIO()
        self.render(root, scope, buffer)
        return buffer.getvalue()


def render(
    root: GeneratorNode,
    scope: KeyScope,
    sink: Sink,
    context: Optional[RenderContext] = None,
) -> None:
    """Render ``root`` against ``scope`` into ``sink``."""
    RenderEngine(context).render(root, scope, sink)


class Generator:
    """Generates text by substituting an object's values for placeholders.

    Handlers registered here are copied onto the root scope of each render,
    after which they fire for lookups at any depth. Registering or removing
    handlers while a render is in progress does not affect that render.
    """

    def __init__(
        self,
        root: GeneratorNode,
        *,
        formatter: Optional[Formatter] = None,
        settings: Optional[RenderingConfig] = None,
        registry: Optional[ResolverRegistry] = None,
    ) -> None:
        RenderEngine._check_root(root)
        self.root = root
        self.formatter: Formatter = formatter or default_formatter
        self.settings = settings or RenderingConfig()
        self.registry = registry
        self.escaper = get_escaper(self.settings.escape)
        self._found_handlers: List[KeyFoundHandler] = []
        self._not_found_handlers: List[KeyNotFoundHandler] = []

    def add_key_found_handler(self, handler: KeyFoundHandler) -> None:
        """Occurs when a key is found."""
        self._found_handlers.append(handler)

    def remove_key_found_handler(self, handler: KeyFoundHandler) -> None:
        remove_by_identity(self._found_handlers, handler)

    def add_key_not_found_handler(self, handler: KeyNotFoundHandler) -> None:
        """Occurs when a key is not found anywhere in the scope chain."""
        self._not_found_handlers.append(handler)

    def remove_key_not_found_handler(self, handler: KeyNotFoundHandler) -> None:
        remove_by_identity(self._not_found_handlers, handler)

    def create_scope(self, source: Any) -> KeyScope:
        """Build the root scope for ``source`` with this generator's handlers."""
        scope = KeyScope(
            source,
            registry=self.registry,
            separator=self.settings.path_separator,
            current_value_keys=self.settings.current_value_keys,
        )
        for found in self._found_handlers:
            scope.add_key_found_handler(found)
        for not_found in self._not_found_handlers:
            scope.add_key_not_found_handler(not_found)
        if self.settings.strict_keys:
            StrictKeysObserver().attach(scope)
        return scope

    def create_context(self, provider: Any = None) -> RenderContext:
        if provider is None:
            provider = self.settings.provider
        return RenderContext(formatter=self.formatter, provider=provider, escaper=self.escaper)

    def render_to(self, sink: Sink, source: Any, provider: Any = None) -> None:
        """Write the text generated for ``source`` into ``sink``."""
        engine = RenderEngine(self.create_context(provider))
        engine.render(self.root, self.create_scope(source), sink)

    def render(self, source: Any, provider: Any = None) -> str:
        """Return the text generated for ``source``.

        Args:
            source: The object to generate the text with.
            provider: Format provider; defaults to the configured provider.
        """
        buffer = io.StringIO()
        self.render_to(buffer, source, provider)
        return buffer.getvalue()


__all__ = ["RenderEngine", "Generator", "Sink", "render"]

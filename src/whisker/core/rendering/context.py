"""Per-render settings passed down the node tree.

The context is immutable and carries no scope: the scope is the only state
that changes while descending, and it is passed alongside the context.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .formatting import Escaper, Formatter, default_formatter, html_escape


@dataclass(frozen=True)
class RenderContext:
    """Formatting capability, format provider and escaper for one render."""

    formatter: Formatter = default_formatter
    provider: Any = None
    escaper: Escaper = field(default=html_escape)

    def format(self, value: Any) -> str:
        """Convert ``value`` with the formatter and this render's provider."""
        return self.formatter(value, self.provider)

    def escape(self, text: str) -> str:
        return self.escaper(text)


__all__ = ["RenderContext"]

"""Value formatting and output escaping for placeholders.

A formatter is any callable ``(value, provider) -> str``. The provider is an
opaque value handed through from ``Generator.render`` (a locale name, a
``FormatProvider``, or anything a custom formatter understands).
"""
from __future__ import annotations

import html
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Mapping, Optional

from whisker.core.exceptions import ConfigError

Formatter = Callable[[Any, Any], str]
Escaper = Callable[[str], str]


class FormatProvider(ABC):
    """Object-style provider consulted by ``default_formatter``."""

    @abstractmethod
    def format_value(self, value: Any) -> str:
        ...


class SpecFormatProvider(FormatProvider):
    """Apply ``format()`` specs chosen by the value's type.

    Example:
        provider = SpecFormatProvider({float: ".2f", int: ","})
        default_formatter(1234.5, provider)   # "1234.50"
        default_formatter(1234567, provider)  # "1,234,567"
    """

    def __init__(self, specs: Mapping[type, str]) -> None:
        self.specs: Dict[type, str] = dict(specs)

    def format_value(self, value: Any) -> str:
        # bool is an int subclass; match on the exact type first.
        spec = self.specs.get(type(value))
        if spec is None:
            for kind, candidate in self.specs.items():
                if isinstance(value, kind) and not isinstance(value, bool):
                    spec = candidate
                    break
        return format(value, spec or "")


def default_formatter(value: Any, provider: Any = None) -> str:
    """Convert a resolved value to text.

    ``None`` renders as an empty string. Providers other than
    ``FormatProvider`` instances are ignored.
    """
    if value is None:
        return ""
    if isinstance(provider, FormatProvider):
        return provider.format_value(value)
    if isinstance(value, str):
        return value
    return str(value)


def no_escape(text: str) -> str:
    return text


def html_escape(text: str) -> str:
    return html.escape(text, quote=True)


ESCAPERS: Dict[str, Escaper] = {
    "html": html_escape,
    "none": no_escape,
}


def get_escaper(name: Optional[str]) -> Escaper:
    """Return the escaper registered under ``name`` (``None`` means "none")."""
    key = (name or "none").lower()
    try:
        return ESCAPERS[key]
    except KeyError:
        raise ConfigError(
            f"Unknown escape mode: {name}",
            context={"escape": name, "available": sorted(ESCAPERS)},
        ) from None


__all__ = [
    "Formatter",
    "Escaper",
    "FormatProvider",
    "SpecFormatProvider",
    "default_formatter",
    "html_escape",
    "no_escape",
    "get_escaper",
    "ESCAPERS",
]

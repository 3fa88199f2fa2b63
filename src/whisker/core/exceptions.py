from __future__ import annotations

from typing import Any, Dict, Mapping


class WhiskerError(Exception):
    """Base exception for Whisker."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ConfigError(WhiskerError):
    """Raised when configuration cannot be loaded or is invalid."""


class SchemaValidationError(WhiskerError, ValueError):
    """Raised when a payload fails JSON Schema validation."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        WhiskerError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class TemplateStructureError(WhiskerError, ValueError):
    """Raised when a generator node tree is not well-formed."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        WhiskerError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class KeyNotFoundError(WhiskerError, KeyError):
    """Raised in strict mode when a key path cannot be resolved."""

    def __init__(self, key: str, *, context: Mapping[str, Any] | None = None) -> None:
        ctx = dict(context or {})
        ctx.setdefault("key", key)
        message = f"Key not found: {key}"
        WhiskerError.__init__(self, message, context=ctx)
        KeyError.__init__(self, message)
        self.key = key

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message.
        return f"Key not found: {self.key}"


__all__ = [
    "WhiskerError",
    "ConfigError",
    "SchemaValidationError",
    "TemplateStructureError",
    "KeyNotFoundError",
]

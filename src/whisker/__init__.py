"""
Whisker - scope-resolving template rendering engine

Whisker evaluates parsed template trees (literals, placeholders and
sections) against arbitrary Python data, resolving dotted key paths through
a chain of nested scopes and streaming the output to a sink.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]

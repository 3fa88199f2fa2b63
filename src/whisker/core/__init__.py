"""Core modules for Whisker.

- config: layered YAML configuration
- exceptions: error taxonomy
- rendering: scopes, generator nodes and the render engine
- schemas: JSON Schema validation
- utils: shared helpers
"""

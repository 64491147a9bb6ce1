"""passcore - command registry and scripting interpreter for multi-pass tools."""

__version__ = "0.1.0"

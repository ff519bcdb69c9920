"""Visitor counter that answers with a pixel-font PNG."""

__version__ = "0.1.0"

"""Luma reference documentation viewer with in-memory search."""

__version__ = "0.1.0"

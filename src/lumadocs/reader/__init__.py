"""Reader sessions and result navigation."""

from lumadocs.reader.navigator import DocumentLoader, DocumentLoadError, ResultNavigator
from lumadocs.reader.surface import ElementHandle, ReaderSessions, ReaderState, ReaderSurface

__all__ = [
    "DocumentLoadError",
    "DocumentLoader",
    "ElementHandle",
    "ReaderSessions",
    "ReaderState",
    "ReaderSurface",
    "ResultNavigator",
]

"""JSON-file persistence for class documents, the chunk library and sentences."""

from __future__ import annotations

from .atomic import write_json_atomic
from .stores import JsonEntryStore, JsonLibraryStore, JsonSentenceSource, StoreCheckpoint

__all__ = [
    "JsonEntryStore",
    "JsonLibraryStore",
    "JsonSentenceSource",
    "StoreCheckpoint",
    "write_json_atomic",
]

"""Domain model for vocabulary and sentence cards."""

from __future__ import annotations

from .collation import collation_key
from .sentences import Hint, Sentence, SentenceDocument
from .units import EMPTY_LIBRARY_VERSION, ClassDocument, Registry, RegistryEntry, Unit
from .variants import union_variants

__all__ = [
    "EMPTY_LIBRARY_VERSION",
    "ClassDocument",
    "Hint",
    "Registry",
    "RegistryEntry",
    "Sentence",
    "SentenceDocument",
    "Unit",
    "collation_key",
    "union_variants",
]

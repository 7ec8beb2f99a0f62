"""Domain port definitions for adapters."""

from __future__ import annotations

from .cards import CardProvisioner, ProvisionedCard, SentenceCardProvisioner
from .decks import Deck, DeckResolver
from .persistence import EntryStore, LibraryStore, PersistCheckpoint, SentenceSource

__all__ = [
    "CardProvisioner",
    "Deck",
    "DeckResolver",
    "EntryStore",
    "LibraryStore",
    "PersistCheckpoint",
    "ProvisionedCard",
    "SentenceCardProvisioner",
    "SentenceSource",
]

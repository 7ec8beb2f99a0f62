"""Ports for looking up and creating Mochi decks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class Deck:
    id: str
    name: str
    parent_id: str | None = None


@runtime_checkable
class DeckResolver(Protocol):
    """Find decks by name and create missing ones."""

    def resolve(self, name: str) -> Deck | None: ...

    def create(self, name: str, parent_id: str | None = None) -> Deck: ...

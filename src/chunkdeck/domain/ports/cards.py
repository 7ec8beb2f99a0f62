"""Ports for creating cards in the external flashcard service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from chunkdeck.domain.model import Sentence, Unit


@dataclass(frozen=True, slots=True)
class ProvisionedCard:
    """Stable identifier handed back by the card service."""

    id: str


@runtime_checkable
class CardProvisioner(Protocol):
    """Create one vocabulary card for ``unit`` inside ``deck_id``."""

    def create(self, deck_id: str, unit: Unit) -> ProvisionedCard: ...


@runtime_checkable
class SentenceCardProvisioner(Protocol):
    """Create one sentence card inside ``deck_id``."""

    def create(self, deck_id: str, sentence: Sentence) -> ProvisionedCard: ...

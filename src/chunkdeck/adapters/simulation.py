"""Dry-run collaborators: log what would happen and touch nothing.

Swapping these in for the Mochi adapters and the file checkpoint gives a
dry run that walks exactly the same engine code as a real run.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from chunkdeck.domain.ports import Deck, ProvisionedCard

if TYPE_CHECKING:
    from chunkdeck.domain.model import ClassDocument, Registry, Sentence, Unit
    from chunkdeck.domain.ports import (
        CardProvisioner,
        DeckResolver,
        PersistCheckpoint,
        SentenceCardProvisioner,
    )

log = getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
SENTENCE_ID_PREFIX_LENGTH = 24


def _slug(text: str) -> str:
    return _WHITESPACE.sub("_", text)


@dataclass(slots=True)
class DryRunDeckResolver:
    """Look decks up through ``lookup`` when given one; never create any."""

    lookup: DeckResolver | None = None
    created: list[Deck] = field(default_factory=list[Deck])

    def resolve(self, name: str) -> Deck | None:
        if self.lookup is None:
            return None
        return self.lookup.resolve(name)

    def create(self, name: str, parent_id: str | None = None) -> Deck:
        log.info('[DRY_RUN] create deck "%s" parent=%s', name, parent_id or "(none)")
        deck = Deck(id=f"DRY_DECK_{name}", name=name, parent_id=parent_id)
        self.created.append(deck)
        return deck


@dataclass(slots=True)
class DryRunCardProvisioner:
    created: list[str] = field(default_factory=list[str])

    def create(self, deck_id: str, unit: Unit) -> ProvisionedCard:
        log.info('[DRY_RUN] create card "%s" in deck %s', unit.chunk, deck_id)
        self.created.append(unit.chunk)
        return ProvisionedCard(id=f"DRY_CARD_{_slug(unit.chunk)}")


@dataclass(slots=True)
class DryRunSentenceCardProvisioner:
    created: list[str] = field(default_factory=list[str])

    def create(self, deck_id: str, sentence: Sentence) -> ProvisionedCard:
        log.info("[DRY_RUN] create sentence card in deck %s: %s", deck_id, sentence.en)
        self.created.append(sentence.en)
        return ProvisionedCard(id=f"DRY_CARD_{_slug(sentence.en[:SENTENCE_ID_PREFIX_LENGTH])}")


@dataclass(slots=True)
class NullCheckpoint:
    """Count checkpoints instead of writing files."""

    calls: int = 0

    def __call__(self, document: ClassDocument, registry: Registry) -> None:
        self.calls += 1
        log.debug(
            "[DRY_RUN] skip saving class %s (%d units) and library (%d entries)",
            document.class_id,
            len(document),
            len(registry),
        )


if TYPE_CHECKING:
    _deck_check: type[DeckResolver] = DryRunDeckResolver
    _card_check: type[CardProvisioner] = DryRunCardProvisioner
    _sentence_check: type[SentenceCardProvisioner] = DryRunSentenceCardProvisioner
    _checkpoint_check: type[PersistCheckpoint] = NullCheckpoint

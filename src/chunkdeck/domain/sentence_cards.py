"""Create one card per sentence of a class sentence document.

Sentence cards are not tracked in the chunk library: every run creates a card
for every sentence in the document.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from .decks import find_or_create_deck

if TYPE_CHECKING:
    from .model import SentenceDocument
    from .ports import Deck, DeckResolver, ProvisionedCard, SentenceCardProvisioner

log = getLogger(__name__)


@dataclass(slots=True)
class SentenceBuildResult:
    deck: Deck
    cards: list[ProvisionedCard] = field(default_factory=list["ProvisionedCard"])

    @property
    def created(self) -> int:
        return len(self.cards)


def build_sentence_cards(
    document: SentenceDocument,
    *,
    decks: DeckResolver,
    cards: SentenceCardProvisioner,
    parent_deck_id: str | None = None,
) -> SentenceBuildResult:
    deck = find_or_create_deck(decks, document.sentence_deck_name, parent_id=parent_deck_id)
    result = SentenceBuildResult(deck=deck)
    for sentence in document.sentences:
        result.cards.append(cards.create(deck.id, sentence))
        log.info("+ %s", sentence.en)
    log.info("Done. Sentence cards created=%d.", result.created)
    return result

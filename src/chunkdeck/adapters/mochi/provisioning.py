"""Mochi-backed implementations of the deck and card ports."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from chunkdeck.domain.errors import ProvisionError
from chunkdeck.domain.ports import Deck, ProvisionedCard

from .client import MochiAPIError
from .translator import sentence_card_fields, vocab_card_fields

if TYPE_CHECKING:
    from chunkdeck.config.decks import SentenceDeckConfig, VocabDeckConfig
    from chunkdeck.domain.model import Sentence, Unit
    from chunkdeck.domain.ports import CardProvisioner, DeckResolver, SentenceCardProvisioner

    from .client import MochiClient
    from .schema import DeckPayload

log = getLogger(__name__)


def _to_deck(payload: DeckPayload) -> Deck:
    return Deck(id=payload.id, name=payload.name, parent_id=payload.parent_id)


@dataclass(slots=True)
class MochiDeckResolver:
    client: MochiClient

    def resolve(self, name: str) -> Deck | None:
        try:
            matches = [deck for deck in self.client.list_decks() if deck.name == name]
        except (httpx.HTTPError, MochiAPIError) as exc:
            raise ProvisionError(f"Could not list decks: {exc}") from exc
        if not matches:
            return None
        if len(matches) > 1:
            log.warning(
                "Several decks are named %r (ids: %s); using the first one listed",
                name,
                ", ".join(deck.id for deck in matches),
            )
        return _to_deck(matches[0])

    def create(self, name: str, parent_id: str | None = None) -> Deck:
        try:
            payload = self.client.create_deck(name=name, parent_id=parent_id)
        except (httpx.HTTPError, MochiAPIError) as exc:
            raise ProvisionError(f'Could not create deck "{name}": {exc}') from exc
        return _to_deck(payload)


@dataclass(slots=True)
class MochiVocabCardProvisioner:
    client: MochiClient
    config: VocabDeckConfig

    def create(self, deck_id: str, unit: Unit) -> ProvisionedCard:
        try:
            card = self.client.create_card(
                deck_id=deck_id,
                template_id=self.config.template_id,
                fields=vocab_card_fields(unit, self.config),
            )
        except (httpx.HTTPError, MochiAPIError) as exc:
            raise ProvisionError(f'Could not create card for "{unit.chunk}": {exc}') from exc
        return ProvisionedCard(id=card.id)


@dataclass(slots=True)
class MochiSentenceCardProvisioner:
    client: MochiClient
    config: SentenceDeckConfig

    def create(self, deck_id: str, sentence: Sentence) -> ProvisionedCard:
        try:
            card = self.client.create_card(
                deck_id=deck_id,
                template_id=self.config.template_id,
                fields=sentence_card_fields(sentence, self.config),
            )
        except (httpx.HTTPError, MochiAPIError) as exc:
            raise ProvisionError(f'Could not create sentence card "{sentence.en}": {exc}') from exc
        return ProvisionedCard(id=card.id)


if TYPE_CHECKING:
    _deck_check: type[DeckResolver] = MochiDeckResolver
    _vocab_check: type[CardProvisioner] = MochiVocabCardProvisioner
    _sentence_check: type[SentenceCardProvisioner] = MochiSentenceCardProvisioner

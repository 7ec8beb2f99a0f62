"""Deck lookup shared by the vocabulary and sentence workflows."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chunkdeck.domain.ports import Deck, DeckResolver

log = getLogger(__name__)


def find_or_create_deck(
    resolver: DeckResolver,
    name: str,
    *,
    parent_id: str | None = None,
) -> Deck:
    """Return the deck called ``name``, creating it under ``parent_id`` if absent."""

    deck = resolver.resolve(name)
    if deck is not None:
        log.info("Using existing deck %s (id=%s)", name, deck.id)
        return deck
    deck = resolver.create(name, parent_id=parent_id)
    log.info("Created deck %s (id=%s, parent=%s)", name, deck.id, parent_id or "(none)")
    return deck

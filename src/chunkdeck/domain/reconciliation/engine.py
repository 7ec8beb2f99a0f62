"""Reconcile a class document against the chunk library.

Units are processed strictly in document order, one external call at a time:

1) look the chunk up in the library
2) refuse to continue when both sides carry different non-empty ids
3) cache hit: backfill the unit id, merge variants, skip
4) cache miss: create the card, register it, checkpoint both documents

After the last unit the library is sorted and both documents are persisted
once more. Failures abort the run; earlier checkpoints stand, and a rerun
skips every unit that already reached the library.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from chunkdeck.domain.decks import find_or_create_deck
from chunkdeck.domain.errors import ConflictError
from chunkdeck.domain.model import RegistryEntry

if TYPE_CHECKING:
    from chunkdeck.domain.model import ClassDocument, Registry, Unit
    from chunkdeck.domain.ports import CardProvisioner, Deck, DeckResolver, PersistCheckpoint

log = getLogger(__name__)


@dataclass(slots=True)
class ReconciliationResult:
    """Outcome of one reconciliation run."""

    document: ClassDocument
    registry: Registry
    created: int = 0
    skipped: list[str] = field(default_factory=list[str])
    deck: Deck | None = None


@dataclass(slots=True)
class ReconciliationEngine:
    """Assign each unit of a class document exactly one card id."""

    decks: DeckResolver
    cards: CardProvisioner
    checkpoint: PersistCheckpoint
    parent_deck_id: str | None = None

    def reconcile(self, document: ClassDocument, registry: Registry) -> ReconciliationResult:
        result = ReconciliationResult(document=document, registry=registry)

        for unit in document:
            entry = registry.get(unit.chunk)
            _check_conflict(unit, entry)

            if entry is not None and entry.has_id:
                unit.id = entry.id
                entry.merge_variants(unit.variants)
                result.skipped.append(unit.chunk)
                continue

            if result.deck is None:
                result.deck = find_or_create_deck(
                    self.decks,
                    document.vocab_deck_name,
                    parent_id=self.parent_deck_id,
                )
            self._provision(unit, entry, registry=registry, deck=result.deck)
            result.created += 1
            self.checkpoint(document, registry)

        registry.sort()
        self.checkpoint(document, registry)

        if result.skipped:
            log.warning(
                "Skipped %d chunk(s) already registered in the library: %s",
                len(result.skipped),
                ", ".join(result.skipped),
            )
        log.info(
            "Done. New cards created=%d. Skipped(existing)=%d.",
            result.created,
            len(result.skipped),
        )
        return result

    def _provision(
        self,
        unit: Unit,
        entry: RegistryEntry | None,
        *,
        registry: Registry,
        deck: Deck,
    ) -> None:
        if unit.has_id:
            log.warning(
                "Chunk %r carries id %r unknown to the library; creating a new card",
                unit.chunk,
                unit.id,
            )
        card = self.cards.create(deck.id, unit)
        unit.id = card.id

        if entry is None:
            entry = RegistryEntry.for_chunk(unit.chunk)
            registry.add(entry)
        entry.id = card.id
        entry.merge_variants(unit.variants)
        if unit.meaning is not None:
            entry.meaning = unit.meaning
        if unit.obs is not None:
            entry.obs = unit.obs
        log.info("+ %s -> %s", unit.chunk, unit.id)


def _check_conflict(unit: Unit, entry: RegistryEntry | None) -> None:
    if entry is None or not entry.has_id or not unit.has_id:
        return
    if unit.id != entry.id:
        raise ConflictError(unit.chunk, document_id=unit.id, registry_id=entry.id)

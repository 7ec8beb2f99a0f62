"""Application orchestration entry points."""

from __future__ import annotations

import re
from contextlib import ExitStack
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from chunkdeck.adapters.json_store import (
    JsonEntryStore,
    JsonLibraryStore,
    JsonSentenceSource,
    StoreCheckpoint,
)
from chunkdeck.adapters.mochi import (
    MochiClient,
    MochiDeckResolver,
    MochiSentenceCardProvisioner,
    MochiVocabCardProvisioner,
)
from chunkdeck.adapters.simulation import (
    DryRunCardProvisioner,
    DryRunDeckResolver,
    DryRunSentenceCardProvisioner,
    NullCheckpoint,
)
from chunkdeck.config import (
    get_mochi_config,
    get_sentence_deck_config,
    get_storage_config,
    get_vocab_deck_config,
)
from chunkdeck.domain.reconciliation import ReconciliationEngine, ReconciliationResult
from chunkdeck.domain.sentence_cards import SentenceBuildResult, build_sentence_cards

if TYPE_CHECKING:
    from chunkdeck.adapters.mochi import DeckPayload
    from chunkdeck.config import MochiConfig, SentenceDeckConfig, StorageConfig, VocabDeckConfig
    from chunkdeck.domain.ports import (
        CardProvisioner,
        DeckResolver,
        EntryStore,
        LibraryStore,
        PersistCheckpoint,
        SentenceCardProvisioner,
        SentenceSource,
    )

log = getLogger(__name__)

_CLASS_ID = re.compile(r"^\d{3}$")


def build_vocab_deck(
    class_path: Path,
    *,
    library_path: Path | None = None,
    config: VocabDeckConfig | None = None,
    storage: StorageConfig | None = None,
    mochi: MochiConfig | None = None,
    entry_store: EntryStore | None = None,
    library_store: LibraryStore | None = None,
    deck_resolver: DeckResolver | None = None,
    card_provisioner: CardProvisioner | None = None,
    checkpoint: PersistCheckpoint | None = None,
) -> ReconciliationResult:
    """Create Mochi cards for every new chunk of a class document."""

    effective_config = config or get_vocab_deck_config()
    effective_library = library_path or (storage or get_storage_config()).resolve_library_path()
    entries = entry_store or JsonEntryStore(class_path.resolve())
    library = library_store or JsonLibraryStore(effective_library)

    document = entries.load()
    registry = library.load()

    log.info("Class file: %s", class_path.resolve())
    log.info("Library: %s", effective_library)
    log.info("Deck: %s", document.vocab_deck_name)
    log.info("DRY_RUN: %s", "yes" if effective_config.dry_run else "no")

    if effective_config.obs_field_id is None and any(unit.obs for unit in document):
        log.warning(
            "Some entries have 'obs' but VOCAB_FIELD_OBS_ID is not set. obs will be ignored."
        )

    if checkpoint is None:
        checkpoint = (
            NullCheckpoint() if effective_config.dry_run else StoreCheckpoint(entries, library)
        )

    with ExitStack() as stack:
        if deck_resolver is None or card_provisioner is None:
            client = stack.enter_context(MochiClient(config=mochi or get_mochi_config()))
            if effective_config.dry_run:
                deck_resolver = deck_resolver or DryRunDeckResolver(
                    lookup=MochiDeckResolver(client)
                )
                card_provisioner = card_provisioner or DryRunCardProvisioner()
            else:
                deck_resolver = deck_resolver or MochiDeckResolver(client)
                card_provisioner = card_provisioner or MochiVocabCardProvisioner(
                    client, effective_config
                )

        engine = ReconciliationEngine(
            decks=deck_resolver,
            cards=card_provisioner,
            checkpoint=checkpoint,
            parent_deck_id=effective_config.master_deck_id,
        )
        return engine.reconcile(document, registry)


def resolve_sentences_path(argument: str, *, storage: StorageConfig | None = None) -> Path:
    """Map a three-digit class id to its sentence file; anything else is a path."""

    if _CLASS_ID.match(argument):
        return (storage or get_storage_config()).sentences_path(argument)
    return Path(argument).resolve()


def build_sentence_deck(
    sentences_path: Path,
    *,
    config: SentenceDeckConfig | None = None,
    mochi: MochiConfig | None = None,
    sentence_source: SentenceSource | None = None,
    deck_resolver: DeckResolver | None = None,
    card_provisioner: SentenceCardProvisioner | None = None,
) -> SentenceBuildResult:
    """Create one Mochi card per sentence of a class sentence document."""

    effective_config = config or get_sentence_deck_config()
    document = (sentence_source or JsonSentenceSource(sentences_path)).load()

    log.info("Sentences file: %s", sentences_path)
    log.info("Deck: %s", document.sentence_deck_name)
    log.info("MASTER_SENTENCE_DECK_ID: %s", effective_config.master_deck_id or "(not set)")
    log.info("DRY_RUN: %s", "yes" if effective_config.dry_run else "no")

    with ExitStack() as stack:
        if deck_resolver is None or card_provisioner is None:
            client = stack.enter_context(MochiClient(config=mochi or get_mochi_config()))
            if effective_config.dry_run:
                deck_resolver = deck_resolver or DryRunDeckResolver(
                    lookup=MochiDeckResolver(client)
                )
                card_provisioner = card_provisioner or DryRunSentenceCardProvisioner()
            else:
                deck_resolver = deck_resolver or MochiDeckResolver(client)
                card_provisioner = card_provisioner or MochiSentenceCardProvisioner(
                    client, effective_config
                )

        return build_sentence_cards(
            document,
            decks=deck_resolver,
            cards=card_provisioner,
            parent_deck_id=effective_config.master_deck_id,
        )


def list_decks(*, client: MochiClient | None = None) -> list[DeckPayload]:
    if client is None:
        with MochiClient(config=get_mochi_config()) as owned:
            decks = owned.list_decks()
    else:
        decks = client.list_decks()
    log.info("Found %d deck(s)", len(decks))
    return decks

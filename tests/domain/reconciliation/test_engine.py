from __future__ import annotations

import logging

import pytest

from chunkdeck.domain.errors import ConflictError, ProvisionError
from chunkdeck.domain.model import Registry
from chunkdeck.domain.ports import Deck
from chunkdeck.domain.reconciliation import ReconciliationEngine
from tests.helpers.fakes import (
    FakeCardProvisioner,
    FakeDeckResolver,
    RecordingCheckpoint,
    make_document,
    make_registry,
    make_unit,
)


def _engine(
    *,
    decks: FakeDeckResolver | None = None,
    cards: FakeCardProvisioner | None = None,
    checkpoint: RecordingCheckpoint | None = None,
    parent_deck_id: str | None = None,
) -> ReconciliationEngine:
    return ReconciliationEngine(
        decks=decks or FakeDeckResolver(),
        cards=cards or FakeCardProvisioner(),
        checkpoint=checkpoint or RecordingCheckpoint(),
        parent_deck_id=parent_deck_id,
    )


def test_new_chunk_is_provisioned_and_registered() -> None:
    cards = FakeCardProvisioner()
    document = make_document(make_unit("casa"))
    registry = Registry.empty()

    result = _engine(cards=cards).reconcile(document, registry)

    assert result.created == 1
    assert cards.calls == [("deck-1", "casa")]
    entry = registry.get("casa")
    assert entry is not None
    assert entry.id == "card-1"
    assert entry.variants == ["casa"]
    assert document.units[0].id == "card-1"


def test_rerun_skips_registered_chunk_without_external_calls() -> None:
    decks = FakeDeckResolver()
    document = make_document(make_unit("casa"))
    registry = Registry.empty()
    _engine(decks=decks).reconcile(document, registry)

    cards = FakeCardProvisioner(prefix="second")
    result = _engine(decks=decks, cards=cards).reconcile(document, registry)

    assert result.created == 0
    assert result.skipped == ["casa"]
    assert cards.calls == []
    assert document.units[0].id == "card-1"


def test_conflicting_ids_abort_before_any_creation() -> None:
    cards = FakeCardProvisioner()
    checkpoint = RecordingCheckpoint()
    document = make_document(make_unit("casa", id="X123"))
    registry = make_registry(("casa", "Y999", ["casa"]))

    with pytest.raises(ConflictError) as excinfo:
        _engine(cards=cards, checkpoint=checkpoint).reconcile(document, registry)

    assert cards.calls == []
    assert checkpoint.calls == 0
    assert excinfo.value.chunk == "casa"
    assert "X123" in str(excinfo.value)
    assert "Y999" in str(excinfo.value)


def test_conflict_keeps_mutations_of_earlier_units() -> None:
    checkpoint = RecordingCheckpoint()
    document = make_document(
        make_unit("pão"),
        make_unit("casa", id="X123"),
        make_unit("lar"),
    )
    registry = make_registry(("casa", "Y999", ["casa"]))

    with pytest.raises(ConflictError):
        _engine(checkpoint=checkpoint).reconcile(document, registry)

    assert checkpoint.calls == 1
    saved_document, saved_registry = checkpoint.snapshots[-1]
    assert saved_document.units[0].id == "card-1"
    assert saved_registry.get("pão") is not None
    assert document.units[2].id == ""


def test_variants_accumulate_across_runs() -> None:
    registry = Registry.empty()
    _engine().reconcile(
        make_document(make_unit("estar", variants=["estou", "está"]), class_id="001"),
        registry,
    )
    _engine().reconcile(
        make_document(make_unit("estar", variants=["estamos", "estou"]), class_id="002"),
        registry,
    )

    entry = registry.get("estar")
    assert entry is not None
    assert sorted(entry.variants) == ["estamos", "estou", "está"]


def test_cache_hit_backfills_missing_unit_id() -> None:
    document = make_document(make_unit("casa", variants=["casinha"]))
    registry = make_registry(("casa", "C1", ["casa"]))

    result = _engine().reconcile(document, registry)

    assert document.units[0].id == "C1"
    assert result.skipped == ["casa"]
    entry = registry.get("casa")
    assert entry is not None
    assert entry.variants == ["casa", "casinha"]


def test_matching_ids_are_not_a_conflict() -> None:
    document = make_document(make_unit("casa", id="C1"))
    registry = make_registry(("casa", "C1", ["casa"]))

    result = _engine().reconcile(document, registry)

    assert result.skipped == ["casa"]


def test_registry_entry_without_id_is_provisioned_in_place() -> None:
    document = make_document(make_unit("casa", variants=["casas"]))
    registry = make_registry(("casa", "", ["casa"]))

    result = _engine().reconcile(document, registry)

    assert result.created == 1
    assert len(registry) == 1
    entry = registry.get("casa")
    assert entry is not None
    assert entry.id == "card-1"
    assert entry.variants == ["casa", "casas"]


def test_unit_id_unknown_to_library_gets_a_new_card(caplog: pytest.LogCaptureFixture) -> None:
    document = make_document(make_unit("casa", id="stale"))
    registry = Registry.empty()

    with caplog.at_level(logging.WARNING):
        _engine().reconcile(document, registry)

    assert document.units[0].id == "card-1"
    assert "stale" in caplog.text


def test_meaning_and_obs_refresh_on_creation_only_when_present() -> None:
    registry = make_registry(("casa", "", ["casa"]))
    entry = registry.get("casa")
    assert entry is not None
    entry.meaning = "old meaning"
    entry.obs = "old obs"
    document = make_document(make_unit("casa", meaning="house"))

    _engine().reconcile(document, registry)

    assert entry.meaning == "house"
    assert entry.obs == "old obs"


def test_checkpoint_after_each_creation_and_once_at_the_end() -> None:
    checkpoint = RecordingCheckpoint()
    document = make_document(make_unit("a"), make_unit("b"), make_unit("c"))
    registry = make_registry(("b", "B1", ["b"]))

    _engine(checkpoint=checkpoint).reconcile(document, registry)

    assert checkpoint.calls == 3
    first_document, first_registry = checkpoint.snapshots[0]
    assert first_document.units[0].id == "card-1"
    assert first_document.units[1].id == ""
    assert first_registry.get("c") is None


def test_provision_failure_keeps_prior_checkpoints() -> None:
    checkpoint = RecordingCheckpoint()
    cards = FakeCardProvisioner(fail_on={"b"})
    document = make_document(make_unit("a"), make_unit("b"), make_unit("c"))
    registry = Registry.empty()

    with pytest.raises(ProvisionError):
        _engine(cards=cards, checkpoint=checkpoint).reconcile(document, registry)

    assert checkpoint.calls == 1
    _, saved_registry = checkpoint.snapshots[0]
    assert [entry.chunk for entry in saved_registry.entries] == ["a"]
    assert registry.get("b") is None


def test_rerun_after_failure_only_provisions_remaining_units() -> None:
    document = make_document(make_unit("a"), make_unit("b"))
    registry = Registry.empty()
    with pytest.raises(ProvisionError):
        _engine(cards=FakeCardProvisioner(fail_on={"b"})).reconcile(document, registry)

    cards = FakeCardProvisioner(prefix="retry")
    result = _engine(cards=cards).reconcile(document, registry)

    assert cards.calls == [("deck-1", "b")]
    assert result.skipped == ["a"]
    assert result.created == 1


def test_deck_is_not_resolved_when_every_unit_is_cached() -> None:
    decks = FakeDeckResolver()
    document = make_document(make_unit("casa"))
    registry = make_registry(("casa", "C1", ["casa"]))

    result = _engine(decks=decks).reconcile(document, registry)

    assert decks.resolve_calls == []
    assert result.deck is None


def test_deck_is_resolved_once_and_created_under_parent() -> None:
    decks = FakeDeckResolver()
    document = make_document(make_unit("a"), make_unit("b"), class_id="042")

    result = _engine(decks=decks, parent_deck_id="master").reconcile(document, Registry.empty())

    assert decks.resolve_calls == ["042_V"]
    assert decks.create_calls == [("042_V", "master")]
    assert result.deck == Deck(id="deck-1", name="042_V", parent_id="master")


def test_existing_deck_is_reused() -> None:
    decks = FakeDeckResolver(existing={"001_V": Deck(id="existing", name="001_V")})
    cards = FakeCardProvisioner()

    _engine(decks=decks, cards=cards).reconcile(make_document(make_unit("a")), Registry.empty())

    assert decks.create_calls == []
    assert cards.calls == [("existing", "a")]


def test_registry_is_sorted_after_run() -> None:
    document = make_document(make_unit("pão"), make_unit("água"), make_unit("Casa"))
    registry = make_registry(("beber", "B1", ["beber"]))

    _engine().reconcile(document, registry)

    assert [entry.chunk for entry in registry.entries] == ["água", "beber", "Casa", "pão"]
    assert registry.get("Casa") is registry.entries[2]


def test_class_document_order_is_preserved() -> None:
    document = make_document(make_unit("pão"), make_unit("água"))

    _engine().reconcile(document, Registry.empty())

    assert [unit.chunk for unit in document] == ["pão", "água"]
    assert [unit.id for unit in document] == ["card-1", "card-2"]


def test_summary_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    document = make_document(make_unit("a"), make_unit("b"))
    registry = make_registry(("b", "B1", ["b"]))

    with caplog.at_level(logging.INFO):
        _engine().reconcile(document, registry)

    assert "+ a -> card-1" in caplog.text
    assert "created=1" in caplog.text
    assert "Skipped(existing)=1" in caplog.text

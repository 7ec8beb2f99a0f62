from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from chunkdeck.app import build_sentence_deck, build_vocab_deck, resolve_sentences_path
from chunkdeck.config import SentenceDeckConfig, StorageConfig, VocabDeckConfig
from chunkdeck.domain.errors import ConflictError, ValidationError
from tests.helpers.fakes import FakeCardProvisioner, FakeDeckResolver, FakeSentenceCardProvisioner

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    WriteJson = Callable[[str, object], Path]
    ReadJson = Callable[[Path], object]

CONFIG = VocabDeckConfig(template_id="t", term_field_id="term", meaning_field_id="meaning")
DRY_CONFIG = VocabDeckConfig(
    template_id="t", term_field_id="term", meaning_field_id="meaning", dry_run=True
)


def _class_file(write_json: WriteJson, *entries: dict[str, object], class_id: str = "001") -> Path:
    return write_json(f"chunks_{class_id}.json", {"class": class_id, "entries": list(entries)})


def test_first_run_writes_ids_to_class_and_library(
    tmp_path: Path, write_json: WriteJson, read_json: ReadJson
) -> None:
    class_path = _class_file(write_json, {"chunk": "casa", "id": "", "variants": ["casa"]})
    library_path = tmp_path / "chunk_library.json"

    result = build_vocab_deck(
        class_path,
        library_path=library_path,
        config=CONFIG,
        deck_resolver=FakeDeckResolver(),
        card_provisioner=FakeCardProvisioner(),
    )

    assert result.created == 1
    assert read_json(class_path) == {
        "class": "001",
        "entries": [{"chunk": "casa", "id": "card-1", "variants": ["casa"]}],
    }
    assert read_json(library_path) == {
        "version": 1,
        "entries": [{"chunk": "casa", "id": "card-1", "variants": ["casa"]}],
    }


def test_second_class_reuses_library_ids(
    tmp_path: Path, write_json: WriteJson, read_json: ReadJson
) -> None:
    library_path = tmp_path / "chunk_library.json"
    first = _class_file(write_json, {"chunk": "estar", "id": "", "variants": ["estou"]})
    build_vocab_deck(
        first,
        library_path=library_path,
        config=CONFIG,
        deck_resolver=FakeDeckResolver(),
        card_provisioner=FakeCardProvisioner(),
    )

    second = _class_file(
        write_json,
        {"chunk": "estar", "id": "", "variants": ["estamos"]},
        {"chunk": "beber", "id": "", "variants": ["bebo"], "meaning": "to drink"},
        class_id="002",
    )
    cards = FakeCardProvisioner(prefix="second")
    result = build_vocab_deck(
        second,
        library_path=library_path,
        config=CONFIG,
        deck_resolver=FakeDeckResolver(),
        card_provisioner=cards,
    )

    assert result.skipped == ["estar"]
    assert cards.calls == [("deck-1", "beber")]
    library = read_json(library_path)
    assert library == {
        "version": 1,
        "entries": [
            {"chunk": "beber", "id": "second-1", "variants": ["bebo"], "meaning": "to drink"},
            {"chunk": "estar", "id": "card-1", "variants": ["estou", "estamos"]},
        ],
    }
    saved_class = read_json(second)
    assert isinstance(saved_class, dict)
    assert [entry["id"] for entry in saved_class["entries"]] == ["card-1", "second-1"]


def test_library_ahead_of_class_document_is_backfilled(
    write_json: WriteJson, read_json: ReadJson
) -> None:
    library_path = write_json(
        "chunk_library.json",
        {"version": 1, "entries": [{"chunk": "casa", "id": "C1", "variants": ["casa"]}]},
    )
    class_path = _class_file(write_json, {"chunk": "casa", "id": "", "variants": ["casa"]})
    cards = FakeCardProvisioner()

    build_vocab_deck(
        class_path,
        library_path=library_path,
        config=CONFIG,
        deck_resolver=FakeDeckResolver(),
        card_provisioner=cards,
    )

    assert cards.calls == []
    saved = read_json(class_path)
    assert isinstance(saved, dict)
    assert saved["entries"][0]["id"] == "C1"


def test_conflict_leaves_files_untouched(write_json: WriteJson) -> None:
    library_path = write_json(
        "chunk_library.json",
        {"version": 1, "entries": [{"chunk": "casa", "id": "Y999", "variants": []}]},
    )
    class_path = _class_file(write_json, {"chunk": "casa", "id": "X123", "variants": []})
    before = (class_path.read_bytes(), library_path.read_bytes())

    with pytest.raises(ConflictError):
        build_vocab_deck(
            class_path,
            library_path=library_path,
            config=CONFIG,
            deck_resolver=FakeDeckResolver(),
            card_provisioner=FakeCardProvisioner(),
        )

    assert (class_path.read_bytes(), library_path.read_bytes()) == before


def test_invalid_class_document_fails_before_any_call(
    tmp_path: Path, write_json: WriteJson
) -> None:
    class_path = write_json("chunks_001.json", {"class": "001", "entries": [{"chunk": "casa"}]})
    decks = FakeDeckResolver()

    with pytest.raises(ValidationError):
        build_vocab_deck(
            class_path,
            library_path=tmp_path / "chunk_library.json",
            config=CONFIG,
            deck_resolver=decks,
            card_provisioner=FakeCardProvisioner(),
        )

    assert decks.resolve_calls == []
    assert not (tmp_path / "chunk_library.json").exists()


def test_dry_run_writes_nothing(tmp_path: Path, write_json: WriteJson) -> None:
    class_path = _class_file(write_json, {"chunk": "casa", "id": "", "variants": ["casa"]})
    before = class_path.read_bytes()
    library_path = tmp_path / "chunk_library.json"

    result = build_vocab_deck(
        class_path,
        library_path=library_path,
        config=DRY_CONFIG,
        deck_resolver=FakeDeckResolver(),
        card_provisioner=FakeCardProvisioner(),
    )

    assert result.created == 1
    assert class_path.read_bytes() == before
    assert not library_path.exists()


def test_library_path_defaults_to_storage_config(
    tmp_path: Path, write_json: WriteJson, read_json: ReadJson
) -> None:
    class_path = _class_file(write_json, {"chunk": "casa", "id": "", "variants": []})
    storage = StorageConfig(library_path=tmp_path / "lib.json", classes_dir=tmp_path)

    build_vocab_deck(
        class_path,
        config=CONFIG,
        storage=storage,
        deck_resolver=FakeDeckResolver(),
        card_provisioner=FakeCardProvisioner(),
    )

    assert read_json(tmp_path / "lib.json") == {
        "version": 1,
        "entries": [{"chunk": "casa", "id": "card-1", "variants": []}],
    }


def test_obs_without_field_id_is_reported(
    tmp_path: Path, write_json: WriteJson, caplog: pytest.LogCaptureFixture
) -> None:
    class_path = _class_file(write_json, {"chunk": "casa", "id": "", "variants": [], "obs": "f."})

    with caplog.at_level(logging.WARNING):
        build_vocab_deck(
            class_path,
            library_path=tmp_path / "chunk_library.json",
            config=DRY_CONFIG,
            deck_resolver=FakeDeckResolver(),
            card_provisioner=FakeCardProvisioner(),
        )

    assert "VOCAB_FIELD_OBS_ID" in caplog.text


def test_resolve_sentences_path_maps_class_ids(tmp_path: Path) -> None:
    storage = StorageConfig(library_path=tmp_path / "lib.json", classes_dir=tmp_path / "classes")

    assert resolve_sentences_path("007", storage=storage) == (
        tmp_path / "classes" / "007" / "sentences_007.json"
    ).resolve()
    assert resolve_sentences_path(str(tmp_path / "x.json"), storage=storage) == (
        tmp_path / "x.json"
    ).resolve()


def test_build_sentence_deck(write_json: WriteJson) -> None:
    path = write_json(
        "sentences_003.json",
        {
            "class": "003",
            "sentences": [
                {"en": "I live here.", "pt": "Eu moro aqui.", "hints": []},
                {"en": "It is late.", "pt": "Está tarde.", "hints": []},
            ],
        },
    )
    cards = FakeSentenceCardProvisioner()

    result = build_sentence_deck(
        path,
        config=SentenceDeckConfig(
            template_id="t", en_field_id="en", hints_field_id="h", pt_field_id="pt"
        ),
        deck_resolver=FakeDeckResolver(),
        card_provisioner=cards,
    )

    assert result.deck.name == "003_S"
    assert result.created == 2

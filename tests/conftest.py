from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

_CONFIG_ENV = (
    "MOCHI_API_KEY",
    "VOCAB_TEMPLATE_ID",
    "VOCAB_FIELD_TERM_ID",
    "VOCAB_FIELD_MEANING_ID",
    "VOCAB_FIELD_OBS_ID",
    "MASTER_VOCAB_DECK_ID",
    "SENT_TEMPLATE_ID",
    "SENT_FIELD_EN_ID",
    "SENT_FIELD_HINTS_ID",
    "SENT_FIELD_PT_ID",
    "MASTER_SENTENCE_DECK_ID",
    "DRY_RUN",
    "CHUNK_LIBRARY_FILE",
    "CHUNKDECK_CLASSES_DIR",
)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _CONFIG_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[str, object], Path]:
    def write(name: str, data: object) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        return path

    return write


@pytest.fixture
def read_json() -> Callable[[Path], object]:
    def read(path: Path) -> object:
        return json.loads(path.read_text(encoding="utf-8"))

    return read

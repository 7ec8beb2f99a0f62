"""JSON-file implementations of the document stores."""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from chunkdeck.domain.errors import PersistError, ValidationError
from chunkdeck.domain.model import Registry

from .atomic import backup_path_for, write_json_atomic
from .schema import ClassDocumentPayload, LibraryPayload, SentenceDocumentPayload
from .translator import (
    dump_class_document,
    dump_registry,
    parse_class_document,
    parse_registry,
    parse_sentence_document,
)

if TYPE_CHECKING:
    from pathlib import Path

    from chunkdeck.domain.model import ClassDocument, SentenceDocument
    from chunkdeck.domain.ports import EntryStore, LibraryStore

log = getLogger(__name__)


def _describe(exc: PydanticValidationError) -> str:
    problems: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "document"
        problems.append(f"{location}: {error['msg']}")
    return "; ".join(problems)


def _load_payload[TModel: BaseModel](path: Path, model: type[TModel]) -> TModel:
    """Read and validate ``path``; every failure surfaces as ``ValidationError``."""

    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ValidationError("file not found", source=str(path)) from None
    except OSError as exc:
        raise ValidationError(f"unreadable: {exc}", source=str(path)) from exc
    try:
        return model.model_validate_json(raw)
    except PydanticValidationError as exc:
        raise ValidationError(_describe(exc), source=str(path)) from exc


@dataclass(slots=True)
class JsonEntryStore:
    """Class document stored as ``{"class": ..., "entries": [...]}``."""

    path: Path

    def load(self) -> ClassDocument:
        return parse_class_document(_load_payload(self.path, ClassDocumentPayload))

    def save(self, document: ClassDocument) -> None:
        write_json_atomic(self.path, dump_class_document(document))


@dataclass(slots=True)
class JsonLibraryStore:
    """Shared chunk library stored as ``{"version": ..., "entries": [...]}``.

    Entries are always written in collation order so diffs stay small. A
    missing or invalid file loads as an empty library; an invalid file is
    copied to ``<name>.bak`` before the first save replaces it.
    """

    path: Path
    _discarded: bool = field(default=False, init=False, repr=False)

    def load(self) -> Registry:
        if not self.path.exists():
            log.info("No library at %s; starting with an empty one", self.path)
            return Registry.empty()
        try:
            return parse_registry(_load_payload(self.path, LibraryPayload))
        except ValidationError as exc:
            log.error("Ignoring invalid library (%s); starting with an empty one", exc)
            self._discarded = True
            return Registry.empty()

    def save(self, registry: Registry) -> None:
        if self._discarded:
            self._back_up()
        write_json_atomic(self.path, dump_registry(registry))

    def _back_up(self) -> None:
        backup = backup_path_for(self.path)
        try:
            shutil.copy2(self.path, backup)
        except OSError as exc:
            message = f"Could not back up invalid library: {exc}"
            raise PersistError(message, path=str(backup)) from exc
        self._discarded = False
        log.warning("Kept the invalid library as %s", backup)


@dataclass(slots=True)
class JsonSentenceSource:
    path: Path

    def load(self) -> SentenceDocument:
        return parse_sentence_document(_load_payload(self.path, SentenceDocumentPayload))


@dataclass(slots=True)
class StoreCheckpoint:
    """Persist the library, then the class document.

    The two renames are independent; a crash between them leaves the library
    ahead of the class document, never behind it.
    """

    entries: EntryStore
    library: LibraryStore

    def __call__(self, document: ClassDocument, registry: Registry) -> None:
        self.library.save(registry)
        self.entries.save(document)

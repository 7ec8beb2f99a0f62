"""Pydantic models describing the on-disk JSON documents."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictStr,
    field_validator,
    model_validator,
)

from chunkdeck.domain.model import EMPTY_LIBRARY_VERSION

if TYPE_CHECKING:
    from collections.abc import Sequence


class DocumentBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class KeyedEntryPayload(DocumentBaseModel):
    chunk: StrictStr
    id: StrictStr
    variants: list[StrictStr | None]

    @field_validator("chunk")
    @classmethod
    def _strip_chunk(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("chunk must be a non-empty string")
        return stripped


class EntryPayload(KeyedEntryPayload):
    meaning: StrictStr | None = None
    obs: StrictStr | None = None


class LibraryEntryPayload(KeyedEntryPayload):
    """Library entry; only the fields that identify a card are type-checked."""

    meaning: object = None
    obs: object = None


def _reject_duplicate_chunks(entries: Sequence[KeyedEntryPayload], *, where: str) -> None:
    seen: set[str] = set()
    for entry in entries:
        if entry.chunk in seen:
            raise ValueError(f'Duplicate chunk in {where}: "{entry.chunk}"')
        seen.add(entry.chunk)


class ClassDocumentPayload(DocumentBaseModel):
    class_id: StrictStr = Field(alias="class", min_length=1)
    entries: list[EntryPayload]

    @model_validator(mode="after")
    def _unique_chunks(self) -> ClassDocumentPayload:
        _reject_duplicate_chunks(self.entries, where="class JSON")
        return self


class LibraryPayload(DocumentBaseModel):
    version: object = EMPTY_LIBRARY_VERSION
    entries: list[LibraryEntryPayload]

    @model_validator(mode="after")
    def _unique_chunks(self) -> LibraryPayload:
        _reject_duplicate_chunks(self.entries, where="library")
        return self


class HintPayload(DocumentBaseModel):
    chunk: StrictStr = Field(min_length=1)
    id: StrictStr = Field(min_length=1)
    gloss_pt: StrictStr | None = None


class SentencePayload(DocumentBaseModel):
    en: StrictStr = Field(min_length=1)
    pt: StrictStr = Field(min_length=1)
    hints: list[HintPayload]


class SentenceDocumentPayload(DocumentBaseModel):
    class_id: StrictStr = Field(alias="class", min_length=1)
    sentences: list[SentencePayload]

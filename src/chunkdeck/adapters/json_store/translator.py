"""Translate validated JSON payloads into domain objects and back."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from chunkdeck.domain.model import (
    EMPTY_LIBRARY_VERSION,
    ClassDocument,
    Hint,
    Registry,
    RegistryEntry,
    Sentence,
    SentenceDocument,
    Unit,
    union_variants,
)

if TYPE_CHECKING:
    from .schema import (
        ClassDocumentPayload,
        KeyedEntryPayload,
        LibraryPayload,
        SentenceDocumentPayload,
    )

log = getLogger(__name__)

type JsonObject = dict[str, object]


def _text_field(payload: KeyedEntryPayload, name: str, extras: JsonObject) -> str | None:
    """Return a text field; any other value is kept verbatim in ``extras``."""

    value = getattr(payload, name, None)
    if value is None or isinstance(value, str):
        return value
    extras[name] = value
    return None


def _parse_entry[T: Unit](cls: type[T], payload: KeyedEntryPayload) -> T:
    extras: JsonObject = dict(payload.model_extra or {})
    return cls(
        chunk=payload.chunk,
        id=payload.id,
        variants=union_variants(payload.variants),
        meaning=_text_field(payload, "meaning", extras),
        obs=_text_field(payload, "obs", extras),
        extras=extras,
    )


def parse_class_document(payload: ClassDocumentPayload) -> ClassDocument:
    return ClassDocument(
        class_id=payload.class_id,
        units=[_parse_entry(Unit, entry) for entry in payload.entries],
        extras=dict(payload.model_extra or {}),
    )


def parse_registry(payload: LibraryPayload) -> Registry:
    version = payload.version
    if not isinstance(version, int) or isinstance(version, bool):
        log.warning(
            "Library version %r is not an integer; it will be saved as %d",
            version,
            EMPTY_LIBRARY_VERSION,
        )
        version = EMPTY_LIBRARY_VERSION
    return Registry(
        version=version,
        entries=[_parse_entry(RegistryEntry, entry) for entry in payload.entries],
        extras=dict(payload.model_extra or {}),
    )


def parse_sentence_document(payload: SentenceDocumentPayload) -> SentenceDocument:
    return SentenceDocument(
        class_id=payload.class_id,
        sentences=[
            Sentence(
                en=sentence.en,
                pt=sentence.pt,
                hints=tuple(
                    Hint(chunk=hint.chunk, id=hint.id, gloss_pt=hint.gloss_pt or "")
                    for hint in sentence.hints
                ),
            )
            for sentence in payload.sentences
        ],
    )


def dump_unit(unit: Unit) -> JsonObject:
    data: JsonObject = {"chunk": unit.chunk, "id": unit.id, "variants": list(unit.variants)}
    if unit.meaning is not None:
        data["meaning"] = unit.meaning
    if unit.obs is not None:
        data["obs"] = unit.obs
    for key, value in unit.extras.items():
        data.setdefault(key, value)
    return data


def dump_class_document(document: ClassDocument) -> JsonObject:
    data: JsonObject = {"class": document.class_id}
    for key, value in document.extras.items():
        data.setdefault(key, value)
    data["entries"] = [dump_unit(unit) for unit in document.units]
    return data


def dump_registry(registry: Registry) -> JsonObject:
    data: JsonObject = {"version": registry.version}
    for key, value in registry.extras.items():
        data.setdefault(key, value)
    data["entries"] = [dump_unit(entry) for entry in registry.sorted_entries()]
    return data

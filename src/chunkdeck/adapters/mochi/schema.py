"""Pydantic models describing the Mochi API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class MochiBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class DeckPayload(MochiBaseModel):
    id: str
    name: str
    parent_id: str | None = Field(default=None, alias="parent-id")

    _normalize_parent = field_validator("parent_id", mode="before")(_blank_to_none)


class DeckListResponse(MochiBaseModel):
    docs: list[DeckPayload] = Field(default_factory=list[DeckPayload])
    bookmark: str | None = None


class CardPayload(MochiBaseModel):
    id: str
    deck_id: str | None = Field(default=None, alias="deck-id")


class FieldValue(MochiBaseModel):
    id: str
    value: str


class CreateDeckRequest(MochiBaseModel):
    name: str
    parent_id: str | None = Field(default=None, alias="parent-id")


class CreateCardRequest(MochiBaseModel):
    content: str = ""
    deck_id: str = Field(alias="deck-id")
    template_id: str = Field(alias="template-id")
    field_values: dict[str, FieldValue] = Field(alias="fields")

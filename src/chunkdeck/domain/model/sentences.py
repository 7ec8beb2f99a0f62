"""Sentence cards: an English prompt, its Portuguese answer and chunk hints."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Hint:
    chunk: str
    id: str
    gloss_pt: str = ""


@dataclass(frozen=True, slots=True)
class Sentence:
    en: str
    pt: str
    hints: tuple[Hint, ...] = ()


@dataclass(kw_only=True)
class SentenceDocument:
    class_id: str
    sentences: list[Sentence] = field(default_factory=list[Sentence])

    @property
    def sentence_deck_name(self) -> str:
        return f"{self.class_id}_S"

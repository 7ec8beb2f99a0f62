"""Translate domain units and sentences into Mochi card fields."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from chunkdeck.config.decks import SentenceDeckConfig, VocabDeckConfig
    from chunkdeck.domain.model import Hint, Sentence, Unit


def vocab_card_fields(unit: Unit, config: VocabDeckConfig) -> dict[str, str]:
    fields = {
        config.term_field_id: unit.chunk,
        config.meaning_field_id: unit.meaning or "",
    }
    if config.obs_field_id and unit.obs and unit.obs.strip():
        fields[config.obs_field_id] = unit.obs.strip()
    return fields


def cloze(text: str) -> str:
    return f"{{{{{text}}}}}"


def escape_braces(text: str) -> str:
    """Escape braces so a gloss cannot open or close a cloze by accident."""

    return text.replace("{", "\\{").replace("}", "\\}")


def render_hints(hints: Iterable[Hint]) -> str:
    """Render hints one per line as ``[[chunk|id]]: {{gloss}}``; only the gloss is clozed."""

    return "\n".join(
        f"[[{hint.chunk}|{hint.id}]]: {cloze(escape_braces(hint.gloss_pt))}" for hint in hints
    )


def sentence_card_fields(sentence: Sentence, config: SentenceDeckConfig) -> dict[str, str]:
    return {
        config.en_field_id: sentence.en,
        config.hints_field_id: render_hints(sentence.hints),
        config.pt_field_id: sentence.pt,
    }

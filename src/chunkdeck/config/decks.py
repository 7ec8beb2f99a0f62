"""Deck and template configuration for the two card workflows."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_flag, optional_env_var, require_env_vars

DRY_RUN_ENV = "DRY_RUN"


@dataclass(frozen=True, slots=True)
class VocabDeckConfig:
    """Template and field ids used when creating vocabulary cards.

    ``obs_field_id`` is optional: without it observations are not sent to Mochi.
    ``master_deck_id`` becomes the parent of newly created class decks.
    """

    template_id: str
    term_field_id: str
    meaning_field_id: str
    obs_field_id: str | None = None
    master_deck_id: str | None = None
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class SentenceDeckConfig:
    template_id: str
    en_field_id: str
    hints_field_id: str
    pt_field_id: str
    master_deck_id: str | None = None
    dry_run: bool = False


def get_vocab_deck_config(*, dry_run: bool | None = None) -> VocabDeckConfig:
    values = require_env_vars(
        ("VOCAB_TEMPLATE_ID", "VOCAB_FIELD_TERM_ID", "VOCAB_FIELD_MEANING_ID")
    )
    return VocabDeckConfig(
        template_id=values["VOCAB_TEMPLATE_ID"],
        term_field_id=values["VOCAB_FIELD_TERM_ID"],
        meaning_field_id=values["VOCAB_FIELD_MEANING_ID"],
        obs_field_id=optional_env_var("VOCAB_FIELD_OBS_ID"),
        master_deck_id=optional_env_var("MASTER_VOCAB_DECK_ID"),
        dry_run=env_flag(DRY_RUN_ENV) if dry_run is None else dry_run,
    )


def get_sentence_deck_config(*, dry_run: bool | None = None) -> SentenceDeckConfig:
    values = require_env_vars(
        ("SENT_TEMPLATE_ID", "SENT_FIELD_EN_ID", "SENT_FIELD_HINTS_ID", "SENT_FIELD_PT_ID")
    )
    return SentenceDeckConfig(
        template_id=values["SENT_TEMPLATE_ID"],
        en_field_id=values["SENT_FIELD_EN_ID"],
        hints_field_id=values["SENT_FIELD_HINTS_ID"],
        pt_field_id=values["SENT_FIELD_PT_ID"],
        master_deck_id=optional_env_var("MASTER_SENTENCE_DECK_ID"),
        dry_run=env_flag(DRY_RUN_ENV) if dry_run is None else dry_run,
    )

"""Public interface for the Mochi adapter."""

from __future__ import annotations

from .client import MochiAPIError, MochiClient
from .provisioning import (
    MochiDeckResolver,
    MochiSentenceCardProvisioner,
    MochiVocabCardProvisioner,
)
from .schema import CardPayload, DeckPayload
from .translator import render_hints, sentence_card_fields, vocab_card_fields

__all__ = [
    "CardPayload",
    "DeckPayload",
    "MochiAPIError",
    "MochiClient",
    "MochiDeckResolver",
    "MochiSentenceCardProvisioner",
    "MochiVocabCardProvisioner",
    "render_hints",
    "sentence_card_fields",
    "vocab_card_fields",
]

"""Locale-aware ordering for chunk keys.

Approximates the root Unicode collation used by dictionary tools: letters
compare by base form first, then accents, then case with lowercase first.
"""

from __future__ import annotations

import unicodedata


def _strip_marks(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def collation_key(text: str) -> tuple[str, str, str, str]:
    """Return a sort key comparing ``text`` the way a human-facing index would."""

    folded = unicodedata.normalize("NFKC", text).casefold()
    primary = _strip_marks(folded)
    secondary = unicodedata.normalize("NFKD", folded)
    # swapcase sorts lowercase ahead of uppercase at equal base and accents
    tertiary = unicodedata.normalize("NFKD", text).swapcase()
    return primary, secondary, tertiary, text

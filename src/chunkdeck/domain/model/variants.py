"""Variant set arithmetic.

Variants are persisted as JSON lists, but behave as sets: duplicates and
falsy entries are dropped and first-seen order is kept so files diff cleanly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


def union_variants(*groups: Iterable[str | None]) -> list[str]:
    seen: set[str] = set()
    merged: list[str] = []
    for group in groups:
        for variant in group:
            if not variant or variant in seen:
                continue
            seen.add(variant)
            merged.append(variant)
    return merged

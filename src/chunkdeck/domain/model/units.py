"""Vocabulary units, class documents and the shared chunk library."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .collation import collation_key
from .variants import union_variants

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

EMPTY_LIBRARY_VERSION = 1


@dataclass(eq=False, kw_only=True)
class Unit:
    """A chunk as authored in one class document.

    ``id`` is the Mochi card id, ``""`` until the chunk has been provisioned.
    ``extras`` carries keys this tool does not interpret so they survive a rewrite.
    """

    chunk: str
    id: str = ""
    variants: list[str] = field(default_factory=list[str])
    meaning: str | None = None
    obs: str | None = None
    extras: dict[str, object] = field(default_factory=dict[str, object])

    @property
    def has_id(self) -> bool:
        return bool(self.id.strip())

    def merge_variants(self, variants: Iterable[str | None]) -> None:
        self.variants = union_variants(self.variants, variants)


@dataclass(eq=False, kw_only=True)
class RegistryEntry(Unit):
    """Library record for a chunk, shared by every class that uses it."""

    @classmethod
    def for_chunk(cls, chunk: str) -> RegistryEntry:
        return cls(chunk=chunk)


@dataclass(eq=False, kw_only=True)
class ClassDocument:
    class_id: str
    units: list[Unit] = field(default_factory=list[Unit])
    extras: dict[str, object] = field(default_factory=dict[str, object])

    def __iter__(self) -> Iterator[Unit]:
        return iter(self.units)

    def __len__(self) -> int:
        return len(self.units)

    @property
    def vocab_deck_name(self) -> str:
        return f"{self.class_id}_V"


@dataclass(eq=False)
class Registry:
    """The chunk library: one entry per chunk across all classes.

    Entries keep their insertion order until :meth:`sort` is called; lookups
    go through an index kept in step with ``entries``.
    """

    version: int = EMPTY_LIBRARY_VERSION
    entries: list[RegistryEntry] = field(default_factory=list[RegistryEntry])
    extras: dict[str, object] = field(default_factory=dict[str, object])
    _index: dict[str, RegistryEntry] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._index = {}
        for entry in self.entries:
            if entry.chunk in self._index:
                raise ValueError(f"Duplicate chunk in library: {entry.chunk!r}")
            self._index[entry.chunk] = entry

    @classmethod
    def empty(cls) -> Registry:
        return cls()

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, chunk: object) -> bool:
        return chunk in self._index

    def get(self, chunk: str) -> RegistryEntry | None:
        return self._index.get(chunk)

    def add(self, entry: RegistryEntry) -> None:
        if entry.chunk in self._index:
            raise ValueError(f"Duplicate chunk in library: {entry.chunk!r}")
        self.entries.append(entry)
        self._index[entry.chunk] = entry

    def sorted_entries(self) -> list[RegistryEntry]:
        return sorted(self.entries, key=lambda entry: collation_key(entry.chunk))

    def sort(self) -> None:
        self.entries[:] = self.sorted_entries()

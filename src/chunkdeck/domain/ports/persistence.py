"""Ports for loading and persisting class documents and the chunk library."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from chunkdeck.domain.model import ClassDocument, Registry, SentenceDocument


@runtime_checkable
class EntryStore(Protocol):
    """Durable home of one class document."""

    def load(self) -> ClassDocument: ...

    def save(self, document: ClassDocument) -> None: ...


@runtime_checkable
class LibraryStore(Protocol):
    """Durable home of the shared chunk library."""

    def load(self) -> Registry: ...

    def save(self, registry: Registry) -> None: ...


@runtime_checkable
class SentenceSource(Protocol):
    def load(self) -> SentenceDocument: ...


@runtime_checkable
class PersistCheckpoint(Protocol):
    """Persist both documents; called after every card creation and once at the end."""

    def __call__(self, document: ClassDocument, registry: Registry) -> None: ...

"""Errors raised while reconciling class documents against the chunk library.

Every error aborts the current run. Work persisted for earlier units stands;
rerunning is the recovery path because resolved units are skipped.
"""

from __future__ import annotations


class ChunkDeckError(RuntimeError):
    """Base class for domain failures."""


class ValidationError(ChunkDeckError):
    """Raised when an input document is structurally malformed."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(f"{source}: {message}" if source else message)
        self.source = source


class ConflictError(ChunkDeckError):
    """Raised when a class document and the library disagree on a card id."""

    def __init__(self, chunk: str, *, document_id: str, registry_id: str) -> None:
        super().__init__(
            f'ID conflict for chunk "{chunk}": class has "{document_id}" '
            f'but library has "{registry_id}". Refuse to proceed.'
        )
        self.chunk = chunk
        self.document_id = document_id
        self.registry_id = registry_id


class ProvisionError(ChunkDeckError):
    """Raised when a deck or card could not be created externally."""


class PersistError(ChunkDeckError):
    """Raised when a document could not be written or renamed into place."""

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(f"{message}: {path}")
        self.path = path

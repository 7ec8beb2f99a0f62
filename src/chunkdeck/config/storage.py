"""File locations for class documents and the shared chunk library."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

DEFAULT_LIBRARY_FILENAME: Final[str] = "chunk_library.json"
DEFAULT_CLASSES_DIRNAME: Final[str] = "classes"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    library_path: Path
    classes_dir: Path

    def resolve_library_path(self) -> Path:
        return self.library_path.expanduser().resolve()

    def sentences_path(self, class_id: str) -> Path:
        return (self.classes_dir / class_id / f"sentences_{class_id}.json").expanduser().resolve()


def get_storage_config() -> StorageConfig:
    library = os.getenv("CHUNK_LIBRARY_FILE") or DEFAULT_LIBRARY_FILENAME
    classes = os.getenv("CHUNKDECK_CLASSES_DIR") or DEFAULT_CLASSES_DIRNAME
    return StorageConfig(library_path=Path(library), classes_dir=Path(classes))

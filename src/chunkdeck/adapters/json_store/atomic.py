"""Atomic JSON writes: temporary sibling file, then rename over the target."""

from __future__ import annotations

import json
import os
from logging import getLogger
from typing import TYPE_CHECKING

from chunkdeck.domain.errors import PersistError

if TYPE_CHECKING:
    from pathlib import Path

log = getLogger(__name__)

TEMP_SUFFIX = ".tmp"
BACKUP_SUFFIX = ".bak"


def temp_path_for(path: Path) -> Path:
    return path.with_name(path.name + TEMP_SUFFIX)


def backup_path_for(path: Path) -> Path:
    return path.with_name(path.name + BACKUP_SUFFIX)


def dumps_document(data: object) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2) + "\n"


def write_json_atomic(path: Path, data: object) -> None:
    """Write ``data`` to ``path`` so readers see either the old or the new file."""

    text = dumps_document(data)
    tmp = temp_path_for(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tmp.open("w", encoding="utf-8") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp, path)
    except OSError as exc:
        tmp.unlink(missing_ok=True)
        raise PersistError(f"Could not write {exc.strerror or exc}", path=str(path)) from exc
    log.debug("Wrote %s", path)

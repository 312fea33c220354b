"""Flat JSON file persistence for the in-memory movie collection."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from app.domain.failures import StorageUnavailableError

logger = logging.getLogger(__name__)


class JsonFileSnapshot:
    """Reads and rewrites the whole collection as one JSON array.

    Writes go to a sibling temp file which then replaces the target, so a
    crash mid-write leaves the previous document intact.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)

    def load(self) -> list[dict[str, Any]]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info("store.snapshot_missing path=%s", self._path)
            return []
        except OSError as exc:
            raise StorageUnavailableError(f"Cannot read {self._path}") from exc
        except UnicodeDecodeError as exc:
            raise StorageUnavailableError(f"Movie document in {self._path} is not UTF-8") from exc

        if not raw.strip():
            return []
        try:
            documents = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StorageUnavailableError(f"Malformed movie document in {self._path}") from exc
        if not isinstance(documents, list):
            raise StorageUnavailableError(f"Expected a JSON array in {self._path}")
        return documents

    def save(self, documents: list[dict[str, Any]]) -> None:
        directory = self._path.parent
        directory.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(documents, handle, ensure_ascii=False, indent=2)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(temp_name, self._path)
        except BaseException:
            try:
                os.unlink(temp_name)
            except FileNotFoundError:
                pass
            raise


__all__ = ["JsonFileSnapshot"]

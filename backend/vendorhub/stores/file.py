# Overview: Flat-file record store; the memory dataset persisted as one JSON document.

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

from ..validation import StorageError
from vendorhub.time_utils import parse_iso_date
from .base import COLLECTIONS
from .memory import MemoryStore, empty_dataset


logger = logging.getLogger(__name__)


def _encode(value):
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    raise TypeError(f"Cannot serialise {type(value).__name__}")


def _decode_field(kind: str, value):
    if value is None:
        return None
    if kind == "money":
        return Decimal(str(value))
    if kind == "date":
        return parse_iso_date(value)
    if kind == "int":
        return int(value)
    return value


def decode_dataset(raw: dict) -> dict:
    """Rebuild typed records from the JSON document, filling missing collections."""
    data = empty_dataset()
    for name, schema in COLLECTIONS.items():
        data[name] = [
            {field: _decode_field(kind, row.get(field)) for field, kind in schema.items()}
            for row in raw.get(name, [])
        ]
        highest = max((r["id"] for r in data[name]), default=0)
        data["next_ids"][name] = max(int(raw.get("next_ids", {}).get(name, 0)), highest)
    if raw.get("last_saved"):
        data["last_saved"] = datetime.fromisoformat(raw["last_saved"])
    return data


class JsonFileStore(MemoryStore):
    """
    Same dataset and rules as MemoryStore, written to `path` after every
    mutation. Writes go to a temp file first and are renamed into place, so
    a failed write leaves the previous document intact; the in-memory copy
    is rolled back to match.
    """

    name = "file"

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)
        super().__init__(self._load())

    def _load(self) -> dict:
        if not self.path.exists():
            logger.info("Data file %s not found, starting with an empty dataset", self.path)
            return empty_dataset()
        try:
            with open(self.path, encoding="utf-8") as f:
                raw = json.load(f)
            return decode_dataset(raw)
        except (OSError, ValueError, TypeError, KeyError) as exc:
            logger.error("Failed to read data file %s: %s", self.path, exc)
            raise StorageError(f"Failed to read data file {self.path}: {exc}") from exc

    def init_schema(self) -> None:
        if not self.path.exists():
            with self._lock:
                self._persist()

    def _directory(self) -> Path:
        return self.path.parent if str(self.path.parent) else Path(".")

    def check_connection(self) -> dict:
        # The data directory is created on first write; check its nearest existing ancestor
        directory = self._directory()
        while not directory.exists() and directory != directory.parent:
            directory = directory.parent
        if not os.access(directory, os.W_OK):
            raise StorageError(f"Data directory {directory} is not writable")
        return {"storage": self.name, "path": str(self.path)}

    def _checkpoint(self):
        return copy.deepcopy(self._data)

    def _restore(self, checkpoint) -> None:
        if checkpoint is not None:
            self._data = checkpoint

    def _persist(self) -> None:
        directory = self._directory()
        tmp_path = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=".vendorhub-", suffix=".json", dir=directory)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._data, f, indent=2, default=_encode)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as exc:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            logger.error("Failed to write data file %s: %s", self.path, exc)
            raise StorageError(f"Failed to write data file {self.path}: {exc}") from exc

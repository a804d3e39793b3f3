"""Storage backend abstraction for the entity store.

A backend holds five keyed tables of encoded records plus one scalar ID
counter. Writes reach a backend only as a ``WriteBatch`` committed in one
call, so a backend can apply the whole batch atomically.

Supported backends:
- Memory (for testing and ephemeral runs)
- Local file system (one JSON file per record plus a redo journal)
- PostgreSQL (see ``postgres.py``)
"""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..core.exceptions import StorageException

logger = logging.getLogger(__name__)

TABLES = ("researchers", "proposals", "milestones", "reviews", "proofs")


@dataclass
class WriteBatch:
    """Writes staged by one transaction.

    ``writes`` maps ``(table, id)`` to encoded record bytes; ``counter`` is
    the new counter value, or None when no ID was allocated.
    """

    writes: dict[tuple[str, int], bytes] = field(default_factory=dict)
    counter: int | None = None

    def __bool__(self) -> bool:
        return bool(self.writes) or self.counter is not None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-safe dict (records as text)."""
        return {
            "counter": self.counter,
            "writes": [
                {"table": table, "id": key, "record": data.decode("utf-8")}
                for (table, key), data in self.writes.items()
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WriteBatch:
        return cls(
            writes={(w["table"], int(w["id"])): w["record"].encode("utf-8") for w in data.get("writes", [])},
            counter=data.get("counter"),
        )


@dataclass
class StorageStats:
    """Statistics for a storage backend."""

    backend_type: str
    counter: int = 0
    records: dict[str, int] = field(default_factory=dict)
    healthy: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "backend_type": self.backend_type,
            "counter": self.counter,
            "records": dict(self.records),
            "healthy": self.healthy,
        }


def _check_table(table: str) -> None:
    if table not in TABLES:
        raise StorageException(f"Unknown table: {table}", {"table": table})


class StorageBackend(ABC):
    """Abstract base class for storage backends."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Type of backend (e.g., 'memory', 'file', 'postgres')."""
        pass

    @abstractmethod
    def load_counter(self) -> int:
        """Return the last issued ID (0 when none has been issued)."""
        pass

    @abstractmethod
    def get(self, table: str, key: int) -> bytes | None:
        """Return the encoded record stored under ``key``, or None."""
        pass

    @abstractmethod
    def scan(self, table: str) -> list[tuple[int, bytes]]:
        """Return every ``(id, record)`` pair in ``table`` in ascending ID order."""
        pass

    @abstractmethod
    def commit(self, batch: WriteBatch) -> None:
        """Apply every write in ``batch`` and the counter update together.

        Raises:
            StorageException: If the batch could not be applied.
        """
        pass

    def get_stats(self) -> StorageStats:
        """Get statistics for this backend."""
        return StorageStats(
            backend_type=self.backend_type,
            counter=self.load_counter(),
            records={table: len(self.scan(table)) for table in TABLES},
        )

    def health_check(self) -> bool:
        """Check if the backend is healthy and accessible."""
        try:
            self.get_stats()
            return True
        except Exception:
            logger.warning("Storage health check failed", exc_info=True)
            return False

    def close(self) -> None:
        """Release any resources held by the backend."""
        pass


class MemoryBackend(StorageBackend):
    """In-memory storage backend. Not persistent."""

    def __init__(self) -> None:
        self._tables: dict[str, dict[int, bytes]] = {table: {} for table in TABLES}
        self._counter = 0

    @property
    def backend_type(self) -> str:
        return "memory"

    def load_counter(self) -> int:
        return self._counter

    def get(self, table: str, key: int) -> bytes | None:
        _check_table(table)
        return self._tables[table].get(key)

    def scan(self, table: str) -> list[tuple[int, bytes]]:
        _check_table(table)
        return sorted(self._tables[table].items())

    def commit(self, batch: WriteBatch) -> None:
        for table, _ in batch.writes:
            _check_table(table)
        for (table, key), data in batch.writes.items():
            self._tables[table][key] = data
        if batch.counter is not None:
            self._counter = batch.counter

    def clear(self) -> None:
        """Drop all records and reset the counter."""
        for records in self._tables.values():
            records.clear()
        self._counter = 0


class LocalFileBackend(StorageBackend):
    """Local file system storage backend.

    Layout under ``base_path``::

        counter.json            last issued ID
        journal.json            pending batch (present only mid-commit)
        <table>/<id>.json       one encoded record per file

    A batch is first written to the journal, then applied file by file, then
    the journal is removed. A journal left behind by a crash is replayed when
    the backend is opened.
    """

    def __init__(self, base_path: str | Path):
        self._base_path = Path(base_path)
        self._base_path.mkdir(parents=True, exist_ok=True)
        for table in TABLES:
            (self._base_path / table).mkdir(exist_ok=True)
        self._counter_path = self._base_path / "counter.json"
        self._journal_path = self._base_path / "journal.json"

        if self._journal_path.exists():
            logger.warning("Replaying unfinished journal in %s", self._base_path)
            batch = WriteBatch.from_dict(json.loads(self._journal_path.read_text()))
            self._apply(batch)
            self._journal_path.unlink()

    @property
    def backend_type(self) -> str:
        return "file"

    @property
    def base_path(self) -> Path:
        return self._base_path

    def _record_path(self, table: str, key: int) -> Path:
        return self._base_path / table / f"{key}.json"

    def _write_atomic(self, path: Path, data: bytes) -> None:
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        with open(tmp_path, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)

    def _apply(self, batch: WriteBatch) -> None:
        for (table, key), data in batch.writes.items():
            self._write_atomic(self._record_path(table, key), data)
        if batch.counter is not None:
            self._write_atomic(self._counter_path, json.dumps({"counter": batch.counter}).encode("utf-8"))

    def load_counter(self) -> int:
        if not self._counter_path.exists():
            return 0
        try:
            return int(json.loads(self._counter_path.read_text())["counter"])
        except (json.JSONDecodeError, KeyError, ValueError) as e:
            raise StorageException(f"Corrupt counter file: {self._counter_path}") from e

    def get(self, table: str, key: int) -> bytes | None:
        _check_table(table)
        path = self._record_path(table, key)
        if not path.exists():
            return None
        return path.read_bytes()

    def scan(self, table: str) -> list[tuple[int, bytes]]:
        _check_table(table)
        records = []
        for path in (self._base_path / table).glob("*.json"):
            if path.stem.isdigit():
                records.append((int(path.stem), path.read_bytes()))
        return sorted(records)

    def commit(self, batch: WriteBatch) -> None:
        for table, _ in batch.writes:
            _check_table(table)
        try:
            self._write_atomic(self._journal_path, json.dumps(batch.to_dict()).encode("utf-8"))
            self._apply(batch)
            self._journal_path.unlink()
        except OSError as e:
            raise StorageException(f"Failed to commit batch to {self._base_path}: {e}") from e

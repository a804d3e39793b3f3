"""Entity tables and the transactional store that owns them.

``Store`` is the single object holding the ID counter and the five entity
tables. It is constructed once per process and passed to the service; there
is no module-level state.

Every operation runs inside ``Store.transaction()``:

- the store's lock is held for the whole operation, so operations from
  different threads never interleave;
- writes (records and the counter) are staged in a ``WriteBatch`` and are
  visible to reads made inside the same transaction;
- the batch is committed to the backend only when the block exits normally
  and is discarded otherwise, so a child write and its parent update land
  together or not at all.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any, Generic, TypeVar

from ..core.config import CoreSettings, get_config
from ..core.exceptions import ConfigException, ConflictError, InvalidPayloadError, RecordTooLargeError, StorageException
from ..core.ids import MAX_ID, IdAllocator
from ..core.models import Milestone, ProofOfReproduction, Researcher, ResearchProposal, Review
from .backend import LocalFileBackend, MemoryBackend, StorageBackend, WriteBatch
from .codec import DEFAULT_MAX_RECORD_BYTES, decode_record, encode_record

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EntityTable(Generic[T]):
    """Keyed table of one entity kind.

    ``get`` always returns a freshly decoded copy; to mutate a record, modify
    the copy and ``put`` it back.
    """

    def __init__(self, store: Store, model: type[T]):
        self._store = store
        self.model = model
        self.name: str = model.table  # type: ignore[attr-defined]

    def get(self, key: int) -> T | None:
        data = self._store.read(self.name, key)
        if data is None:
            return None
        return decode_record(self.model, data)

    def contains(self, key: int) -> bool:
        return self._store.read(self.name, key) is not None

    def put(self, key: int, record: T) -> None:
        """Insert or overwrite the record stored under ``key``.

        Raises:
            InvalidPayloadError: If the encoded record is over the size limit.
        """
        if getattr(record, "id", None) != key:
            raise StorageException(f"Record id does not match key {key} in {self.name}")
        try:
            data = encode_record(record, self._store.max_record_bytes)
        except RecordTooLargeError as e:
            raise InvalidPayloadError(e.message, field=self.name, value=e.size) from e
        self._store.write(self.name, key, data)

    def scan(self) -> list[T]:
        """All records in ascending ID order."""
        return [decode_record(self.model, data) for _, data in self._store.scan(self.name)]


class Store:
    """Owns the ID counter and the five entity tables."""

    def __init__(
        self,
        backend: StorageBackend | None = None,
        max_record_bytes: int = DEFAULT_MAX_RECORD_BYTES,
    ):
        self.backend = backend or MemoryBackend()
        self.max_record_bytes = max_record_bytes
        self._lock = threading.RLock()
        self._batch: WriteBatch | None = None

        self.ids = IdAllocator(self)
        self.researchers: EntityTable[Researcher] = EntityTable(self, Researcher)
        self.proposals: EntityTable[ResearchProposal] = EntityTable(self, ResearchProposal)
        self.milestones: EntityTable[Milestone] = EntityTable(self, Milestone)
        self.reviews: EntityTable[Review] = EntityTable(self, Review)
        self.proofs: EntityTable[ProofOfReproduction] = EntityTable(self, ProofOfReproduction)

    @property
    def tables(self) -> dict[str, EntityTable[Any]]:
        return {
            table.name: table
            for table in (self.researchers, self.proposals, self.milestones, self.reviews, self.proofs)
        }

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    @contextmanager
    def transaction(self) -> Generator[Store, None, None]:
        """Run a block as one all-or-nothing unit. Nested calls join the outer one."""
        with self._lock:
            if self._batch is not None:
                yield self
                return

            self._batch = WriteBatch()
            try:
                yield self
                if self._batch:
                    self.backend.commit(self._batch)
            except BaseException:
                if self._batch:
                    logger.debug("Discarding %d staged writes", len(self._batch.writes))
                raise
            finally:
                self._batch = None

    @property
    def in_transaction(self) -> bool:
        return self._batch is not None

    # ------------------------------------------------------------------
    # Raw access used by tables and the ID allocator
    # ------------------------------------------------------------------

    def read(self, table: str, key: int) -> bytes | None:
        with self._lock:
            if self._batch is not None and (table, key) in self._batch.writes:
                return self._batch.writes[(table, key)]
            return self.backend.get(table, key)

    def write(self, table: str, key: int, data: bytes) -> None:
        with self.transaction():
            assert self._batch is not None
            self._batch.writes[(table, key)] = data

    def scan(self, table: str) -> list[tuple[int, bytes]]:
        with self._lock:
            records = dict(self.backend.scan(table))
            if self._batch is not None:
                for (staged_table, key), data in self._batch.writes.items():
                    if staged_table == table:
                        records[key] = data
            return sorted(records.items())

    def read_counter(self) -> int:
        with self._lock:
            if self._batch is not None and self._batch.counter is not None:
                return self._batch.counter
            return self.backend.load_counter()

    def stage_counter(self, value: int) -> None:
        with self.transaction():
            assert self._batch is not None
            self._batch.counter = value

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def is_empty(self) -> bool:
        with self.transaction():
            return self.read_counter() == 0 and not any(self.scan(name) for name in self.tables)

    def export_snapshot(self) -> dict[str, Any]:
        """Return the counter and every record as plain dicts."""
        with self.transaction():
            return {
                "counter": self.read_counter(),
                "tables": {name: [record.to_dict() for record in table.scan()] for name, table in self.tables.items()},
            }

    def import_snapshot(self, snapshot: dict[str, Any]) -> None:
        """Load a snapshot produced by :meth:`export_snapshot` into an empty store.

        Raises:
            ConflictError: If the store already holds data.
            InvalidPayloadError: If the snapshot is malformed.
        """
        with self.transaction():
            if not self.is_empty():
                raise ConflictError("Cannot import a snapshot into a non-empty store")

            tables = snapshot.get("tables", {})
            highest = 0
            seen: set[int] = set()
            for name, rows in tables.items():
                table = self.tables.get(name)
                if table is None:
                    raise InvalidPayloadError(f"Unknown table in snapshot: {name}", field="tables")
                for row in rows:
                    try:
                        record = table.model.from_dict(row)
                    except (KeyError, TypeError, ValueError) as e:
                        raise InvalidPayloadError(f"Malformed {name} record in snapshot: {e}", field=name) from e
                    if record.id in seen:
                        raise InvalidPayloadError(f"Duplicate id {record.id} in snapshot", field=name, value=record.id)
                    seen.add(record.id)
                    table.put(record.id, record)
                    highest = max(highest, record.id)

            counter = snapshot.get("counter", highest)
            if not isinstance(counter, int) or isinstance(counter, bool) or not highest <= counter <= MAX_ID:
                raise InvalidPayloadError("Snapshot counter is behind its records", field="counter", value=counter)
            if counter:
                self.stage_counter(counter)
        logger.info("Imported snapshot with counter=%d", counter)


def build_store(config: CoreSettings | None = None) -> Store:
    """Build a store for the configured backend."""
    config = config or get_config()
    backend: StorageBackend
    if config.store_backend == "memory":
        backend = MemoryBackend()
    elif config.store_backend == "file":
        backend = LocalFileBackend(config.data_dir)
    elif config.store_backend == "postgres":
        from .postgres import PostgresBackend

        backend = PostgresBackend()
    else:
        raise ConfigException(f"Unknown store backend: {config.store_backend}")
    logger.info("Using %s store backend", backend.backend_type)
    return Store(backend, max_record_bytes=config.max_record_bytes)

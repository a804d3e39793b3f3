"""Persistent entity store: tables, transactions and backends.

The PostgreSQL backend lives in ``reprofund.storage.postgres`` and is
imported on demand so psycopg2 is only loaded when it is configured.
"""

from .backend import (
    TABLES,
    LocalFileBackend,
    MemoryBackend,
    StorageBackend,
    StorageStats,
    WriteBatch,
)
from .codec import DEFAULT_MAX_RECORD_BYTES, decode_record, encode_record
from .store import EntityTable, Store, build_store

__all__ = [
    "TABLES",
    "StorageBackend",
    "MemoryBackend",
    "LocalFileBackend",
    "StorageStats",
    "WriteBatch",
    "DEFAULT_MAX_RECORD_BYTES",
    "encode_record",
    "decode_record",
    "EntityTable",
    "Store",
    "build_store",
]

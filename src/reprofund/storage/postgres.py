"""PostgreSQL storage backend.

Each entity table is a ``(id NUMERIC(20) PRIMARY KEY, record TEXT)`` table and the
ID counter lives in a single-row ``reprofund_counter`` table. A batch is
applied inside one ``get_cursor()`` block, so it commits or rolls back as a
whole.
"""

from __future__ import annotations

import logging

import psycopg2
from psycopg2 import sql as psql

from ..core import db
from ..core.exceptions import StorageException
from .backend import TABLES, StorageBackend, WriteBatch, _check_table

logger = logging.getLogger(__name__)

COUNTER_TABLE = "reprofund_counter"


def schema_statements() -> list[psql.Composed]:
    """DDL creating every table the backend needs (idempotent)."""
    statements = [
        psql.SQL("CREATE TABLE IF NOT EXISTS {} (id NUMERIC(20) PRIMARY KEY, record TEXT NOT NULL)").format(
            psql.Identifier(table)
        )
        for table in TABLES
    ]
    statements.append(
        psql.SQL(
            "CREATE TABLE IF NOT EXISTS {} (singleton BOOLEAN PRIMARY KEY DEFAULT TRUE CHECK (singleton), value NUMERIC(20) NOT NULL)"
        ).format(psql.Identifier(COUNTER_TABLE))
    )
    statements.append(
        psql.SQL("INSERT INTO {} (singleton, value) VALUES (TRUE, 0) ON CONFLICT (singleton) DO NOTHING").format(
            psql.Identifier(COUNTER_TABLE)
        )
    )
    return statements


class PostgresBackend(StorageBackend):
    """Store backend persisting to PostgreSQL through the shared pool."""

    def __init__(self, init_schema: bool = True):
        if init_schema:
            self.init_schema()

    @property
    def backend_type(self) -> str:
        return "postgres"

    def init_schema(self) -> None:
        """Create the tables if they do not exist."""
        try:
            with db.get_cursor() as cur:
                for statement in schema_statements():
                    cur.execute(statement)
        except psycopg2.Error as e:
            raise StorageException(f"Failed to initialise schema: {e}") from e

    def load_counter(self) -> int:
        try:
            with db.get_cursor() as cur:
                cur.execute(psql.SQL("SELECT value FROM {}").format(psql.Identifier(COUNTER_TABLE)))
                row = cur.fetchone()
        except psycopg2.Error as e:
            raise StorageException(f"Failed to read counter: {e}") from e
        return int(row["value"]) if row else 0

    def get(self, table: str, key: int) -> bytes | None:
        _check_table(table)
        try:
            with db.get_cursor() as cur:
                cur.execute(
                    psql.SQL("SELECT record FROM {} WHERE id = %s").format(psql.Identifier(table)),
                    (key,),
                )
                row = cur.fetchone()
        except psycopg2.Error as e:
            raise StorageException(f"Failed to read {table} {key}: {e}") from e
        return row["record"].encode("utf-8") if row else None

    def scan(self, table: str) -> list[tuple[int, bytes]]:
        _check_table(table)
        try:
            with db.get_cursor() as cur:
                cur.execute(psql.SQL("SELECT id, record FROM {} ORDER BY id").format(psql.Identifier(table)))
                rows = cur.fetchall()
        except psycopg2.Error as e:
            raise StorageException(f"Failed to scan {table}: {e}") from e
        return [(int(row["id"]), row["record"].encode("utf-8")) for row in rows]

    def commit(self, batch: WriteBatch) -> None:
        for table, _ in batch.writes:
            _check_table(table)
        try:
            with db.get_cursor() as cur:
                for (table, key), data in batch.writes.items():
                    cur.execute(
                        psql.SQL(
                            "INSERT INTO {} (id, record) VALUES (%s, %s) ON CONFLICT (id) DO UPDATE SET record = EXCLUDED.record"
                        ).format(psql.Identifier(table)),
                        (key, data.decode("utf-8")),
                    )
                if batch.counter is not None:
                    cur.execute(
                        psql.SQL("UPDATE {} SET value = %s").format(psql.Identifier(COUNTER_TABLE)),
                        (batch.counter,),
                    )
        except psycopg2.Error as e:
            logger.error("Postgres commit failed, batch rolled back: %s", e)
            raise StorageException(f"Failed to commit batch: {e}") from e

    def health_check(self) -> bool:
        return db.check_connection()

    def close(self) -> None:
        db.close_pool()

# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""PostgreSQL connection management for the postgres store backend.

Config via REPROFUND_DB_* environment variables (see ``core.config``).
"""

import logging
import queue
import threading
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import psycopg2
from psycopg2 import pool as psycopg2_pool
from psycopg2.extras import RealDictCursor
from psycopg2.pool import PoolError

logger = logging.getLogger(__name__)

# Connection pool (lazy init, thread-safe)
_pool: psycopg2_pool.ThreadedConnectionPool | None = None
_pool_lock = threading.Lock()


def _get_pool() -> psycopg2_pool.ThreadedConnectionPool:
    """Get or create the connection pool."""
    from reprofund.core.config import get_config

    global _pool
    if _pool is None:
        with _pool_lock:
            if _pool is None:
                config = get_config()
                _pool = psycopg2_pool.ThreadedConnectionPool(
                    **config.pool_config,
                    **config.connection_params,
                )
    return _pool


def _get_conn_with_timeout(pool: psycopg2_pool.ThreadedConnectionPool, timeout: float) -> Any:
    """Get a connection from pool with timeout.

    A connection that arrives after the caller has given up is handed back
    to the pool.

    Raises:
        PoolError: If timeout expires before connection is available
    """
    result_queue: queue.Queue = queue.Queue()
    handoff = threading.Lock()
    abandoned = threading.Event()

    def _get_conn():
        try:
            conn = pool.getconn()
        except Exception as e:
            result_queue.put(("error", e))
            return
        with handoff:
            if abandoned.is_set():
                pool.putconn(conn)
                logger.warning("Returned a connection that arrived after the %ss pool timeout", timeout)
                return
            result_queue.put(("success", conn))

    thread = threading.Thread(target=_get_conn, daemon=True)
    thread.start()

    try:
        result_type, result_value = result_queue.get(timeout=timeout)
    except queue.Empty:
        with handoff:
            abandoned.set()
            if result_queue.empty():
                raise PoolError(f"Connection pool timeout after {timeout} seconds")
        result_type, result_value = result_queue.get_nowait()

    if result_type == "error":
        raise result_value
    return result_value


@contextmanager
def get_cursor() -> Generator[Any, None, None]:
    """Get a database cursor with auto-commit on success, rollback on error.

    Usage:
        with get_cursor() as cur:
            cur.execute("SELECT record FROM researchers")
            rows = cur.fetchall()
    """
    from reprofund.core.config import get_config

    pool = _get_pool()
    config = get_config()
    conn = _get_conn_with_timeout(pool, config.db_pool_timeout)
    try:
        with conn.cursor(cursor_factory=RealDictCursor) as cur:
            yield cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        pool.putconn(conn)


def close_pool() -> None:
    """Close the connection pool."""
    global _pool
    if _pool is not None:
        _pool.closeall()
        _pool = None


def check_connection() -> bool:
    """Round-trip a trivial query through the pool."""
    try:
        with get_cursor() as cur:
            cur.execute("SELECT 1")
        return True
    except psycopg2.Error as e:
        logger.warning("Database health check failed: %s", e)
        return False

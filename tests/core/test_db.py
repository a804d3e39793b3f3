"""Tests for reprofund.core.db - pooled connections and the health query.

Tests cover:
- Connection pool timeout, including connections that arrive late
- check_connection success and failure
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from unittest.mock import MagicMock, patch

import psycopg2
import pytest
from psycopg2.pool import PoolError


class TestPoolTimeout:
    """Test connection pool timeout handling."""

    def test_fast_pool(self):
        from reprofund.core.db import _get_conn_with_timeout

        mock_pool = MagicMock()
        mock_conn = MagicMock()
        mock_pool.getconn.return_value = mock_conn

        assert _get_conn_with_timeout(mock_pool, timeout=5) is mock_conn
        mock_pool.putconn.assert_not_called()

    def test_pool_error_propagates(self):
        from reprofund.core.db import _get_conn_with_timeout

        mock_pool = MagicMock()
        mock_pool.getconn.side_effect = PoolError("connection pool exhausted")

        with pytest.raises(PoolError, match="exhausted"):
            _get_conn_with_timeout(mock_pool, timeout=5)

    def test_late_connection_returned_to_pool(self):
        from reprofund.core.db import _get_conn_with_timeout

        release = threading.Event()
        returned = threading.Event()
        mock_conn = MagicMock()
        mock_pool = MagicMock()

        def _slow_getconn():
            release.wait(5)
            return mock_conn

        mock_pool.getconn.side_effect = _slow_getconn
        mock_pool.putconn.side_effect = lambda conn: returned.set()

        with pytest.raises(PoolError, match="timeout after 0.05 seconds"):
            _get_conn_with_timeout(mock_pool, timeout=0.05)

        release.set()
        assert returned.wait(5)
        mock_pool.putconn.assert_called_once_with(mock_conn)


class TestCheckConnection:
    def test_healthy(self):
        from reprofund.core import db

        cursor = MagicMock()

        @contextmanager
        def _get_cursor():
            yield cursor

        with patch("reprofund.core.db.get_cursor", _get_cursor):
            assert db.check_connection() is True
        cursor.execute.assert_called_once_with("SELECT 1")

    def test_driver_error(self):
        from reprofund.core import db

        @contextmanager
        def _get_cursor():
            raise psycopg2.OperationalError("could not connect")
            yield

        with patch("reprofund.core.db.get_cursor", _get_cursor):
            assert db.check_connection() is False

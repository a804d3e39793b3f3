# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Monotonic ID allocation shared by every entity table."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .exceptions import StorageException

if TYPE_CHECKING:
    from ..storage.store import Store

MAX_ID = 2**64 - 1


class IdAllocator:
    """Issues unique, strictly increasing unsigned 64-bit IDs.

    The counter starts at 0, so the first issued ID is 1. The counter is
    persisted by the store's backend; an ID allocated inside a transaction
    that is later rolled back is not consumed.
    """

    def __init__(self, store: Store):
        self._store = store

    def current(self) -> int:
        """Return the last issued ID (0 if none)."""
        with self._store.transaction():
            return self._store.read_counter()

    def next_id(self) -> int:
        """Allocate and return the next ID."""
        with self._store.transaction():
            value = self._store.read_counter() + 1
            if value > MAX_ID:
                raise StorageException("ID space exhausted", {"counter": value - 1})
            self._store.stage_counter(value)
            return value

"""Record encoding for persisted entities.

Records are stored as canonical JSON (sorted keys, compact separators,
UTF-8) so that the same record always encodes to the same bytes and
decoding reproduces it exactly.
"""

from __future__ import annotations

import json
from typing import Any, TypeVar

from ..core.exceptions import RecordTooLargeError, StorageException

DEFAULT_MAX_RECORD_BYTES = 1024

T = TypeVar("T")


def encode_record(record: Any, max_bytes: int = DEFAULT_MAX_RECORD_BYTES) -> bytes:
    """Encode an entity to canonical JSON bytes.

    Raises:
        RecordTooLargeError: If the encoding exceeds ``max_bytes``.
    """
    data = json.dumps(record.to_dict(), sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    if len(data) > max_bytes:
        raise RecordTooLargeError(record.table, len(data), max_bytes)
    return data


def decode_record(model: type[T], data: bytes) -> T:
    """Decode bytes produced by :func:`encode_record` into ``model``.

    Raises:
        StorageException: If the bytes are not a valid record of ``model``.
    """
    try:
        return model.from_dict(json.loads(data.decode("utf-8")))  # type: ignore[attr-defined]
    except (UnicodeDecodeError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        raise StorageException(
            f"Corrupt {model.__name__} record: {e}",
            {"model": model.__name__},
        ) from e

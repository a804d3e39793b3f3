# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Custom exception hierarchy for reprofund.

Every exception maps onto one kind of the message vocabulary
(``MessageKind``) so the service layer can turn any failure into a
``FundingResponse`` without losing what went wrong.
"""

from __future__ import annotations

from typing import Any

from .response import MessageKind


class ReprofundException(Exception):  # noqa: N818
    """Base exception for all reprofund errors."""

    kind: MessageKind = MessageKind.ERROR

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class InvalidPayloadError(ReprofundException):
    """Input failed a shape or semantic check.

    Raised when:
    - A text field is empty or too short
    - A numeric field is not a positive unsigned 64-bit integer
    - An email or phone number has the wrong shape
    """

    kind = MessageKind.INVALID_PAYLOAD

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        super().__init__(message, details)
        self.field = field
        self.value = value


class DuplicateResearcherError(InvalidPayloadError):
    """A researcher with the same email or phone already exists."""

    def __init__(self, existing_id: int):
        super().__init__("Researcher with this email or phone already exists")
        self.details["existing_id"] = existing_id
        self.existing_id = existing_id


class InvalidTransitionError(InvalidPayloadError):
    """A stage or status change outside the allowed transitions."""

    def __init__(self, entity: str, current: str, target: str):
        super().__init__(f"{entity} cannot move from {current} to {target}")
        self.details.update({"current": current, "target": target})
        self.current = current
        self.target = target


class NotFoundError(ReprofundException):
    """A referenced ID does not resolve, or a query matched nothing."""

    kind = MessageKind.NOT_FOUND

    def __init__(self, resource_type: str, resource_id: Any, message: str | None = None):
        message = message or f"{resource_type} with id={resource_id} not found"
        details = {
            "resource_type": resource_type,
            "resource_id": str(resource_id),
        }
        super().__init__(message, details)
        self.resource_type = resource_type
        self.resource_id = resource_id

    @classmethod
    def empty(cls, resource_type: str, message: str) -> NotFoundError:
        """Build the error returned when a scan or filter yields nothing."""
        return cls(resource_type, "*", message=message)


class ConflictError(ReprofundException):
    """State conflict, e.g. importing a snapshot into a non-empty store."""

    def __init__(self, message: str, existing_id: str | None = None):
        details = {}
        if existing_id:
            details["existing_id"] = existing_id
        super().__init__(message, details)
        self.existing_id = existing_id


class StorageException(ReprofundException):
    """Exception for storage-related errors.

    Raised when:
    - A backend cannot read or commit a batch
    - A persisted record cannot be decoded
    - The ID counter would leave the unsigned 64-bit range
    """

    pass


class RecordTooLargeError(StorageException):
    """An encoded record exceeds the per-record size limit."""

    def __init__(self, table: str, size: int, limit: int):
        super().__init__(
            f"Encoded {table} record is {size} bytes (limit {limit})",
            {"table": table, "size": size, "limit": limit},
        )
        self.table = table
        self.size = size
        self.limit = limit


class ConfigException(ReprofundException):
    """Exception for configuration errors.

    Raised when:
    - An unknown storage backend is configured
    - A backend is missing a required setting
    """

    def __init__(self, message: str, missing_vars: list[str] | None = None):
        details = {}
        if missing_vars:
            details["missing_vars"] = missing_vars
        super().__init__(message, details)
        self.missing_vars = missing_vars or []

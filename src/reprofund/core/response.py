# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Standard response envelope for reprofund operations.

Every ``FundingService`` operation returns a ``FundingResponse`` so callers
always receive a consistent ``{success, data, message}`` structure instead of
bare exceptions.

Usage::

    from reprofund.core.response import ok, err, MessageKind

    return ok(researcher)
    return err(MessageKind.NOT_FOUND, "Proposal with id=7 not found")
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class MessageKind(StrEnum):
    """Kinds of message an operation can return."""

    SUCCESS = "success"
    ERROR = "error"
    NOT_FOUND = "not_found"
    INVALID_PAYLOAD = "invalid_payload"


@dataclass(frozen=True)
class Message:
    """A tagged message: the kind plus a human-readable text."""

    kind: MessageKind
    text: str

    def to_dict(self) -> dict[str, str]:
        return {"kind": str(self.kind), "text": self.text}


@dataclass
class FundingResponse:
    """Unified response envelope for all public service operations.

    Attributes:
        success: True when the operation completed without error.
        data:    Entity or list of entities on success.  None on failure.
        message: Failure message (kind + text).  None on success.
    """

    success: bool
    data: Any = None
    message: Message | None = None

    @property
    def kind(self) -> MessageKind:
        """Kind of this response; SUCCESS when the operation succeeded."""
        if self.message is None:
            return MessageKind.SUCCESS
        return self.message.kind

    @property
    def error(self) -> str | None:
        """Failure text, or None on success."""
        return self.message.text if self.message else None

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict suitable for REST responses.

        Entities (anything with ``to_dict``) and lists of them are expanded.
        """
        d: dict[str, Any] = {"success": self.success}
        if self.data is not None:
            d["data"] = _serialise(self.data)
        if self.message is not None:
            d["message"] = self.message.to_dict()
        return d


def _serialise(value: Any) -> Any:
    if isinstance(value, list):
        return [_serialise(v) for v in value]
    if hasattr(value, "to_dict"):
        return value.to_dict()
    return value


def ok(data: Any = None) -> FundingResponse:
    """Create a successful FundingResponse."""
    return FundingResponse(success=True, data=data)


def err(kind: MessageKind, text: str) -> FundingResponse:
    """Create a failed FundingResponse.

    Args:
        kind: Failure kind; must not be SUCCESS.
        text: Human-readable description of the failure.
    """
    if kind is MessageKind.SUCCESS:
        raise ValueError("err() requires a failure kind")
    return FundingResponse(success=False, message=Message(kind=kind, text=text))

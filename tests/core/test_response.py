"""Tests for reprofund.core.response."""

from __future__ import annotations

import pytest

from reprofund.core.models import Milestone
from reprofund.core.response import FundingResponse, Message, MessageKind, err, ok


class TestOk:
    def test_ok_with_data(self):
        resp = ok({"id": 1})
        assert resp.success is True
        assert resp.data == {"id": 1}
        assert resp.message is None
        assert resp.kind is MessageKind.SUCCESS
        assert resp.error is None

    def test_ok_without_data(self):
        resp = ok()
        assert resp.to_dict() == {"success": True}


class TestErr:
    def test_err(self):
        resp = err(MessageKind.NOT_FOUND, "Proposal with id=9 not found")
        assert resp.success is False
        assert resp.data is None
        assert resp.kind is MessageKind.NOT_FOUND
        assert resp.error == "Proposal with id=9 not found"

    def test_err_rejects_success_kind(self):
        with pytest.raises(ValueError):
            err(MessageKind.SUCCESS, "not a failure")

    def test_to_dict(self):
        resp = err(MessageKind.INVALID_PAYLOAD, "Invalid email format")
        assert resp.to_dict() == {
            "success": False,
            "message": {"kind": "invalid_payload", "text": "Invalid email format"},
        }


class TestSerialisation:
    def test_entity_is_expanded(self):
        milestone = Milestone(id=3, description="M1", required_funding=500, deadline="2025-01-01")
        d = ok(milestone).to_dict()
        assert d["data"]["id"] == 3
        assert d["data"]["status"] == "pending"

    def test_list_of_entities_is_expanded(self):
        milestones = [
            Milestone(id=i, description="M", required_funding=1, deadline="d") for i in (1, 2)
        ]
        d = FundingResponse(success=True, data=milestones).to_dict()
        assert [m["id"] for m in d["data"]] == [1, 2]

    def test_message_to_dict(self):
        assert Message(MessageKind.ERROR, "boom").to_dict() == {"kind": "error", "text": "boom"}

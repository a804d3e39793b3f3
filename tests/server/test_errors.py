"""Tests for reprofund.server.errors."""

from __future__ import annotations

import json

from reprofund.core.response import Message, MessageKind
from reprofund.server.errors import (
    INTERNAL_ERROR,
    NOT_FOUND_RESOURCE,
    VALIDATION_INVALID_PAYLOAD,
    error_response,
    internal_error,
    invalid_format_error,
    message_error,
    missing_field_error,
    service_unavailable_error,
)


def _body(response) -> dict:
    return json.loads(response.body)


class TestErrorResponses:
    def test_error_response_shape(self):
        response = error_response("SOME_CODE", "Something", status_code=418)
        assert response.status_code == 418
        assert _body(response) == {"success": False, "error": {"code": "SOME_CODE", "message": "Something"}}

    def test_missing_field(self):
        body = _body(missing_field_error("email"))
        assert body["error"]["message"] == "email is required"

    def test_invalid_format_with_details(self):
        body = _body(invalid_format_error("id", "expected an integer"))
        assert body["error"]["message"] == "Invalid id format: expected an integer"

    def test_internal_error_has_request_id(self):
        response = internal_error()
        body = _body(response)
        assert response.status_code == 500
        assert body["error"]["code"] == INTERNAL_ERROR
        assert len(body["error"]["request_id"]) == 12

    def test_service_unavailable(self):
        assert service_unavailable_error("Funding service").status_code == 503


class TestMessageError:
    def test_invalid_payload_is_400(self):
        response = message_error(Message(MessageKind.INVALID_PAYLOAD, "Invalid email format"))
        assert response.status_code == 400
        assert _body(response)["error"] == {"code": VALIDATION_INVALID_PAYLOAD, "message": "Invalid email format"}

    def test_not_found_is_404(self):
        response = message_error(Message(MessageKind.NOT_FOUND, "No proposals found"))
        assert response.status_code == 404
        assert _body(response)["error"]["code"] == NOT_FOUND_RESOURCE

    def test_error_is_500(self):
        response = message_error(Message(MessageKind.ERROR, "write failed"))
        assert response.status_code == 500
        assert _body(response)["error"]["message"] == "write failed"

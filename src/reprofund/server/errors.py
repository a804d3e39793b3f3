# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Standardized REST error responses for the reprofund API.

All REST endpoints use these helpers for a consistent error format:
{
    "success": false,
    "error": {
        "code": "ERROR_CODE",
        "message": "Human readable message"
    }
}
"""

from __future__ import annotations

import logging
import uuid

from starlette.responses import JSONResponse

from reprofund.core.response import Message, MessageKind

logger = logging.getLogger(__name__)

# =============================================================================
# STANDARD ERROR CODES
# =============================================================================

# Validation errors (400)
VALIDATION_MISSING_FIELD = "VALIDATION_MISSING_FIELD"
VALIDATION_INVALID_FORMAT = "VALIDATION_INVALID_FORMAT"
VALIDATION_INVALID_PAYLOAD = "VALIDATION_INVALID_PAYLOAD"
VALIDATION_INVALID_JSON = "VALIDATION_INVALID_JSON"

# Not found errors (404)
NOT_FOUND_RESOURCE = "NOT_FOUND_RESOURCE"

# Server errors (500)
INTERNAL_ERROR = "INTERNAL_ERROR"

# Service unavailable (503)
SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"


def error_response(
    code: str,
    message: str,
    status_code: int = 400,
) -> JSONResponse:
    """Create a standardized error response."""
    return JSONResponse(
        {
            "success": False,
            "error": {
                "code": code,
                "message": message,
            },
        },
        status_code=status_code,
    )


def validation_error(message: str, code: str = VALIDATION_INVALID_PAYLOAD) -> JSONResponse:
    """Create a 400 validation error response."""
    return error_response(code, message, status_code=400)


def missing_field_error(field_name: str) -> JSONResponse:
    """Create a 400 error for missing required field."""
    return error_response(VALIDATION_MISSING_FIELD, f"{field_name} is required", status_code=400)


def invalid_format_error(field_name: str, details: str = "") -> JSONResponse:
    """Create a 400 error for invalid field format."""
    message = f"Invalid {field_name} format"
    if details:
        message = f"{message}: {details}"
    return error_response(VALIDATION_INVALID_FORMAT, message, status_code=400)


def invalid_json_error() -> JSONResponse:
    """Create a 400 error for invalid JSON body."""
    return error_response(VALIDATION_INVALID_JSON, "Invalid JSON body", status_code=400)


def not_found_error(message: str) -> JSONResponse:
    """Create a 404 not found error response."""
    return error_response(NOT_FOUND_RESOURCE, message, status_code=404)


def internal_error(message: str = "Internal server error") -> JSONResponse:
    """Create a 500 internal error response carrying a request id for log correlation."""
    request_id = uuid.uuid4().hex[:12]
    logger.error("request_id=%s %s", request_id, message)
    return JSONResponse(
        {
            "success": False,
            "error": {
                "code": INTERNAL_ERROR,
                "message": message,
                "request_id": request_id,
            },
        },
        status_code=500,
    )


def service_unavailable_error(service: str) -> JSONResponse:
    """Create a 503 service unavailable error response."""
    return error_response(SERVICE_UNAVAILABLE, f"{service} not initialized", status_code=503)


def message_error(message: Message) -> JSONResponse:
    """Map a failed operation's message onto the matching HTTP error."""
    if message.kind is MessageKind.INVALID_PAYLOAD:
        return validation_error(message.text)
    if message.kind is MessageKind.NOT_FOUND:
        return not_found_error(message.text)
    return internal_error(message.text)

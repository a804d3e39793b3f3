# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""REST endpoints for reviews.

Routes (mounted under /api/v1 in app.py):
    POST   /reviews         Submit a review (201)
    GET    /reviews/{id}    Get review by ID

When the body omits ``reviewer``, the caller identity is used.
"""

from __future__ import annotations

from starlette.requests import Request
from starlette.responses import JSONResponse

from reprofund.core.models import SubmitReviewPayload

from ..endpoint_utils import caller_identity, get_service, json_endpoint, path_id, read_body, run_operation, to_json_response

REVIEW_FIELDS = ("proposal_id", "score", "comments", "stake_amount")


@json_endpoint
async def reviews_create_endpoint(request: Request) -> JSONResponse:
    """POST /api/v1/reviews"""
    service = get_service(request)
    body = await read_body(request, required=REVIEW_FIELDS)
    reviewer = body.get("reviewer") or caller_identity(request) or service.anonymous_caller
    payload = SubmitReviewPayload(reviewer=reviewer, **{field: body[field] for field in REVIEW_FIELDS})
    return to_json_response(await run_operation(service.submit_review, payload), status_code=201)


@json_endpoint
async def reviews_get_endpoint(request: Request) -> JSONResponse:
    """GET /api/v1/reviews/{id}"""
    service = get_service(request)
    return to_json_response(await run_operation(service.get_review_by_id, path_id(request)))

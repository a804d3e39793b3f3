# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""REST endpoints for milestones.

Routes (mounted under /api/v1 in app.py):
    POST   /milestones               Create a milestone under a proposal (201)
    GET    /milestones/{id}          Get milestone by ID
    POST   /milestones/{id}/verify   Mark a milestone verified
"""

from __future__ import annotations

from starlette.requests import Request
from starlette.responses import JSONResponse

from reprofund.core.models import CreateMilestonePayload, VerifyMilestonePayload

from ..endpoint_utils import get_service, json_endpoint, path_id, read_body, run_operation, to_json_response

MILESTONE_FIELDS = ("proposal_id", "description", "required_funding", "deadline")


@json_endpoint
async def milestones_create_endpoint(request: Request) -> JSONResponse:
    """POST /api/v1/milestones: also activates the owning proposal."""
    service = get_service(request)
    body = await read_body(request, required=MILESTONE_FIELDS)
    payload = CreateMilestonePayload(**{field: body[field] for field in MILESTONE_FIELDS})
    return to_json_response(await run_operation(service.create_milestone, payload), status_code=201)


@json_endpoint
async def milestones_get_endpoint(request: Request) -> JSONResponse:
    """GET /api/v1/milestones/{id}"""
    service = get_service(request)
    return to_json_response(await run_operation(service.get_milestone_by_id, path_id(request)))


@json_endpoint
async def milestones_verify_endpoint(request: Request) -> JSONResponse:
    """POST /api/v1/milestones/{id}/verify

    The body is optional; a ``proposal_id`` in it is accepted and ignored.
    """
    service = get_service(request)
    milestone_id = path_id(request)
    body = await read_body(request) if await request.body() else {}
    payload = VerifyMilestonePayload(proposal_id=body.get("proposal_id", 0), milestone_id=milestone_id)
    return to_json_response(await run_operation(service.verify_milestone, payload))

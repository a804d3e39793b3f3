# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""REST endpoints for research proposals.

Routes (mounted under /api/v1 in app.py):
    POST   /proposals                 Create a proposal (201)
    GET    /proposals                 List all proposals
    GET    /proposals/{id}            Get proposal by ID
    POST   /proposals/{id}/fund       Add funding to a proposal
    GET    /proposals/{id}/reviews    Reviews submitted for a proposal
"""

from __future__ import annotations

from starlette.requests import Request
from starlette.responses import JSONResponse

from reprofund.core.models import CreateProposalPayload, FundProposalPayload

from ..endpoint_utils import get_service, json_endpoint, path_id, read_body, run_operation, to_json_response

PROPOSAL_FIELDS = ("researcher_id", "title", "description", "methodology", "funding_target")


@json_endpoint
async def proposals_create_endpoint(request: Request) -> JSONResponse:
    """POST /api/v1/proposals: create a proposal in the draft stage."""
    service = get_service(request)
    body = await read_body(request, required=PROPOSAL_FIELDS)
    payload = CreateProposalPayload(**{field: body[field] for field in PROPOSAL_FIELDS})
    return to_json_response(await run_operation(service.create_proposal, payload), status_code=201)


@json_endpoint
async def proposals_list_endpoint(request: Request) -> JSONResponse:
    """GET /api/v1/proposals: list every proposal (404 when none)."""
    service = get_service(request)
    return to_json_response(await run_operation(service.get_all_proposals))


@json_endpoint
async def proposals_get_endpoint(request: Request) -> JSONResponse:
    """GET /api/v1/proposals/{id}"""
    service = get_service(request)
    return to_json_response(await run_operation(service.get_proposal_by_id, path_id(request)))


@json_endpoint
async def proposals_fund_endpoint(request: Request) -> JSONResponse:
    """POST /api/v1/proposals/{id}/fund

    Request body (JSON):
        funding_amount (required): positive integer; funding past the target is accepted
    """
    service = get_service(request)
    proposal_id = path_id(request)
    body = await read_body(request, required=("funding_amount",))
    payload = FundProposalPayload(proposal_id=proposal_id, funding_amount=body["funding_amount"])
    return to_json_response(await run_operation(service.fund_proposal, payload))


@json_endpoint
async def proposal_reviews_endpoint(request: Request) -> JSONResponse:
    """GET /api/v1/proposals/{id}/reviews"""
    service = get_service(request)
    return to_json_response(await run_operation(service.get_reviews_by_proposal_id, path_id(request)))

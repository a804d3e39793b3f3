# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""REST endpoints for researchers.

Routes (mounted under /api/v1 in app.py):
    POST   /researchers                   Register a researcher (201)
    GET    /researchers                   List all researchers
    GET    /researchers/me                Researcher owned by the caller
    GET    /researchers/{id}              Get researcher by ID
    GET    /researchers/{id}/proposals    Proposals submitted by a researcher

The caller identity is read from the configured header (X-Caller-Id).
"""

from __future__ import annotations

from starlette.requests import Request
from starlette.responses import JSONResponse

from reprofund.core.models import ResearcherPayload

from ..endpoint_utils import caller_identity, get_service, json_endpoint, path_id, read_body, run_operation, to_json_response

RESEARCHER_FIELDS = ("name", "address", "email", "phone")


@json_endpoint
async def researchers_create_endpoint(request: Request) -> JSONResponse:
    """POST /api/v1/researchers: register the caller as a researcher."""
    service = get_service(request)
    body = await read_body(request, required=RESEARCHER_FIELDS)
    payload = ResearcherPayload(**{field: body[field] for field in RESEARCHER_FIELDS})
    result = await run_operation(service.create_researcher, payload, caller=caller_identity(request))
    return to_json_response(result, status_code=201)


@json_endpoint
async def researchers_list_endpoint(request: Request) -> JSONResponse:
    """GET /api/v1/researchers: list every researcher (404 when none)."""
    service = get_service(request)
    return to_json_response(await run_operation(service.get_all_researchers))


@json_endpoint
async def researchers_me_endpoint(request: Request) -> JSONResponse:
    """GET /api/v1/researchers/me: the researcher registered by the caller."""
    service = get_service(request)
    result = await run_operation(service.get_researcher_by_owner, caller=caller_identity(request))
    return to_json_response(result)


@json_endpoint
async def researchers_get_endpoint(request: Request) -> JSONResponse:
    """GET /api/v1/researchers/{id}"""
    service = get_service(request)
    return to_json_response(await run_operation(service.get_researcher_by_id, path_id(request)))


@json_endpoint
async def researcher_proposals_endpoint(request: Request) -> JSONResponse:
    """GET /api/v1/researchers/{id}/proposals"""
    service = get_service(request)
    return to_json_response(await run_operation(service.get_proposals_by_researcher_id, path_id(request)))

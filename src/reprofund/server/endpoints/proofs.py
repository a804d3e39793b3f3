# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""REST endpoints for proofs of reproduction.

Routes (mounted under /api/v1 in app.py):
    POST   /proofs         Submit a proof for a milestone (201)
    GET    /proofs/{id}    Get proof by ID
"""

from __future__ import annotations

from starlette.requests import Request
from starlette.responses import JSONResponse

from reprofund.core.models import SubmitProofPayload

from ..endpoint_utils import get_service, json_endpoint, path_id, read_body, run_operation, to_json_response

PROOF_FIELDS = ("milestone_id", "methodology_hash", "results_hash")


@json_endpoint
async def proofs_create_endpoint(request: Request) -> JSONResponse:
    """POST /api/v1/proofs"""
    service = get_service(request)
    body = await read_body(request, required=PROOF_FIELDS)
    payload = SubmitProofPayload(**{field: body[field] for field in PROOF_FIELDS})
    return to_json_response(await run_operation(service.submit_proof, payload), status_code=201)


@json_endpoint
async def proofs_get_endpoint(request: Request) -> JSONResponse:
    """GET /api/v1/proofs/{id}"""
    service = get_service(request)
    return to_json_response(await run_operation(service.get_proof_by_id, path_id(request)))

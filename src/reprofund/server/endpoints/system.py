# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Service-level endpoints: discovery, health and snapshot export.

Routes:
    GET    /                  Service info and endpoint index
    GET    /api/v1/health     Storage backend health
    GET    /api/v1/export     Full snapshot of every table and the ID counter
"""

from __future__ import annotations

from typing import Any

from starlette.requests import Request
from starlette.responses import JSONResponse

from ..config import get_package_version
from ..endpoint_utils import get_service, json_endpoint, run_operation, to_json_response


async def info_endpoint(request: Request) -> JSONResponse:
    """Root discovery endpoint."""
    return JSONResponse(
        {
            "server": "reprofund",
            "version": get_package_version(),
            "apiVersion": "v1",
            "endpoints": {
                "health": "/api/v1/health",
                "researchers": "/api/v1/researchers",
                "proposals": "/api/v1/proposals",
                "reviews": "/api/v1/reviews",
                "milestones": "/api/v1/milestones",
                "proofs": "/api/v1/proofs",
                "export": "/api/v1/export",
            },
        }
    )


@json_endpoint
async def health_endpoint(request: Request) -> JSONResponse:
    """Health check: 200 when the store backend answers, 503 otherwise."""
    service = get_service(request)
    backend = service.store.backend
    healthy = await run_operation(backend.health_check)

    health_data: dict[str, Any] = {
        "status": "healthy" if healthy else "degraded",
        "server": "reprofund",
        "version": get_package_version(),
        "storage": backend.backend_type,
    }
    return JSONResponse(health_data, status_code=200 if healthy else 503)


@json_endpoint
async def export_endpoint(request: Request) -> JSONResponse:
    """GET /api/v1/export"""
    service = get_service(request)
    return to_json_response(await run_operation(service.export_snapshot))

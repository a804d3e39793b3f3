# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Starlette ASGI application for the reprofund HTTP API.

Every operation of ``FundingService`` is exposed as a REST route under
``/api/v1``. Service calls are blocking and run in a worker thread; the
store serializes them.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.routing import Route

from ..core.logging import configure_logging
from ..core.service import FundingService
from ..storage.store import build_store
from .config import ServerSettings, get_settings
from .endpoints.milestones import (
    milestones_create_endpoint,
    milestones_get_endpoint,
    milestones_verify_endpoint,
)
from .endpoints.proofs import proofs_create_endpoint, proofs_get_endpoint
from .endpoints.proposals import (
    proposal_reviews_endpoint,
    proposals_create_endpoint,
    proposals_fund_endpoint,
    proposals_get_endpoint,
    proposals_list_endpoint,
)
from .endpoints.researchers import (
    researcher_proposals_endpoint,
    researchers_create_endpoint,
    researchers_get_endpoint,
    researchers_list_endpoint,
    researchers_me_endpoint,
)
from .endpoints.reviews import reviews_create_endpoint, reviews_get_endpoint
from .endpoints.system import export_endpoint, health_endpoint, info_endpoint

logger = logging.getLogger(__name__)

# API version prefix for all REST endpoints
API_V1 = "/api/v1"


def build_routes() -> list[Route]:
    """Route table for the REST API."""
    return [
        # Root info (no version prefix)
        Route("/", info_endpoint, methods=["GET"]),
        Route(f"{API_V1}/health", health_endpoint, methods=["GET"]),
        # Researchers ("me" must precede the {id} route)
        Route(f"{API_V1}/researchers", researchers_create_endpoint, methods=["POST"]),
        Route(f"{API_V1}/researchers", researchers_list_endpoint, methods=["GET"]),
        Route(f"{API_V1}/researchers/me", researchers_me_endpoint, methods=["GET"]),
        Route(f"{API_V1}/researchers/{{id}}", researchers_get_endpoint, methods=["GET"]),
        Route(
            f"{API_V1}/researchers/{{id}}/proposals",
            researcher_proposals_endpoint,
            methods=["GET"],
        ),
        # Proposals
        Route(f"{API_V1}/proposals", proposals_create_endpoint, methods=["POST"]),
        Route(f"{API_V1}/proposals", proposals_list_endpoint, methods=["GET"]),
        Route(f"{API_V1}/proposals/{{id}}", proposals_get_endpoint, methods=["GET"]),
        Route(f"{API_V1}/proposals/{{id}}/fund", proposals_fund_endpoint, methods=["POST"]),
        Route(f"{API_V1}/proposals/{{id}}/reviews", proposal_reviews_endpoint, methods=["GET"]),
        # Reviews
        Route(f"{API_V1}/reviews", reviews_create_endpoint, methods=["POST"]),
        Route(f"{API_V1}/reviews/{{id}}", reviews_get_endpoint, methods=["GET"]),
        # Milestones
        Route(f"{API_V1}/milestones", milestones_create_endpoint, methods=["POST"]),
        Route(f"{API_V1}/milestones/{{id}}", milestones_get_endpoint, methods=["GET"]),
        Route(f"{API_V1}/milestones/{{id}}/verify", milestones_verify_endpoint, methods=["POST"]),
        # Proofs
        Route(f"{API_V1}/proofs", proofs_create_endpoint, methods=["POST"]),
        Route(f"{API_V1}/proofs/{{id}}", proofs_get_endpoint, methods=["GET"]),
        # Snapshot
        Route(f"{API_V1}/export", export_endpoint, methods=["GET"]),
    ]


def create_app(
    service: FundingService | None = None,
    settings: ServerSettings | None = None,
) -> Starlette:
    """Create the Starlette ASGI application.

    Args:
        service: Service to serve. Built from ``settings`` when omitted.
        settings: Server settings. Defaults to the global settings.
    """
    settings = settings or get_settings()
    if service is None:
        service = FundingService(build_store(settings), anonymous_caller=settings.anonymous_caller)

    @asynccontextmanager
    async def lifespan(app: Starlette):
        logger.info(
            "Starting reprofund server on %s:%s (storage=%s)",
            settings.host,
            settings.port,
            service.store.backend.backend_type,
        )
        yield
        service.store.backend.close()
        logger.info("reprofund server shutting down")

    middleware = [
        Middleware(
            CORSMiddleware,
            allow_origins=settings.allowed_origins,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["Content-Type", settings.caller_header, "X-Request-Id"],
        ),
    ]

    app = Starlette(routes=build_routes(), middleware=middleware, lifespan=lifespan)
    app.state.service = service
    app.state.caller_header = settings.caller_header
    return app


def run() -> None:
    """Run the server using uvicorn."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level, log_file=settings.log_file)

    logger.info("Starting reprofund HTTP server on %s:%s", settings.host, settings.port)

    uvicorn.run(
        create_app(settings=settings),
        host=settings.host,
        port=settings.port,
        log_level="info",
    )


if __name__ == "__main__":
    run()

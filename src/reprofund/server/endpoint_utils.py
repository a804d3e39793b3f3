# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Shared helpers for REST endpoints: request parsing and response mapping."""

from __future__ import annotations

import asyncio
import functools
import json
import logging
from collections.abc import Callable
from typing import Any

from starlette.requests import Request
from starlette.responses import JSONResponse

from reprofund.core.logging import correlation_context
from reprofund.core.response import FundingResponse
from reprofund.core.service import FundingService

from .errors import (
    internal_error,
    invalid_format_error,
    invalid_json_error,
    message_error,
    missing_field_error,
    service_unavailable_error,
)

logger = logging.getLogger(__name__)


class EndpointError(Exception):
    """Carries a ready-made error response out of a parsing helper."""

    def __init__(self, response: JSONResponse):
        self.response = response
        super().__init__(response.status_code)


def get_service(request: Request) -> FundingService:
    """Return the service attached to the application."""
    service = getattr(request.app.state, "service", None)
    if service is None:
        raise EndpointError(service_unavailable_error("Funding service"))
    return service


def caller_identity(request: Request) -> str | None:
    """Return the caller identity header, or None when absent."""
    header = getattr(request.app.state, "caller_header", "X-Caller-Id")
    value = request.headers.get(header, "").strip()
    return value or None


def path_id(request: Request, name: str = "id") -> int:
    """Parse an integer ID path parameter."""
    raw = request.path_params.get(name)
    if raw is None:
        raise EndpointError(missing_field_error(name))
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise EndpointError(invalid_format_error(name, "expected an integer"))
    if value < 0:
        raise EndpointError(invalid_format_error(name, "expected a non-negative integer"))
    return value


async def read_body(request: Request, required: tuple[str, ...] = ()) -> dict[str, Any]:
    """Parse the JSON object body and check that ``required`` keys are present."""
    try:
        body = await request.json()
    except json.JSONDecodeError:
        raise EndpointError(invalid_json_error())
    if not isinstance(body, dict):
        raise EndpointError(invalid_json_error())
    for field in required:
        if field not in body:
            raise EndpointError(missing_field_error(field))
    return body


async def run_operation(func: Callable[..., FundingResponse], *args: Any, **kwargs: Any) -> FundingResponse:
    """Run a blocking service operation off the event loop."""
    return await asyncio.to_thread(func, *args, **kwargs)


def to_json_response(result: FundingResponse, status_code: int = 200) -> JSONResponse:
    """Success envelope on success, the mapped HTTP error otherwise."""
    if not result.success:
        assert result.message is not None
        return message_error(result.message)
    return JSONResponse(result.to_dict(), status_code=status_code)


def json_endpoint(func: Callable[[Request], Any]) -> Callable[[Request], Any]:
    """Wrap an endpoint with a correlation id and uniform error handling."""

    @functools.wraps(func)
    async def wrapper(request: Request) -> JSONResponse:
        with correlation_context(request.headers.get("X-Request-Id")):
            try:
                return await func(request)
            except EndpointError as e:
                return e.response
            except Exception:
                logger.exception("Error in %s", func.__name__)
                return internal_error()

    return wrapper

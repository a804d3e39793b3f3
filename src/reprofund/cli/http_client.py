# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""HTTP client for the reprofund REST API.

All CLI commands use this module to communicate with the server.
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from .config import get_cli_config

CALLER_HEADER = "X-Caller-Id"


class ReprofundAPIError(Exception):
    """Raised when the API returns an error response."""

    def __init__(self, status_code: int, code: str, message: str):
        self.status_code = status_code
        self.code = code
        self.message = message
        super().__init__(f"[{status_code}] {code}: {message}")


class ReprofundConnectionError(Exception):
    """Raised when unable to connect to the server."""

    def __init__(self, server_url: str, detail: str = ""):
        self.server_url = server_url
        msg = f"Cannot connect to reprofund server at {server_url}"
        if detail:
            msg += f": {detail}"
        msg += "\n\nIs the server running? Start with: reprofund-server"
        super().__init__(msg)


class ReprofundClient:
    """Thin HTTP client for the reprofund REST API."""

    def __init__(self, server_url: str | None = None, caller: str | None = None, timeout: float | None = None):
        config = get_cli_config()
        self.base_url = (server_url if server_url is not None else config.server_url).rstrip("/")
        self.caller = caller if caller is not None else config.caller
        self.timeout = timeout if timeout is not None else config.timeout

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.caller:
            headers[CALLER_HEADER] = self.caller
        return headers

    def _url(self, path: str) -> str:
        return f"{self.base_url}/api/v1{path}"

    def _handle_response(self, resp: httpx.Response) -> dict[str, Any]:
        """Parse response, raise ReprofundAPIError on failure."""
        if resp.status_code >= 400:
            try:
                error = resp.json().get("error", {})
            except (json.JSONDecodeError, AttributeError):
                raise ReprofundAPIError(resp.status_code, "UNKNOWN", resp.text)
            raise ReprofundAPIError(
                status_code=resp.status_code,
                code=error.get("code", "UNKNOWN"),
                message=error.get("message", resp.text),
            )

        try:
            return resp.json()
        except json.JSONDecodeError:
            return {"formatted": resp.text}

    def _request(self, method: str, path: str, body: dict[str, Any] | None = None) -> dict[str, Any]:
        """Execute an HTTP request with connection error handling."""
        try:
            with httpx.Client(timeout=self.timeout) as client:
                resp = client.request(
                    method,
                    self._url(path),
                    headers=self._headers(),
                    json=body if method == "POST" and body is not None else None,
                )
            return self._handle_response(resp)
        except httpx.ConnectError:
            raise ReprofundConnectionError(self.base_url)
        except httpx.TimeoutException:
            raise ReprofundConnectionError(self.base_url, "request timed out")

    def get(self, path: str) -> dict[str, Any]:
        """HTTP GET request."""
        return self._request("GET", path)

    def post(self, path: str, body: dict[str, Any] | None = None) -> dict[str, Any]:
        """HTTP POST request."""
        return self._request("POST", path, body=body)


def get_client() -> ReprofundClient:
    """Get a configured ReprofundClient instance."""
    return ReprofundClient()

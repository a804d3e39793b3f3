"""Server-specific test fixtures."""

from __future__ import annotations

import pytest
from starlette.testclient import TestClient

from reprofund.server.app import create_app
from reprofund.server.config import ServerSettings, clear_settings_cache


@pytest.fixture(autouse=True)
def clean_server_settings():
    """Reset server settings between tests."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def settings(clean_env):
    return ServerSettings()


@pytest.fixture
def app(service, settings):
    """Application serving the in-memory ``service`` fixture."""
    return create_app(service=service, settings=settings)


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def researcher_body():
    return {
        "name": "Ada Lovelace",
        "address": "10 Downing St",
        "email": "ada@example.com",
        "phone": "1234567890",
    }

"""Tests for reprofund.server.app and server configuration."""

from __future__ import annotations

from unittest.mock import patch

from starlette.testclient import TestClient

from reprofund.server.app import API_V1, build_routes, create_app, run
from reprofund.server.config import ServerSettings, get_settings


class TestServerSettings:
    def test_defaults(self, clean_env):
        settings = ServerSettings()
        assert settings.host == "127.0.0.1"
        assert settings.port == 8430
        assert settings.caller_header == "X-Caller-Id"
        assert settings.store_backend == "memory"

    def test_env_override(self, clean_env, monkeypatch):
        monkeypatch.setenv("REPROFUND_PORT", "9000")
        monkeypatch.setenv("REPROFUND_CALLER_HEADER", "X-Principal")
        settings = get_settings()
        assert settings.port == 9000
        assert settings.caller_header == "X-Principal"
        assert get_settings() is settings


class TestCreateApp:
    def test_routes_cover_every_operation(self):
        paths = {(route.path, method) for route in build_routes() for method in route.methods}
        expected = {
            (f"{API_V1}/researchers", "POST"),
            (f"{API_V1}/researchers", "GET"),
            (f"{API_V1}/researchers/me", "GET"),
            (f"{API_V1}/researchers/{{id}}", "GET"),
            (f"{API_V1}/researchers/{{id}}/proposals", "GET"),
            (f"{API_V1}/proposals", "POST"),
            (f"{API_V1}/proposals", "GET"),
            (f"{API_V1}/proposals/{{id}}", "GET"),
            (f"{API_V1}/proposals/{{id}}/fund", "POST"),
            (f"{API_V1}/proposals/{{id}}/reviews", "GET"),
            (f"{API_V1}/reviews", "POST"),
            (f"{API_V1}/reviews/{{id}}", "GET"),
            (f"{API_V1}/milestones", "POST"),
            (f"{API_V1}/milestones/{{id}}", "GET"),
            (f"{API_V1}/milestones/{{id}}/verify", "POST"),
            (f"{API_V1}/proofs", "POST"),
            (f"{API_V1}/proofs/{{id}}", "GET"),
            (f"{API_V1}/export", "GET"),
            (f"{API_V1}/health", "GET"),
        }
        assert expected <= paths

    def test_builds_service_from_settings(self, clean_env, tmp_path):
        settings = ServerSettings(store_backend="file", data_dir=tmp_path, anonymous_caller="guest")
        app = create_app(settings=settings)

        assert app.state.service.store.backend.backend_type == "file"
        assert app.state.service.anonymous_caller == "guest"

    def test_custom_caller_header(self, clean_env, service):
        app = create_app(service=service, settings=ServerSettings(caller_header="X-Principal"))
        client = TestClient(app)
        client.post(
            f"{API_V1}/researchers",
            json={"name": "Ada", "address": "10 Downing St", "email": "a@b.co", "phone": "1234567890"},
            headers={"X-Principal": "p-7"},
        )
        assert client.get(f"{API_V1}/researchers/me", headers={"X-Principal": "p-7"}).status_code == 200

    def test_lifespan_closes_backend(self, app, service):
        with patch.object(service.store.backend, "close") as mock_close:
            with TestClient(app):
                pass
        mock_close.assert_called_once()


class TestRun:
    def test_run_starts_uvicorn(self, clean_env):
        with patch("uvicorn.run") as mock_run, patch("reprofund.server.app.configure_logging"):
            run()
        kwargs = mock_run.call_args[1]
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 8430

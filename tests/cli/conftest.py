"""CLI test fixtures."""

from __future__ import annotations

import pytest

from reprofund.cli.config import CLIConfig, reset_cli_config, set_cli_config


@pytest.fixture(autouse=True)
def _cli_config():
    """Use a fixed CLI config for every test."""
    set_cli_config(CLIConfig(server_url="http://test:8430", caller="alice", output="json", timeout=5.0))
    yield
    reset_cli_config()

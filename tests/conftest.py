"""Global test fixtures for the reprofund test suite."""

from __future__ import annotations

import itertools
import os

import pytest

from reprofund.core.config import clear_config_cache
from reprofund.core.service import FundingService
from reprofund.storage.backend import LocalFileBackend, MemoryBackend
from reprofund.storage.store import Store

# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all REPROFUND_ environment variables."""
    for key in list(os.environ.keys()):
        if key.startswith("REPROFUND_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def reset_config():
    """Drop cached settings before and after every test."""
    clear_config_cache()
    yield
    clear_config_cache()


# ============================================================================
# Store Fixtures
# ============================================================================


@pytest.fixture
def clock():
    """Deterministic nanosecond clock: 1000, 1001, 1002, ..."""
    counter = itertools.count(1000)
    return lambda: next(counter)


@pytest.fixture
def memory_backend():
    return MemoryBackend()


@pytest.fixture
def store(memory_backend):
    """Empty in-memory store."""
    return Store(memory_backend)


@pytest.fixture
def file_store(tmp_path):
    """Empty store persisted under a temporary directory."""
    return Store(LocalFileBackend(tmp_path / "data"))


@pytest.fixture
def service(store, clock):
    """Funding service over an empty in-memory store."""
    return FundingService(store, clock=clock)


# ============================================================================
# Payload Factories
# ============================================================================


@pytest.fixture
def researcher_payload():
    """Factory for valid researcher payloads."""
    from reprofund.core.models import ResearcherPayload

    def _factory(
        name: str = "Ada Lovelace",
        address: str = "10 Downing St",
        email: str = "ada@example.com",
        phone: str = "1234567890",
    ) -> ResearcherPayload:
        return ResearcherPayload(name=name, address=address, email=email, phone=phone)

    return _factory


@pytest.fixture
def proposal_payload():
    """Factory for valid proposal payloads."""
    from reprofund.core.models import CreateProposalPayload

    def _factory(
        researcher_id: int = 1,
        title: str = "X",
        description: str = "Y",
        methodology: str = "Z",
        funding_target: int = 1000,
    ) -> CreateProposalPayload:
        return CreateProposalPayload(
            researcher_id=researcher_id,
            title=title,
            description=description,
            methodology=methodology,
            funding_target=funding_target,
        )

    return _factory

"""
Component Test Fixtures for Crowdfund Service

The FastAPI app runs against an in-memory ledger injected through
dependency_overrides; NATS and the wallet are mocked.
"""

import pytest
from fastapi.testclient import TestClient

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../../.."))

from microservices.crowdfund_service.main import app, get_ledger
from microservices.crowdfund_service.project_ledger import ProjectLedger
from tests.component.mocks import FakeClock


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def ledger(mock_event_bus, mock_transfer_client, clock) -> ProjectLedger:
    return ProjectLedger(
        event_bus=mock_event_bus,
        transfer_client=mock_transfer_client,
        clock=clock,
    )


@pytest.fixture
def client(ledger):
    """HTTP client bound to the test ledger"""
    app.dependency_overrides[get_ledger] = lambda: ledger
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def creator_headers():
    return {"X-User-ID": "usr_creator"}


@pytest.fixture
def alice_headers():
    return {"X-User-ID": "usr_alice"}

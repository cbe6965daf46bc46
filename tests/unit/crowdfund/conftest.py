"""
Unit Test Fixtures for Crowdfund Service

Provides a ledger wired to a fake clock, a mock transfer client and a mock
event bus. Principals used throughout: ``usr_creator`` owns the projects,
``usr_alice`` and ``usr_bob`` contribute.
"""

import pytest
import pytest_asyncio

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../../.."))

from microservices.crowdfund_service.models import DurationUnit, WithdrawalPolicy
from microservices.crowdfund_service.project_ledger import ProjectLedger
from tests.component.mocks import MockEventBus, MockTransferClient, FakeClock


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def mock_event_bus() -> MockEventBus:
    return MockEventBus()


@pytest.fixture
def mock_transfer_client() -> MockTransferClient:
    return MockTransferClient()


@pytest.fixture
def ledger(mock_event_bus, mock_transfer_client, clock) -> ProjectLedger:
    """Ledger with the single-withdrawal policy"""
    return ProjectLedger(
        event_bus=mock_event_bus,
        transfer_client=mock_transfer_client,
        clock=clock,
        duration_unit=DurationUnit.DAYS,
        withdrawal_policy=WithdrawalPolicy.SINGLE,
    )


@pytest.fixture
def repeatable_ledger(mock_event_bus, mock_transfer_client, clock) -> ProjectLedger:
    """Ledger that allows the same balance to be paid out repeatedly"""
    return ProjectLedger(
        event_bus=mock_event_bus,
        transfer_client=mock_transfer_client,
        clock=clock,
        withdrawal_policy=WithdrawalPolicy.REPEATABLE,
    )


@pytest.fixture
def create_project():
    """Factory creating a one-day project owned by usr_creator"""

    async def _create(ledger: ProjectLedger, goal_amount: int = 100, duration: int = 1,
                      creator: str = "usr_creator") -> int:
        return await ledger.create_project(
            title="Community Garden",
            description="Raised beds for the neighbourhood",
            goal_amount=goal_amount,
            duration=duration,
            creator=creator,
        )

    return _create


@pytest.fixture
def fund_project(create_project):
    """Factory creating a project and funding it 60/40 by alice and bob"""

    async def _fund(ledger: ProjectLedger, goal_amount: int = 100) -> int:
        project_id = await create_project(ledger, goal_amount=goal_amount)
        await ledger.contribute_to_project(project_id, 60, "usr_alice")
        await ledger.contribute_to_project(project_id, goal_amount - 60, "usr_bob")
        return project_id

    return _fund


@pytest_asyncio.fixture
async def project_id(ledger, create_project) -> int:
    """Open project with goal 100 and a one-day window"""
    return await create_project(ledger)


@pytest_asyncio.fixture
async def funded_project_id(ledger, fund_project, mock_event_bus) -> int:
    """Completed project holding 100; setup events are cleared"""
    project_id = await fund_project(ledger)
    mock_event_bus.clear()
    return project_id

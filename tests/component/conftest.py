"""
Component Test Layer Configuration

Structure:
    tests/component/
    ├── crowdfund/   FastAPI app, event publishers, wallet client
    └── mocks/       Mock implementations

Usage:
    pytest tests/component -v
    pytest tests/component/crowdfund -v
"""
import os
import sys

import pytest

# Set testing environment BEFORE any imports
os.environ["ENV"] = "testing"
os.environ["ENVIRONMENT"] = "testing"
os.environ["NATS_ENABLED"] = "false"

# Add project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

# Load test environment variables
from pathlib import Path
from dotenv import load_dotenv

project_root = Path(__file__).parent.parent.parent
test_env_file = project_root / "tests" / "config" / ".env.test"
if test_env_file.exists():
    load_dotenv(test_env_file, override=True)
    print(f"✅ Loaded test environment from {test_env_file}")

from tests.component.mocks import MockEventBus, MockTransferClient


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line(
        "markers", "component: marks tests as component tests"
    )


# =============================================================================
# Event Bus Mocks
# =============================================================================

@pytest.fixture
def mock_event_bus() -> MockEventBus:
    """Mock NATS event bus"""
    return MockEventBus()


# =============================================================================
# Service Client Mocks
# =============================================================================

@pytest.fixture
def mock_transfer_client() -> MockTransferClient:
    """Mock wallet transfer collaborator"""
    return MockTransferClient()

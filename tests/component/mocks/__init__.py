"""
Component Test Mocks

Shared mock implementations for unit and component testing.
These mocks replace real I/O dependencies (NATS, wallet transfers, wall clock).
"""

from .nats_mock import MockEventBus
from .transfer_mock import MockTransferClient, FakeClock

__all__ = [
    'MockEventBus',
    'MockTransferClient',
    'FakeClock',
]

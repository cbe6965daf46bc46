"""
Crowdfund Service Factory

Factory for creating ProjectLedger with real dependencies.
This is the ONLY module that imports concrete implementations.
"""

import logging
from typing import Optional

from core.config import CrowdfundConfig, get_settings

from .clients.wallet_client import WalletClient
from .project_ledger import ProjectLedger
from .protocols import ClockProtocol, TransferClientProtocol

logger = logging.getLogger(__name__)


def create_project_ledger(
    config: Optional[CrowdfundConfig] = None,
    event_bus=None,
    transfer_client: Optional[TransferClientProtocol] = None,
    clock: Optional[ClockProtocol] = None,
) -> ProjectLedger:
    """
    Create ProjectLedger with all real dependencies

    Args:
        config: Optional service config (process settings if not provided)
        event_bus: Optional event bus for event publishing
        transfer_client: Optional transfer collaborator (WalletClient if not provided)
        clock: Optional time source (wall clock if not provided)

    Returns:
        Fully initialized ProjectLedger instance
    """
    if config is None:
        config = get_settings()

    if transfer_client is None:
        transfer_client = WalletClient(
            base_url=config.wallet_service_url,
            timeout=config.wallet_timeout_seconds,
        )

    logger.info("ProjectLedger created with real dependencies")

    return ProjectLedger(
        event_bus=event_bus,
        transfer_client=transfer_client,
        clock=clock,
        duration_unit=config.duration_unit,
        withdrawal_policy=config.withdrawal_policy,
    )


__all__ = ["create_project_ledger"]

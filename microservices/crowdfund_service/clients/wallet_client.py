"""
Wallet Service Client for Crowdfund Service

HTTP client for paying out collected project funds through wallet_service
"""

import httpx
import logging
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_WALLET_URL = "http://localhost:8208"


class WalletClient:
    """Client for wallet_service implementing the transfer primitive"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Wallet Service client

        Args:
            base_url: Wallet service base URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.base_url = (base_url or DEFAULT_WALLET_URL).rstrip('/')
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport)
        logger.info(f"WalletClient initialized with base_url: {self.base_url}")

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def transfer(
        self,
        recipient_id: str,
        amount: int,
        reference_id: Optional[str] = None,
    ) -> bool:
        """
        Credit ``amount`` to the recipient's wallet

        Args:
            recipient_id: Principal receiving the funds
            amount: Amount in the smallest currency unit
            reference_id: Idempotency reference of the payout

        Returns:
            True if the wallet accepted the credit
        """
        try:
            payload = {
                "user_id": recipient_id,
                "amount": amount,
                "reason": "crowdfund_withdrawal",
                "transaction_id": reference_id,
            }

            response = await self.client.post(
                f"{self.base_url}/api/v1/wallet/credits/add",
                json=payload
            )
            response.raise_for_status()
            logger.info(f"✅ Credited {amount} to {recipient_id} [{reference_id}]")
            return True

        except httpx.HTTPStatusError as e:
            logger.error(f"❌ Failed to credit wallet: {e.response.status_code}")
            return False
        except httpx.HTTPError as e:
            logger.error(f"❌ Error crediting wallet: {e}")
            return False

    async def health_check(self) -> bool:
        """Check wallet_service availability"""
        try:
            response = await self.client.get(f"{self.base_url}/health")
            return response.status_code == 200
        except httpx.HTTPError:
            return False

"""
Crowdfund Service Clients Module

HTTP clients for synchronous communication with other services
"""

from .wallet_client import WalletClient

__all__ = [
    "WalletClient",
]

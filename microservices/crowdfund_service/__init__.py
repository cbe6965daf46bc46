"""
Crowdfund Service

Crowdfunding project ledger microservice providing:
- Project creation with a funding goal and contribution window
- Contribution tracking per project and per contributor
- One-time completion detection when a goal is met
- Creator payouts through wallet_service behind a reentrancy guard

Port: 8260
"""

__version__ = "1.0.0"
__service__ = "crowdfund_service"

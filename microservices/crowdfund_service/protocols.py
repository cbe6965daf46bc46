"""
Crowdfund Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from typing import Any, Optional, Protocol, runtime_checkable


# ============================================================================
# Custom Exceptions - defined here to avoid importing the ledger
# ============================================================================

class CrowdfundServiceError(Exception):
    """Base exception for crowdfund service errors"""

    def __init__(self, message: str, project_id: Optional[int] = None):
        super().__init__(message)
        self.project_id = project_id


class InvalidDurationError(CrowdfundServiceError):
    """Project duration must be positive"""
    pass


class InvalidGoalAmountError(CrowdfundServiceError):
    """Project goal amount must not be negative"""
    pass


class InvalidProjectIdError(CrowdfundServiceError):
    """Project ID outside the range of created projects"""
    pass


class AlreadyCompletedError(CrowdfundServiceError):
    """Project already reached its goal"""
    pass


class ZeroContributionError(CrowdfundServiceError):
    """Contribution amount must be positive"""
    pass


class ProjectExpiredError(CrowdfundServiceError):
    """Project contribution window has closed"""
    pass


class NotAuthorizedError(CrowdfundServiceError):
    """Caller is not the project creator"""
    pass


class NotCompletedYetError(CrowdfundServiceError):
    """Project has not reached its goal"""
    pass


class AlreadyWithdrawnError(CrowdfundServiceError):
    """Project funds were already paid out"""
    pass


class ReentrantCallError(CrowdfundServiceError):
    """Operation invoked while a withdrawal transfer is in progress"""
    pass


class TransferFailedError(CrowdfundServiceError):
    """Transfer collaborator reported failure"""
    pass


# ============================================================================
# Client Protocols
# ============================================================================

@runtime_checkable
class EventBusProtocol(Protocol):
    """Interface for Event Bus - no I/O imports"""

    async def publish_event(self, event: Any) -> bool:
        """Publish an event"""
        ...


@runtime_checkable
class TransferClientProtocol(Protocol):
    """Interface for the value transfer collaborator"""

    async def transfer(
        self,
        recipient_id: str,
        amount: int,
        reference_id: Optional[str] = None,
    ) -> bool:
        """Move ``amount`` to ``recipient_id``; True on success"""
        ...


@runtime_checkable
class ClockProtocol(Protocol):
    """Interface for the ledger time source"""

    def now(self) -> int:
        """Current time in whole seconds"""
        ...


# ============================================================================
# Exports
# ============================================================================

__all__ = [
    # Exceptions
    "CrowdfundServiceError",
    "InvalidDurationError",
    "InvalidGoalAmountError",
    "InvalidProjectIdError",
    "AlreadyCompletedError",
    "ZeroContributionError",
    "ProjectExpiredError",
    "NotAuthorizedError",
    "NotCompletedYetError",
    "AlreadyWithdrawnError",
    "ReentrantCallError",
    "TransferFailedError",
    # Protocols
    "EventBusProtocol",
    "TransferClientProtocol",
    "ClockProtocol",
]

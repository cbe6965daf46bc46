"""
Crowdfund Service Event Handling

Standard Structure:
- models.py: Event data models (Pydantic)
- publishers.py: Event publishers (publish events to other services)
"""

# Event Models
from .models import (
    ProjectCreatedEventData,
    ContributionReceivedEventData,
    ProjectCompletedEventData,
    FundsWithdrawnEventData,
)

# Event Publishers
from .publishers import CrowdfundEventPublisher

__all__ = [
    # Event Publishers
    "CrowdfundEventPublisher",
    # Event Models
    "ProjectCreatedEventData",
    "ContributionReceivedEventData",
    "ProjectCompletedEventData",
    "FundsWithdrawnEventData",
]

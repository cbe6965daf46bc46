"""
Crowdfund Event Publishers

Centralized event publishing for crowdfund service.
Publishing is fire-and-forget: failures are logged and reported as False,
never raised into the caller.
"""

import logging
from typing import Optional

from pydantic import BaseModel

from core.nats_client import Event, EventType, ServiceSource

from .models import (
    ProjectCreatedEventData,
    ContributionReceivedEventData,
    ProjectCompletedEventData,
    FundsWithdrawnEventData,
)

logger = logging.getLogger(__name__)


class CrowdfundEventPublisher:
    """Publisher for crowdfund service events"""

    def __init__(self, event_bus=None):
        self.event_bus = event_bus

    async def publish(self, event_type: EventType, data: BaseModel) -> bool:
        """
        Publish an event to the event bus.

        Args:
            event_type: The event type enum
            data: Event payload model

        Returns:
            True if published successfully, False otherwise
        """
        if not self.event_bus:
            logger.debug(f"Event bus not configured, skipping publish: {event_type.value}")
            return False

        try:
            event = Event(
                event_type=event_type,
                source=ServiceSource.CROWDFUND_SERVICE,
                data=data.model_dump(),
            )
            result = await self.event_bus.publish_event(event)

            if result is False:
                logger.error(f"❌ Failed to publish {event_type.value} event")
                return False

            logger.debug(f"Published event: {event_type.value}")
            return True

        except Exception as e:
            logger.error(f"Error publishing {event_type.value} event: {e}", exc_info=True)
            return False

    # ====================
    # Project Lifecycle Events
    # ====================

    async def publish_project_created(
        self,
        project_id: int,
        title: str,
        description: str,
        goal_amount: int,
        duration: int,
        creator: str,
    ) -> bool:
        """Publish crowdfund.project.created"""
        return await self.publish(
            EventType.PROJECT_CREATED,
            ProjectCreatedEventData(
                project_id=project_id,
                title=title,
                description=description,
                goal_amount=goal_amount,
                duration=duration,
                creator=creator,
            ),
        )

    async def publish_contribution_received(
        self,
        project_id: int,
        contributor: str,
        amount: int,
        payment_reference: Optional[str] = None,
    ) -> bool:
        """Publish crowdfund.contribution.received"""
        return await self.publish(
            EventType.CONTRIBUTION_RECEIVED,
            ContributionReceivedEventData(
                project_id=project_id,
                contributor=contributor,
                amount=amount,
                payment_reference=payment_reference,
            ),
        )

    async def publish_project_completed(self, project_id: int, current_amount: int) -> bool:
        """Publish crowdfund.project.completed"""
        return await self.publish(
            EventType.PROJECT_COMPLETED,
            ProjectCompletedEventData(project_id=project_id, current_amount=current_amount),
        )

    async def publish_funds_withdrawn(
        self,
        project_id: int,
        creator: str,
        amount: int,
        reference_id: Optional[str] = None,
    ) -> bool:
        """Publish crowdfund.funds.withdrawn"""
        return await self.publish(
            EventType.FUNDS_WITHDRAWN,
            FundsWithdrawnEventData(
                project_id=project_id,
                creator=creator,
                amount=amount,
                reference_id=reference_id or "",
            ),
        )

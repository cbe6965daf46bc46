"""
Crowdfund Event Data Models

Payloads of the notifications published by crowdfund_service.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ProjectCreatedEventData(BaseModel):
    """
    Project created

    NATS Subject: crowdfund.project.created
    """

    project_id: int = Field(..., description="Project ID")
    title: str = Field(..., description="Project title")
    description: str = Field("", description="Project description")
    goal_amount: int = Field(..., description="Funding goal")
    duration: int = Field(..., description="Contribution window in seconds")
    creator: str = Field(..., description="Creator principal")


class ContributionReceivedEventData(BaseModel):
    """
    Contribution accepted

    NATS Subject: crowdfund.contribution.received
    """

    project_id: int = Field(..., description="Project ID")
    contributor: str = Field(..., description="Contributing principal")
    amount: int = Field(..., description="Contributed amount")
    payment_reference: Optional[str] = Field(None, description="Reference of the settled inbound transfer")


class ProjectCompletedEventData(BaseModel):
    """
    Project reached its goal (published once per project)

    NATS Subject: crowdfund.project.completed
    """

    project_id: int = Field(..., description="Project ID")
    current_amount: int = Field(..., description="Balance when the goal was met")


class FundsWithdrawnEventData(BaseModel):
    """
    Collected funds paid out to the creator

    NATS Subject: crowdfund.funds.withdrawn
    """

    project_id: int = Field(..., description="Project ID")
    creator: str = Field(..., description="Recipient principal")
    amount: int = Field(..., description="Amount transferred")
    reference_id: str = Field(..., description="Transfer reference")

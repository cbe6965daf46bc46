"""
Crowdfund Service Data Models

Pydantic models for projects, contributions and withdrawals.
Amounts are integers in the smallest indivisible currency unit; times and
durations are integers in the ledger's base unit (seconds).
"""

from enum import Enum
from typing import Optional, Dict, List
from pydantic import BaseModel, ConfigDict, Field


# ====================
# Enum Types
# ====================

class DurationUnit(str, Enum):
    """Units a caller may express a project duration in"""
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"
    WEEKS = "weeks"


class WithdrawalPolicy(str, Enum):
    """How repeated withdrawals of a completed project are treated"""
    SINGLE = "single"  # payout recorded, second withdrawal rejected
    REPEATABLE = "repeatable"  # legacy: same balance may be paid out again


# ====================
# Core Data Models
# ====================

class Project(BaseModel):
    """Crowdfunding project record"""
    project_id: int = Field(..., gt=0, description="Sequential project ID")
    title: str
    description: str = ""

    # Funding
    goal_amount: int = Field(..., ge=0)
    current_amount: int = Field(default=0, ge=0)

    # Contribution window (seconds)
    duration: int = Field(..., gt=0)
    start_time: int = Field(..., ge=0)

    creator: str = Field(..., description="Principal allowed to withdraw")
    completed: bool = False
    contributors: List[str] = Field(default_factory=list)

    # Payout bookkeeping
    withdrawn: bool = False
    withdrawn_amount: int = Field(default=0, ge=0)

    @property
    def deadline(self) -> int:
        """Last instant (inclusive) at which contributions are accepted"""
        return self.start_time + self.duration


class ProjectDetails(BaseModel):
    """Read-only snapshot of a project's public details"""
    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    goal_amount: int
    current_amount: int
    duration: int
    creator: str
    completed: bool

    @classmethod
    def from_project(cls, project: Project) -> "ProjectDetails":
        return cls(
            title=project.title,
            description=project.description,
            goal_amount=project.goal_amount,
            current_amount=project.current_amount,
            duration=project.duration,
            creator=project.creator,
            completed=project.completed,
        )


# ====================
# Request Models
# ====================

class ProjectCreateRequest(BaseModel):
    """Create a crowdfunding project"""
    title: str
    description: str = ""
    goal_amount: int
    duration: int = Field(..., description="Contribution window in duration_unit")
    duration_unit: Optional[DurationUnit] = None


class ContributionRequest(BaseModel):
    """Record a settled contribution to a project"""
    amount: int = Field(..., description="Settled value of the inbound transfer")
    payment_reference: Optional[str] = None


# ====================
# Response Models
# ====================

class ProjectCreatedResponse(BaseModel):
    """Project creation result"""
    project_id: int
    message: str = "Project created successfully"


class ContributionResponse(BaseModel):
    """Contribution result"""
    project_id: int
    contributor: str
    amount: int
    current_amount: int
    goal_met: bool
    completed: bool


class WithdrawalResponse(BaseModel):
    """Withdrawal result"""
    project_id: int
    creator: str
    amount: int
    withdrawn_amount: int
    reference_id: str


class ContributorsResponse(BaseModel):
    """Ordered contributor list of a project"""
    project_id: int
    contributors: List[str]
    count: int


class ContributionTotalResponse(BaseModel):
    """Cumulative contribution of a principal across all projects"""
    principal: str
    total_contributed: int


class ProjectSummary(BaseModel):
    """Project listing entry"""
    project_id: int
    title: str
    goal_amount: int
    current_amount: int
    deadline: int
    creator: str
    completed: bool
    contributor_count: int

    @classmethod
    def from_project(cls, project: Project) -> "ProjectSummary":
        return cls(
            project_id=project.project_id,
            title=project.title,
            goal_amount=project.goal_amount,
            current_amount=project.current_amount,
            deadline=project.deadline,
            creator=project.creator,
            completed=project.completed,
            contributor_count=len(project.contributors),
        )


class ProjectListResponse(BaseModel):
    """Paged project listing"""
    projects: List[ProjectSummary]
    total: int
    limit: int
    offset: int


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    service: str
    port: int
    version: str
    dependencies: Dict[str, str] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Error payload"""
    detail: str
    error: str

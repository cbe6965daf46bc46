"""
Project Ledger Business Logic

Tracks crowdfunding projects, the contributions made against them, one-time
completion detection and the guarded payout of collected funds.

All state-changing operations run under a single asyncio lock, so they never
interleave. The withdrawal transfer step is additionally wrapped in a
reentrancy guard that fails fast instead of waiting.
"""

import asyncio
import logging
import time
import uuid
from contextlib import contextmanager
from typing import Dict, List, Optional, Tuple, Union

from .durations import to_base_units
from .events.publishers import CrowdfundEventPublisher
from .models import (
    DurationUnit,
    WithdrawalPolicy,
    Project,
    ProjectDetails,
    ContributionResponse,
    WithdrawalResponse,
)
from .protocols import (
    EventBusProtocol,
    TransferClientProtocol,
    ClockProtocol,
    CrowdfundServiceError,
    InvalidDurationError,
    InvalidGoalAmountError,
    InvalidProjectIdError,
    AlreadyCompletedError,
    ZeroContributionError,
    ProjectExpiredError,
    NotAuthorizedError,
    NotCompletedYetError,
    AlreadyWithdrawnError,
    ReentrantCallError,
    TransferFailedError,
)

logger = logging.getLogger(__name__)


class SystemClock:
    """Wall clock in whole seconds since the epoch"""

    def now(self) -> int:
        return int(time.time())


class ProjectLedger:
    """Crowdfunding ledger owning projects, contribution totals and the payout lock"""

    def __init__(
        self,
        event_bus: Optional[EventBusProtocol] = None,
        transfer_client: Optional[TransferClientProtocol] = None,
        clock: Optional[ClockProtocol] = None,
        duration_unit: Union[DurationUnit, str] = DurationUnit.DAYS,
        withdrawal_policy: Union[WithdrawalPolicy, str] = WithdrawalPolicy.SINGLE,
    ):
        """
        Initialize the ledger with injected dependencies

        Args:
            event_bus: Optional event bus for notifications
            transfer_client: Collaborator that moves funds to the creator
            clock: Time source; wall clock when omitted
            duration_unit: Default unit of caller supplied durations
            withdrawal_policy: Whether a completed project pays out once or repeatedly
        """
        self.event_bus = event_bus
        self.transfer_client = transfer_client
        self.clock = clock or SystemClock()
        self.duration_unit = DurationUnit(duration_unit)
        self.withdrawal_policy = WithdrawalPolicy(withdrawal_policy)
        self.publisher = CrowdfundEventPublisher(event_bus)

        self._projects: Dict[int, Project] = {}
        self._contributions: Dict[str, int] = {}
        self._completed_flags: Dict[int, bool] = {}
        self._total_projects = 0
        self._locked = False
        self._transfer_task: Optional[asyncio.Task] = None
        self._mutex = asyncio.Lock()

        logger.info(
            f"ProjectLedger initialized (duration_unit={self.duration_unit.value}, "
            f"withdrawal_policy={self.withdrawal_policy.value})"
        )

    @property
    def total_projects(self) -> int:
        return self._total_projects

    @property
    def is_locked(self) -> bool:
        return self._locked

    # ====================
    # Create
    # ====================

    async def create_project(
        self,
        title: str,
        description: str,
        goal_amount: int,
        duration: int,
        creator: str,
        duration_unit: Optional[Union[DurationUnit, str]] = None,
    ) -> int:
        """
        Create a project and return its sequential ID

        ``duration`` is expressed in ``duration_unit`` (ledger default when
        omitted) and stored in seconds.
        """
        self._ensure_not_reentrant("create_project")

        unit = DurationUnit(duration_unit) if duration_unit else self.duration_unit
        if duration <= 0:
            raise self._reject(InvalidDurationError(f"Duration must be positive, got {duration}"))
        base_duration = to_base_units(duration, unit)
        if base_duration <= 0:
            raise self._reject(InvalidDurationError(
                f"Duration {duration} {unit.value} is shorter than one second"
            ))
        if goal_amount < 0:
            raise self._reject(InvalidGoalAmountError(f"Goal amount must not be negative, got {goal_amount}"))

        async with self._mutex:
            start_time = self.clock.now()
            self._total_projects += 1
            project_id = self._total_projects

            project = Project(
                project_id=project_id,
                title=title,
                description=description,
                goal_amount=goal_amount,
                current_amount=0,
                duration=base_duration,
                start_time=start_time,
                creator=creator,
            )
            self._projects[project_id] = project

            logger.info(
                f"Project created: {project_id} by {creator}, goal {goal_amount}, "
                f"deadline {project.deadline}"
            )

            await self.publisher.publish_project_created(
                project_id=project_id,
                title=title,
                description=description,
                goal_amount=goal_amount,
                duration=base_duration,
                creator=creator,
            )

        return project_id

    # ====================
    # Contribute
    # ====================

    async def contribute_to_project(
        self,
        project_id: int,
        amount: int,
        contributor: str,
        payment_reference: Optional[str] = None,
    ) -> ContributionResponse:
        """
        Record a contribution of ``amount`` from ``contributor``

        ``payment_reference`` identifies the settled inbound transfer and is
        carried into the contribution notification.

        Every precondition is checked before the first mutation, so a rejected
        contribution leaves no trace.
        """
        self._ensure_not_reentrant("contribute_to_project")

        async with self._mutex:
            now = self.clock.now()
            project = self._require_project(project_id)

            if project.completed:
                raise self._reject(AlreadyCompletedError(
                    f"Project {project_id} already completed", project_id
                ))
            if amount <= 0:
                raise self._reject(ZeroContributionError(
                    f"Contribution amount must be positive, got {amount}", project_id
                ))
            if now > project.deadline:
                raise self._reject(ProjectExpiredError(
                    f"Project {project_id} expired at {project.deadline}", project_id
                ))

            self._contributions[contributor] = self._contributions.get(contributor, 0) + amount
            project.contributors.append(contributor)
            project.current_amount += amount

            goal_met = await self._check_if_project_completed(project)

            logger.info(
                f"Contribution to project {project_id}: {amount} from {contributor}, "
                f"balance {project.current_amount}/{project.goal_amount}"
            )

            await self.publisher.publish_contribution_received(
                project_id=project_id,
                contributor=contributor,
                amount=amount,
                payment_reference=payment_reference,
            )

            return ContributionResponse(
                project_id=project_id,
                contributor=contributor,
                amount=amount,
                current_amount=project.current_amount,
                goal_met=goal_met,
                completed=project.completed,
            )

    async def _check_if_project_completed(self, project: Project) -> bool:
        """
        Flip the project to completed the first time its goal is met

        Returns whether the goal is currently met. The completion flag table
        guards the notification, so it is published at most once per project.
        """
        goal_met = project.current_amount >= project.goal_amount
        if goal_met and not self._completed_flags.get(project.project_id, False):
            project.completed = True
            self._completed_flags[project.project_id] = True

            logger.info(f"Project {project.project_id} completed with {project.current_amount}")

            await self.publisher.publish_project_completed(
                project_id=project.project_id,
                current_amount=project.current_amount,
            )
        return goal_met

    # ====================
    # Withdraw
    # ====================

    async def withdraw_funds(self, project_id: int, caller: str) -> WithdrawalResponse:
        """
        Pay the collected balance of a completed project to its creator

        Fails fast with ReentrantCallError while another payout's transfer
        step is running. A failed transfer records nothing, so the payout can
        be retried.
        """
        self._ensure_not_reentrant("withdraw_funds")
        if self._locked:
            raise self._reject(ReentrantCallError(
                "Withdrawal already in progress", project_id
            ))

        async with self._mutex:
            project = self._projects.get(project_id)

            # Unknown projects have no creator to match
            if project is None or project.creator != caller:
                raise self._reject(NotAuthorizedError(
                    f"{caller} is not the creator of project {project_id}", project_id
                ))
            if not project.completed:
                raise self._reject(NotCompletedYetError(
                    f"Project {project_id} has not reached its goal", project_id
                ))
            if self.withdrawal_policy == WithdrawalPolicy.SINGLE and project.withdrawn:
                raise self._reject(AlreadyWithdrawnError(
                    f"Project {project_id} funds already withdrawn", project_id
                ))

            amount = project.current_amount
            reference_id = f"cfw_{project_id}_{uuid.uuid4().hex[:12]}"

            with self._reentrancy_guard(project_id):
                await self._transfer(project, amount, reference_id)

            project.withdrawn = True
            project.withdrawn_amount += amount

            logger.info(f"Withdrawal from project {project_id}: {amount} to {caller} [{reference_id}]")

            await self.publisher.publish_funds_withdrawn(
                project_id=project_id,
                creator=caller,
                amount=amount,
                reference_id=reference_id,
            )

            return WithdrawalResponse(
                project_id=project_id,
                creator=caller,
                amount=amount,
                withdrawn_amount=project.withdrawn_amount,
                reference_id=reference_id,
            )

    @contextmanager
    def _reentrancy_guard(self, project_id: int):
        """Hold the payout lock for the transfer step; released on every exit path"""
        if self._locked:
            raise self._reject(ReentrantCallError("Withdrawal already in progress", project_id))
        self._locked = True
        self._transfer_task = asyncio.current_task()
        try:
            yield
        finally:
            self._transfer_task = None
            self._locked = False

    async def _transfer(self, project: Project, amount: int, reference_id: str) -> None:
        if self.transfer_client is None:
            raise self._reject(TransferFailedError(
                "No transfer client configured", project.project_id
            ))

        try:
            success = await self.transfer_client.transfer(
                recipient_id=project.creator,
                amount=amount,
                reference_id=reference_id,
            )
        except Exception as e:
            logger.error(f"Transfer for project {project.project_id} raised: {e}")
            raise TransferFailedError(
                f"Transfer of {amount} to {project.creator} failed: {e}", project.project_id
            ) from e

        if not success:
            raise self._reject(TransferFailedError(
                f"Transfer of {amount} to {project.creator} failed", project.project_id
            ))

    # ====================
    # Read Accessors
    # ====================

    async def get_project_contributors(self, project_id: int) -> List[str]:
        """Ordered contributor list; empty for unknown projects"""
        project = self._projects.get(project_id)
        if project is None:
            return []
        return list(project.contributors)

    async def get_project_details(self, project_id: int) -> ProjectDetails:
        """Read-only snapshot of a project's public details"""
        return ProjectDetails.from_project(self._require_project(project_id))

    async def get_project(self, project_id: int) -> Project:
        """Full copy of a project record"""
        return self._require_project(project_id).model_copy(deep=True)

    async def list_projects(self, limit: int = 50, offset: int = 0) -> Tuple[List[Project], int]:
        """Project copies in ID order with the total count"""
        ids = sorted(self._projects)[offset:offset + limit]
        return [self._projects[i].model_copy(deep=True) for i in ids], self._total_projects

    async def get_contribution_total(self, principal: str) -> int:
        """Cumulative amount contributed by ``principal`` across all projects"""
        return self._contributions.get(principal, 0)

    # ====================
    # Helpers
    # ====================

    def _require_project(self, project_id: int) -> Project:
        if not 0 < project_id <= self._total_projects:
            raise self._reject(InvalidProjectIdError(f"Invalid project ID: {project_id}", project_id))
        return self._projects[project_id]

    def _ensure_not_reentrant(self, operation: str) -> None:
        # Tasks spawned during the transfer are not the transfer itself
        if self._locked and asyncio.current_task() is self._transfer_task:
            raise self._reject(ReentrantCallError(
                f"{operation} called during a withdrawal transfer"
            ))

    @staticmethod
    def _reject(error: CrowdfundServiceError) -> CrowdfundServiceError:
        logger.warning(f"{type(error).__name__}: {error}")
        return error


__all__ = ["ProjectLedger", "SystemClock"]

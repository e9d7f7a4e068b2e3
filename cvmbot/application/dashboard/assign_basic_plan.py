"""
Use case: Assign the basic subscription plan to a client.

Input: user_id
Output: bool. True when the assignment was written.
Side effects: Inserts an active user_plans row that expires after the
    basic plan's duration.
Failure cases: UserNotFoundError. A missing basic plan or a storage
    failure is reported as False.
"""

import logging
from datetime import timedelta
from uuid import UUID, uuid4

from sqlalchemy.exc import SQLAlchemyError

from cvmbot.domain.dashboard.activation import Clock, utc_now
from cvmbot.domain.dashboard.entities import UserPlan
from cvmbot.domain.dashboard.errors import UserNotFoundError
from cvmbot.domain.dashboard.ports import PlanRepository, UserRepository

logger = logging.getLogger(__name__)


class AssignBasicPlanUseCase:
    """Gives a newly approved client the entry-level plan."""

    def __init__(
        self,
        plan_repo: PlanRepository,
        user_repo: UserRepository,
        basic_plan_name: str,
        clock: Clock = utc_now,
    ) -> None:
        self._plan_repo = plan_repo
        self._user_repo = user_repo
        self._basic_plan_name = basic_plan_name
        self._clock = clock

    def execute(self, user_id: UUID) -> bool:
        """Run the assign-basic-plan use case.

        Raises:
            UserNotFoundError: If the user does not exist.
        """
        try:
            if not self._user_repo.exists(user_id):
                raise UserNotFoundError(str(user_id))

            plan = self._plan_repo.get_plan_by_name(self._basic_plan_name)
            if plan is None:
                logger.warning(
                    "Basic plan %r is not configured; user=%s left without plan.",
                    self._basic_plan_name,
                    user_id,
                )
                return False

            now = self._clock()
            self._plan_repo.assign_plan(
                UserPlan(
                    id=uuid4(),
                    user_id=user_id,
                    plan_id=plan.id,
                    activated_at=now,
                    expires_at=now + timedelta(days=plan.duration_days),
                    is_active=True,
                )
            )
        except SQLAlchemyError:
            logger.exception("Failed to assign basic plan to user=%s", user_id)
            return False

        logger.info("Assigned plan %s to user=%s", plan.name, user_id)
        return True

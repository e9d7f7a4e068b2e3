"""
Use case: Apply a partial update to a subscription plan.

Input: UpdatePlanCommand (plan_id, changed fields)
Output: bool. True when the change was written.
Side effects: Updates the plan row and its updated_at.
Failure cases: PlanNotFoundError. Storage failures are reported as False.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from cvmbot.application.dashboard.dtos import UpdatePlanCommand
from cvmbot.domain.dashboard.activation import Clock, utc_now
from cvmbot.domain.dashboard.errors import PlanNotFoundError
from cvmbot.domain.dashboard.ports import PlanRepository

logger = logging.getLogger(__name__)


class UpdatePlanUseCase:
    def __init__(self, plan_repo: PlanRepository, clock: Clock = utc_now) -> None:
        self._plan_repo = plan_repo
        self._clock = clock

    def execute(self, command: UpdatePlanCommand) -> bool:
        """Run the update-plan use case.

        An empty change set only touches updated_at.

        Raises:
            PlanNotFoundError: If no plan has this ID.
        """
        logger.info(
            "Updating plan=%s fields=%s", command.plan_id, sorted(command.changes)
        )
        try:
            matched = self._plan_repo.update_plan(
                command.plan_id, dict(command.changes), self._clock()
            )
        except SQLAlchemyError:
            logger.exception("Failed to update plan=%s", command.plan_id)
            return False

        if not matched:
            raise PlanNotFoundError(str(command.plan_id))
        return True

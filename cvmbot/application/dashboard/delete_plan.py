"""
Use case: Delete a subscription plan.

Input: plan_id
Output: bool. True when the plan was removed.
Side effects: Deletes the subscription_plans row.
Failure cases: PlanNotFoundError. Storage failures (for example a plan
    still assigned to a client) are reported as False.
"""

import logging
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from cvmbot.domain.dashboard.errors import PlanNotFoundError
from cvmbot.domain.dashboard.ports import PlanRepository

logger = logging.getLogger(__name__)


class DeletePlanUseCase:
    def __init__(self, plan_repo: PlanRepository) -> None:
        self._plan_repo = plan_repo

    def execute(self, plan_id: UUID) -> bool:
        logger.info("Deleting plan=%s", plan_id)
        try:
            matched = self._plan_repo.delete_plan(plan_id)
        except SQLAlchemyError:
            logger.exception("Failed to delete plan=%s", plan_id)
            return False

        if not matched:
            raise PlanNotFoundError(str(plan_id))
        return True

"""
Use case: Read the plan assigned to a client.

Input: user_id
Output: UserPlanResult, or None when the client has no plan.
Side effects: None (read-only query).
Failure cases: None. A failing store yields None.
"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from cvmbot.application.dashboard.dtos import UserPlanResult
from cvmbot.application.dashboard.mappers import plan_to_result
from cvmbot.domain.dashboard.ports import PlanRepository

logger = logging.getLogger(__name__)


class GetUserPlanUseCase:
    def __init__(self, plan_repo: PlanRepository) -> None:
        self._plan_repo = plan_repo

    def execute(self, user_id: UUID) -> Optional[UserPlanResult]:
        try:
            user_plan = self._plan_repo.get_user_plan(user_id)
        except SQLAlchemyError:
            logger.warning("Plan lookup failed for user=%s", user_id, exc_info=True)
            return None

        if user_plan is None:
            return None
        return UserPlanResult(
            user_id=user_plan.user_id,
            plan_id=user_plan.plan_id,
            activated_at=user_plan.activated_at,
            expires_at=user_plan.expires_at,
            is_active=user_plan.is_active,
            plan=plan_to_result(user_plan.plan) if user_plan.plan else None,
        )

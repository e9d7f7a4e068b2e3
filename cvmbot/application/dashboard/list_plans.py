"""
Use case: List subscription plans.

Input: active_only flag
Output: list[PlanResult] ordered by display order.
Side effects: None (read-only query).
Failure cases: None. A failing store yields an empty list.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from cvmbot.application.dashboard.dtos import PlanResult
from cvmbot.application.dashboard.mappers import plan_to_result
from cvmbot.domain.dashboard.ports import PlanRepository

logger = logging.getLogger(__name__)


class ListPlansUseCase:
    def __init__(self, plan_repo: PlanRepository) -> None:
        self._plan_repo = plan_repo

    def execute(self, active_only: bool = True) -> list[PlanResult]:
        """Return the plan catalog.

        Args:
            active_only: Clients only see active plans; operators see all.
        """
        try:
            plans = self._plan_repo.list_plans(active_only=active_only)
        except SQLAlchemyError:
            logger.warning("Plan catalog could not be loaded.", exc_info=True)
            return []
        return [plan_to_result(p) for p in plans]

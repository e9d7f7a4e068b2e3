"""
Use case: Create a subscription plan.

Input: CreatePlanCommand
Output: PlanResult, or None when the store rejected the insert.
Side effects: Inserts a subscription_plans row.
Failure cases: ValueError for a non-positive duration or a negative price.
"""

import logging
from typing import Optional
from uuid import uuid4

from sqlalchemy.exc import SQLAlchemyError

from cvmbot.application.dashboard.dtos import CreatePlanCommand, PlanResult
from cvmbot.application.dashboard.mappers import plan_to_result
from cvmbot.domain.dashboard.activation import Clock, utc_now
from cvmbot.domain.dashboard.entities import SubscriptionPlan
from cvmbot.domain.dashboard.ports import PlanRepository

logger = logging.getLogger(__name__)


class CreatePlanUseCase:
    def __init__(self, plan_repo: PlanRepository, clock: Clock = utc_now) -> None:
        self._plan_repo = plan_repo
        self._clock = clock

    def execute(self, command: CreatePlanCommand) -> Optional[PlanResult]:
        if command.duration_days < 1:
            raise ValueError("Plan duration must be at least one day")
        if command.price < 0:
            raise ValueError("Plan price cannot be negative")

        now = self._clock()
        plan = SubscriptionPlan(
            id=uuid4(),
            name=command.name,
            description=command.description,
            price=command.price,
            duration_days=command.duration_days,
            features=list(command.features),
            is_active=True,
            display_order=command.display_order,
            created_by=command.created_by,
            created_at=now,
            updated_at=now,
        )
        logger.info("Creating plan name=%s by operator=%s", plan.name, plan.created_by)
        try:
            self._plan_repo.create_plan(plan)
        except SQLAlchemyError:
            logger.exception("Failed to create plan name=%s", plan.name)
            return None
        return plan_to_result(plan)

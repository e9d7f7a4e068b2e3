"""
Entity-to-DTO mapping shared by several dashboard use cases.
"""

from datetime import datetime

from cvmbot.application.dashboard.dtos import BotActivationResult, PlanResult
from cvmbot.domain.dashboard.activation import days_remaining
from cvmbot.domain.dashboard.entities import BotActivation, SubscriptionPlan


def activation_to_result(activation: BotActivation, now: datetime) -> BotActivationResult:
    """Map an activation record, deriving its countdown at ``now``."""
    return BotActivationResult(
        user_id=activation.user_id,
        is_active=activation.is_active,
        activated_at=activation.activated_at,
        days_remaining=days_remaining(activation, now),
        total_duration_days=activation.total_duration_days,
        paused_days_remaining=activation.paused_days_remaining,
        last_pause_date=activation.last_pause_date,
    )


def plan_to_result(plan: SubscriptionPlan) -> PlanResult:
    return PlanResult(
        id=plan.id,
        name=plan.name,
        description=plan.description,
        price=plan.price,
        duration_days=plan.duration_days,
        features=list(plan.features),
        is_active=plan.is_active,
        display_order=plan.display_order,
    )

"""
Bot activation countdown.

Pure functions that decide how a user's activation record changes when an
operator switches the bot on or off, and how many entitlement days are
left at a given moment. No IO: the current time is passed in by the
caller, usually from an injected ``Clock``.

Lifecycle of a record::

    (none) --activate--> active --deactivate--> paused (days banked)
                            ^                        |
                            +------activate----------+  (banked days resume)
"""

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional
from uuid import UUID

from cvmbot.domain.dashboard.entities import BotActivation, ResumePolicy
from cvmbot.domain.dashboard.errors import InvalidActivationDaysError

DEFAULT_DURATION_DAYS = 30
ONE_DAY = timedelta(days=1)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default clock: timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


def default_activation(
    user_id: UUID, total_duration_days: int = DEFAULT_DURATION_DAYS
) -> BotActivation:
    """Record reported for a user the operator has never activated."""
    return BotActivation(user_id=user_id, total_duration_days=total_duration_days)


def validate_days(days: Optional[int]) -> None:
    """Reject day counts that are not positive integers.

    Raises:
        InvalidActivationDaysError: If ``days`` is given and below 1.
    """
    if days is None:
        return
    if isinstance(days, bool) or not isinstance(days, int) or days < 1:
        raise InvalidActivationDaysError(days)


def days_elapsed(activated_at: datetime, now: datetime) -> int:
    """Whole days between activation and ``now``; partial days do not count."""
    return max(0, (now - activated_at) // ONE_DAY)


def days_remaining(activation: BotActivation, now: datetime) -> int:
    """Days left on the countdown, never negative.

    While active the value is computed from ``activated_at``; while paused
    it is whatever was banked at the last deactivation.
    """
    if activation.is_active and activation.activated_at is not None:
        elapsed = days_elapsed(activation.activated_at, now)
        return max(0, activation.total_duration_days - elapsed)
    return activation.paused_days_remaining or 0


def merge_activation(
    existing: Optional[BotActivation],
    *,
    user_id: UUID,
    activate: bool,
    now: datetime,
    days: Optional[int] = None,
    policy: ResumePolicy = ResumePolicy.BANKED_FIRST,
    default_days: int = DEFAULT_DURATION_DAYS,
) -> BotActivation:
    """Return the record that results from an operator's on/off action.

    Args:
        existing: The stored record, or None if the user has none yet.
        user_id: Subject user.
        activate: True to switch the bot on, False to pause it.
        now: Current time.
        days: Day count typed by the operator. Ignored on deactivation.
        policy: Whether banked days or ``days`` win on reactivation.
        default_days: Entitlement of a user with no stored record.
            A stored record keeps its previous total when neither banked
            days nor ``days`` are available.

    Returns:
        The new record to persist.

    Raises:
        InvalidActivationDaysError: If ``days`` is not a positive integer.
    """
    if activate:
        validate_days(days)
        base = existing or default_activation(user_id, default_days)
        banked = base.paused_days_remaining
        if banked is not None and banked <= 0:
            banked = None

        if policy is ResumePolicy.EXPLICIT_FIRST:
            total = days or banked or base.total_duration_days
        else:
            total = banked or days or base.total_duration_days

        return replace(
            base,
            is_active=True,
            activated_at=now,
            total_duration_days=total,
            paused_days_remaining=None,
            updated_at=now,
        )

    if existing is None:
        return replace(default_activation(user_id, default_days), updated_at=now)

    if not existing.is_active or existing.activated_at is None:
        return replace(existing, is_active=False, updated_at=now)

    remaining = days_remaining(existing, now)
    return replace(
        existing,
        is_active=False,
        activated_at=None,
        paused_days_remaining=remaining,
        last_pause_date=now,
        updated_at=now,
    )

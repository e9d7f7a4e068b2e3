"""
Data Transfer Objects for the dashboard application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional
from uuid import UUID


@dataclass(frozen=True)
class SetBotActivationCommand:
    """Input DTO for an operator switching a user's bot on or off.

    Attributes:
        user_id: Subject user.
        activate: True to activate, False to pause.
        days: Entitlement typed by the operator. Ignored when pausing.
    """

    user_id: UUID
    activate: bool
    days: Optional[int] = None


@dataclass(frozen=True)
class BotActivationResult:
    """Output DTO for a user's activation state.

    Attributes:
        user_id: Subject user.
        is_active: Whether the bot is currently running for the user.
        activated_at: Start of the current active period, if any.
        days_remaining: Derived countdown, never negative.
        total_duration_days: Entitlement of the current or last period.
        paused_days_remaining: Days banked at the last pause, if any.
        last_pause_date: Time of the last pause, if any.
    """

    user_id: UUID
    is_active: bool
    activated_at: Optional[datetime]
    days_remaining: int
    total_duration_days: int
    paused_days_remaining: Optional[int]
    last_pause_date: Optional[datetime]


@dataclass(frozen=True)
class ClientActivationResult:
    """Output DTO for one row of the operator's activation roster."""

    id: UUID
    email: str
    nombre: str
    apellido: str
    nick_telegram: str
    is_active: bool
    days_remaining: int
    activated_at: Optional[datetime]


@dataclass(frozen=True)
class InvestCapitalCommand:
    """Input DTO for a client placing capital on an exchange."""

    user_id: UUID
    exchange: str
    amount: Decimal


@dataclass(frozen=True)
class CapitalSummaryResult:
    """Output DTO for a client's capital, earnings and balance.

    Attributes:
        user_id: Client.
        exchange: Exchange the capital sits on, or None.
        is_connected: Whether that exchange is connected.
        capital_amount: Invested capital, zero when none.
        total_earnings: Sum of bot earnings.
        balance: Capital plus earnings.
    """

    user_id: UUID
    exchange: Optional[str]
    is_connected: bool
    capital_amount: Decimal
    total_earnings: Decimal
    balance: Decimal


@dataclass(frozen=True)
class EarningResult:
    id: UUID
    amount: Decimal
    created_at: datetime


@dataclass(frozen=True)
class ExchangeClientResult:
    id: UUID
    nombre: str
    apellido: str
    nick_telegram: str
    exchange: str
    capital_amount: Decimal


@dataclass(frozen=True)
class CreatePlanCommand:
    """Input DTO for an operator creating a subscription plan."""

    name: str
    description: str
    price: Decimal
    duration_days: int
    created_by: UUID
    features: list[str] = field(default_factory=list)
    display_order: int = 0


@dataclass(frozen=True)
class UpdatePlanCommand:
    """Input DTO for a partial plan update.

    Attributes:
        plan_id: Plan to modify.
        changes: Only the fields the operator actually changed.
    """

    plan_id: UUID
    changes: dict[str, Any]


@dataclass(frozen=True)
class PlanResult:
    id: UUID
    name: str
    description: str
    price: Decimal
    duration_days: int
    features: list[str]
    is_active: bool
    display_order: int


@dataclass(frozen=True)
class UserPlanResult:
    """Output DTO for the plan assigned to a client."""

    user_id: UUID
    plan_id: UUID
    activated_at: datetime
    expires_at: Optional[datetime]
    is_active: bool
    plan: Optional[PlanResult]


@dataclass(frozen=True)
class SetFeatureFlagCommand:
    """Input DTO for an operator flipping a system flag."""

    key: str
    value: bool
    operator_id: UUID

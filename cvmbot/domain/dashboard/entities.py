"""
Domain entities for the dashboard bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID


class Exchange(Enum):
    """External exchange a client's capital is tied to."""

    BINANCE = "binance"
    BLOFIN = "blofin"
    BYBIT = "bybit"


class ApprovalStatus(Enum):
    """Operator review state of a registered user."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ResumePolicy(Enum):
    """Which day count wins when a paused bot is reactivated.

    BANKED_FIRST resumes with the banked days even if the operator typed a
    new day count. EXPLICIT_FIRST honours the operator's day count and only
    falls back to the banked days when none was given.
    """

    BANKED_FIRST = "banked_first"
    EXPLICIT_FIRST = "explicit_first"


@dataclass(frozen=True)
class BotActivation:
    """Per-user bot activation record.

    ``days_remaining`` is not part of the record; it is derived from
    ``activated_at`` and ``total_duration_days`` at read time.
    """

    user_id: UUID
    is_active: bool = False
    activated_at: Optional[datetime] = None
    total_duration_days: int = 30
    paused_days_remaining: Optional[int] = None
    last_pause_date: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    id: Optional[UUID] = None


@dataclass(frozen=True)
class ClientSummary:
    """An approved, non-operator user as listed on the operator panel."""

    id: UUID
    email: str
    nombre: str
    apellido: str
    nick_telegram: str
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class UserCapital:
    """Capital a client has invested through one exchange."""

    id: UUID
    user_id: UUID
    exchange: Exchange
    capital_amount: Decimal
    is_connected: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class BotEarning:
    """A single earnings entry credited by the trading bot."""

    id: UUID
    user_id: UUID
    amount: Decimal
    created_at: datetime


@dataclass(frozen=True)
class ExchangeClient:
    """A client with connected capital, as grouped by exchange."""

    id: UUID
    nombre: str
    apellido: str
    nick_telegram: str
    exchange: Exchange
    capital_amount: Decimal


@dataclass
class SubscriptionPlan:
    """A subscription plan offered to clients."""

    id: UUID
    name: str
    description: str
    price: Decimal
    duration_days: int
    features: list[str] = field(default_factory=list)
    is_active: bool = True
    display_order: int = 0
    created_by: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class UserPlan:
    """The plan currently assigned to a client."""

    id: UUID
    user_id: UUID
    plan_id: UUID
    activated_at: datetime
    expires_at: Optional[datetime]
    is_active: bool
    plan: Optional[SubscriptionPlan] = None

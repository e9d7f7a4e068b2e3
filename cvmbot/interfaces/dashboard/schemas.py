"""
Pydantic schemas for dashboard API request/response validation.

These schemas enforce input validation and define the API contract.
No business logic belongs here.
"""

from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

ExchangeName = Literal["binance", "blofin", "bybit"]

MAX_ACTIVATION_DAYS = 3650


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    version: str


class SuccessResponse(BaseModel):
    """Outcome of a write operation. False means the store rejected it."""

    success: bool


# ── Bot activation ───────────────────────────────────────────────


class SetActivationRequest(BaseModel):
    """Request schema for the operator's activate / pause action.

    Attributes:
        activate: True to switch the bot on, False to pause it.
        days: Entitlement in days. Optional; ignored when pausing.
    """

    activate: bool
    days: Optional[int] = Field(default=None, description="Activation length in days")

    @model_validator(mode="after")
    def check_days_when_activating(self) -> "SetActivationRequest":
        if self.activate and self.days is not None:
            if not 1 <= self.days <= MAX_ACTIVATION_DAYS:
                raise ValueError(
                    f"days must be between 1 and {MAX_ACTIVATION_DAYS} when activating"
                )
        return self


class ActivationResponse(BaseModel):
    user_id: UUID
    is_active: bool
    activated_at: Optional[datetime]
    days_remaining: int
    total_duration_days: int
    paused_days_remaining: Optional[int]
    last_pause_date: Optional[datetime]


class ClientActivationItem(BaseModel):
    id: UUID
    email: str
    nombre: str
    apellido: str
    nick_telegram: str
    is_active: bool
    days_remaining: int
    activated_at: Optional[datetime]


class ClientRosterResponse(BaseModel):
    clients: list[ClientActivationItem]


# ── Capital and earnings ─────────────────────────────────────────


class InvestCapitalRequest(BaseModel):
    """Request schema for placing capital on an exchange."""

    exchange: ExchangeName
    amount: Decimal = Field(..., gt=0, max_digits=14, decimal_places=2)


class CapitalSummaryResponse(BaseModel):
    user_id: UUID
    exchange: Optional[str]
    is_connected: bool
    capital_amount: Decimal
    total_earnings: Decimal
    balance: Decimal


class EarningItem(BaseModel):
    id: UUID
    amount: Decimal
    created_at: datetime


class EarningsResponse(BaseModel):
    earnings: list[EarningItem]


class ExchangeClientItem(BaseModel):
    id: UUID
    nombre: str
    apellido: str
    nick_telegram: str
    exchange: ExchangeName
    capital_amount: Decimal


class ExchangeRosterResponse(BaseModel):
    binance: list[ExchangeClientItem]
    blofin: list[ExchangeClientItem]
    bybit: list[ExchangeClientItem]


# ── Subscription plans ───────────────────────────────────────────


class PlanItem(BaseModel):
    id: UUID
    name: str
    description: str
    price: Decimal
    duration_days: int
    features: list[str]
    is_active: bool
    display_order: int


class PlansResponse(BaseModel):
    plans: list[PlanItem]


class CreatePlanRequest(BaseModel):
    """Request schema for an operator creating a plan."""

    name: str = Field(..., min_length=1, max_length=120)
    description: str = Field(default="", max_length=2000)
    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    duration_days: int = Field(..., ge=1, le=MAX_ACTIVATION_DAYS)
    features: list[str] = Field(default_factory=list)
    display_order: int = 0
    created_by: UUID


class CreatePlanResponse(BaseModel):
    success: bool
    plan: Optional[PlanItem] = None


class UpdatePlanRequest(BaseModel):
    """Partial update; omitted fields are left untouched."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    description: Optional[str] = Field(default=None, max_length=2000)
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    duration_days: Optional[int] = Field(default=None, ge=1, le=MAX_ACTIVATION_DAYS)
    features: Optional[list[str]] = None
    is_active: Optional[bool] = None
    display_order: Optional[int] = None


class UserPlanItem(BaseModel):
    plan_id: UUID
    activated_at: datetime
    expires_at: Optional[datetime]
    is_active: bool
    plan: Optional[PlanItem]


class UserPlanResponse(BaseModel):
    user_id: UUID
    user_plan: Optional[UserPlanItem]


# ── System flags ─────────────────────────────────────────────────

FLAG_KEY_PATTERN = r"^[a-z][a-z0-9_]{0,79}$"


class FeatureFlagResponse(BaseModel):
    key: str
    value: bool


class SetFeatureFlagRequest(BaseModel):
    value: bool
    operator_id: UUID

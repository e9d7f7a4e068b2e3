"""
Port interfaces (ABCs) for the dashboard bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Optional
from uuid import UUID

from cvmbot.domain.dashboard.entities import (
    BotActivation,
    BotEarning,
    ClientSummary,
    Exchange,
    ExchangeClient,
    SubscriptionPlan,
    UserCapital,
    UserPlan,
)

ActivationMerge = Callable[[Optional[BotActivation]], BotActivation]


class BotActivationRepository(ABC):
    """Port for the per-user bot activation records."""

    @abstractmethod
    def get(self, user_id: UUID) -> Optional[BotActivation]:
        """Return the stored record for a user, or None."""
        raise NotImplementedError

    @abstractmethod
    def get_many(self, user_ids: list[UUID]) -> dict[UUID, BotActivation]:
        """Return stored records for several users, keyed by user ID."""
        raise NotImplementedError

    @abstractmethod
    def upsert(self, user_id: UUID, merge: ActivationMerge) -> BotActivation:
        """Load the user's record, apply ``merge`` and write the result.

        The row is updated when it exists and inserted otherwise, within a
        single transaction. ``merge`` receives None for a missing row.

        Returns:
            The record as written.
        """
        raise NotImplementedError


class UserRepository(ABC):
    """Port for the read and cleanup operations on users."""

    @abstractmethod
    def exists(self, user_id: UUID) -> bool:
        """Return True if a user with this ID exists."""
        raise NotImplementedError

    @abstractmethod
    def list_approved_clients(self) -> list[ClientSummary]:
        """Return approved, non-operator users, newest first."""
        raise NotImplementedError

    @abstractmethod
    def delete_cascade(self, user_id: UUID) -> bool:
        """Delete a user together with every row that references it.

        Returns:
            True if the user row was removed.
        """
        raise NotImplementedError


class CapitalRepository(ABC):
    """Port for client capital and bot earnings."""

    @abstractmethod
    def get_capital(self, user_id: UUID) -> Optional[UserCapital]:
        """Return the client's invested capital, or None."""
        raise NotImplementedError

    @abstractmethod
    def add_capital(
        self, user_id: UUID, exchange: Exchange, amount: Decimal, now: datetime
    ) -> UserCapital:
        """Record a new, connected capital placement."""
        raise NotImplementedError

    @abstractmethod
    def remove_capital(self, user_id: UUID) -> int:
        """Delete the client's capital rows. Returns rows removed."""
        raise NotImplementedError

    @abstractmethod
    def list_earnings(self, user_id: UUID) -> list[BotEarning]:
        """Return the client's earnings entries, newest first."""
        raise NotImplementedError

    @abstractmethod
    def total_earnings(self, user_id: UUID) -> Decimal:
        """Return the sum of the client's earnings."""
        raise NotImplementedError

    @abstractmethod
    def list_connected_clients(self) -> list[ExchangeClient]:
        """Return approved clients with connected capital on any exchange."""
        raise NotImplementedError


class PlanRepository(ABC):
    """Port for subscription plans and plan assignments."""

    @abstractmethod
    def list_plans(self, active_only: bool = False) -> list[SubscriptionPlan]:
        """Return plans ordered by display order."""
        raise NotImplementedError

    @abstractmethod
    def get_plan(self, plan_id: UUID) -> Optional[SubscriptionPlan]:
        """Return a plan by ID, or None."""
        raise NotImplementedError

    @abstractmethod
    def get_plan_by_name(self, name: str) -> Optional[SubscriptionPlan]:
        """Return a plan by its display name, or None."""
        raise NotImplementedError

    @abstractmethod
    def create_plan(self, plan: SubscriptionPlan) -> None:
        """Persist a new plan."""
        raise NotImplementedError

    @abstractmethod
    def update_plan(
        self, plan_id: UUID, changes: dict[str, Any], now: datetime
    ) -> bool:
        """Apply field changes to a plan. Returns True if a row matched."""
        raise NotImplementedError

    @abstractmethod
    def delete_plan(self, plan_id: UUID) -> bool:
        """Delete a plan. Returns True if a row matched."""
        raise NotImplementedError

    @abstractmethod
    def get_user_plan(self, user_id: UUID) -> Optional[UserPlan]:
        """Return the client's assigned plan with the plan joined, or None."""
        raise NotImplementedError

    @abstractmethod
    def assign_plan(self, user_plan: UserPlan) -> None:
        """Persist a plan assignment."""
        raise NotImplementedError


class SystemConfigRepository(ABC):
    """Port for operator-controlled boolean feature flags."""

    @abstractmethod
    def get_flag(self, key: str) -> Optional[bool]:
        """Return the flag value, or None if the key is unknown."""
        raise NotImplementedError

    @abstractmethod
    def set_flag(
        self, key: str, value: bool, operator_id: UUID, now: datetime
    ) -> bool:
        """Update a flag. Returns True if the key exists."""
        raise NotImplementedError

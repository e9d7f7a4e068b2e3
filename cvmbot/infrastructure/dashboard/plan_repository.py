"""
Adapter: Subscription plan repository.

Implements PlanRepository port over subscription_plans and user_plans.
Plan features are stored as a JSON array in a text column.
"""

import json
import logging
from datetime import datetime
from typing import Any, Mapping, Optional
from uuid import UUID

from sqlalchemy import text
from sqlalchemy.engine import Engine

from cvmbot.domain.dashboard.entities import SubscriptionPlan, UserPlan
from cvmbot.domain.dashboard.ports import PlanRepository
from cvmbot.infrastructure.dashboard.rows import (
    from_db_time,
    to_db_time,
    to_decimal,
    to_features,
    to_uuid,
)

logger = logging.getLogger(__name__)

UPDATABLE_PLAN_FIELDS = frozenset(
    {
        "name",
        "description",
        "price",
        "duration_days",
        "features",
        "is_active",
        "display_order",
    }
)

_PLAN_COLUMNS = """
    id, name, description, price, duration_days, features, is_active,
    display_order, created_by, created_at, updated_at
"""


def _row_to_plan(row: Mapping[str, Any], prefix: str = "") -> SubscriptionPlan:
    return SubscriptionPlan(
        id=to_uuid(row[f"{prefix}id"]),
        name=row[f"{prefix}name"],
        description=row[f"{prefix}description"] or "",
        price=to_decimal(row[f"{prefix}price"]),
        duration_days=row[f"{prefix}duration_days"],
        features=to_features(row[f"{prefix}features"]),
        is_active=bool(row[f"{prefix}is_active"]),
        display_order=row[f"{prefix}display_order"],
        created_by=to_uuid(row[f"{prefix}created_by"]),
        created_at=from_db_time(row[f"{prefix}created_at"]),
        updated_at=from_db_time(row[f"{prefix}updated_at"]),
    )


def _bind_value(field: str, value: Any) -> Any:
    if field == "price":
        return float(value)
    if field == "features":
        return json.dumps(list(value))
    return value


class PlanRepositoryAdapter(PlanRepository):
    """SQL implementation of the subscription plan repository."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def list_plans(self, active_only: bool = False) -> list[SubscriptionPlan]:
        """Return plans ordered by display order.

        Args:
            active_only: Only return plans offered to clients.
        """
        query = f"SELECT {_PLAN_COLUMNS} FROM subscription_plans"
        params: dict[str, Any] = {}
        if active_only:
            query += " WHERE is_active = :is_active"
            params["is_active"] = True
        query += " ORDER BY display_order ASC"

        with self._engine.connect() as conn:
            rows = conn.execute(text(query), params).mappings().all()
        return [_row_to_plan(row) for row in rows]

    def get_plan(self, plan_id: UUID) -> Optional[SubscriptionPlan]:
        with self._engine.connect() as conn:
            row = conn.execute(
                text(f"SELECT {_PLAN_COLUMNS} FROM subscription_plans WHERE id = :id"),
                {"id": str(plan_id)},
            ).mappings().first()
        return _row_to_plan(row) if row else None

    def get_plan_by_name(self, name: str) -> Optional[SubscriptionPlan]:
        with self._engine.connect() as conn:
            row = conn.execute(
                text(
                    f"SELECT {_PLAN_COLUMNS} FROM subscription_plans WHERE name = :name"
                ),
                {"name": name},
            ).mappings().first()
        return _row_to_plan(row) if row else None

    def create_plan(self, plan: SubscriptionPlan) -> None:
        """Insert a new plan row."""
        with self._engine.begin() as conn:
            conn.execute(
                text(
                    """
                    INSERT INTO subscription_plans
                        (id, name, description, price, duration_days, features,
                         is_active, display_order, created_by, created_at,
                         updated_at)
                    VALUES
                        (:id, :name, :description, :price, :duration_days,
                         :features, :is_active, :display_order, :created_by,
                         :created_at, :updated_at)
                    """
                ),
                {
                    "id": str(plan.id),
                    "name": plan.name,
                    "description": plan.description,
                    "price": float(plan.price),
                    "duration_days": plan.duration_days,
                    "features": json.dumps(plan.features),
                    "is_active": plan.is_active,
                    "display_order": plan.display_order,
                    "created_by": str(plan.created_by) if plan.created_by else None,
                    "created_at": to_db_time(plan.created_at),
                    "updated_at": to_db_time(plan.updated_at),
                },
            )
        logger.debug("Created plan id=%s name=%s.", plan.id, plan.name)

    def update_plan(
        self, plan_id: UUID, changes: dict[str, Any], now: datetime
    ) -> bool:
        """Apply whitelisted field changes to a plan.

        Args:
            plan_id: Plan to update.
            changes: Mapping of column name to new value. Unknown
                columns are rejected.
            now: Value written to updated_at.

        Returns:
            True if a plan row matched.

        Raises:
            ValueError: If ``changes`` names a column that cannot be updated.
        """
        unknown = set(changes) - UPDATABLE_PLAN_FIELDS
        if unknown:
            raise ValueError(f"Cannot update plan fields: {sorted(unknown)}")

        fields = sorted(changes)
        assignments = [f"{field} = :{field}" for field in fields]
        assignments.append("updated_at = :updated_at")
        params = {field: _bind_value(field, changes[field]) for field in fields}
        params.update({"updated_at": to_db_time(now), "id": str(plan_id)})

        with self._engine.begin() as conn:
            matched = conn.execute(
                text(
                    f"UPDATE subscription_plans SET {', '.join(assignments)} "
                    "WHERE id = :id"
                ),
                params,
            ).rowcount
        return matched > 0

    def delete_plan(self, plan_id: UUID) -> bool:
        with self._engine.begin() as conn:
            matched = conn.execute(
                text("DELETE FROM subscription_plans WHERE id = :id"),
                {"id": str(plan_id)},
            ).rowcount
        return matched > 0

    def get_user_plan(self, user_id: UUID) -> Optional[UserPlan]:
        """Return the client's plan assignment with the plan row joined."""
        query = text(
            """
            SELECT up.id AS up_id, up.user_id AS up_user_id,
                   up.plan_id AS up_plan_id, up.activated_at AS up_activated_at,
                   up.expires_at AS up_expires_at, up.is_active AS up_is_active,
                   p.id AS p_id, p.name AS p_name,
                   p.description AS p_description, p.price AS p_price,
                   p.duration_days AS p_duration_days, p.features AS p_features,
                   p.is_active AS p_is_active, p.display_order AS p_display_order,
                   p.created_by AS p_created_by, p.created_at AS p_created_at,
                   p.updated_at AS p_updated_at
            FROM user_plans up
            LEFT JOIN subscription_plans p ON p.id = up.plan_id
            WHERE up.user_id = :user_id
            """
        )
        with self._engine.connect() as conn:
            row = conn.execute(query, {"user_id": str(user_id)}).mappings().first()

        if row is None:
            return None
        plan = _row_to_plan(row, prefix="p_") if row["p_id"] is not None else None
        return UserPlan(
            id=to_uuid(row["up_id"]),
            user_id=to_uuid(row["up_user_id"]),
            plan_id=to_uuid(row["up_plan_id"]),
            activated_at=from_db_time(row["up_activated_at"]),
            expires_at=from_db_time(row["up_expires_at"]),
            is_active=bool(row["up_is_active"]),
            plan=plan,
        )

    def assign_plan(self, user_plan: UserPlan) -> None:
        with self._engine.begin() as conn:
            conn.execute(
                text(
                    """
                    INSERT INTO user_plans
                        (id, user_id, plan_id, activated_at, expires_at, is_active)
                    VALUES
                        (:id, :user_id, :plan_id, :activated_at, :expires_at,
                         :is_active)
                    """
                ),
                {
                    "id": str(user_plan.id),
                    "user_id": str(user_plan.user_id),
                    "plan_id": str(user_plan.plan_id),
                    "activated_at": to_db_time(user_plan.activated_at),
                    "expires_at": to_db_time(user_plan.expires_at),
                    "is_active": user_plan.is_active,
                },
            )

"""
Adapter: Bot activation repository.

Implements BotActivationRepository port against the bot_activation table.
The countdown itself is never stored; it is derived on read from
activated_at and total_duration_days.
"""

import logging
from dataclasses import replace
from typing import Any, Mapping, Optional
from uuid import UUID, uuid4

from sqlalchemy import bindparam, text
from sqlalchemy.engine import Connection, Engine

from cvmbot.domain.dashboard.activation import DEFAULT_DURATION_DAYS
from cvmbot.domain.dashboard.entities import BotActivation
from cvmbot.domain.dashboard.ports import ActivationMerge, BotActivationRepository
from cvmbot.infrastructure.dashboard.rows import from_db_time, to_db_time, to_uuid

logger = logging.getLogger(__name__)

_COLUMNS = """
    id, user_id, is_active, activated_at, total_duration_days,
    paused_days_remaining, last_pause_date, updated_at
"""


def _row_to_activation(row: Mapping[str, Any]) -> BotActivation:
    return BotActivation(
        id=to_uuid(row["id"]),
        user_id=to_uuid(row["user_id"]),
        is_active=bool(row["is_active"]),
        activated_at=from_db_time(row["activated_at"]),
        total_duration_days=row["total_duration_days"] or DEFAULT_DURATION_DAYS,
        paused_days_remaining=row["paused_days_remaining"],
        last_pause_date=from_db_time(row["last_pause_date"]),
        updated_at=from_db_time(row["updated_at"]),
    )


def _with_id(activation: BotActivation, row_id: Optional[UUID]) -> BotActivation:
    return replace(activation, id=row_id)


def _params(activation: BotActivation) -> dict[str, Any]:
    return {
        "id": str(activation.id),
        "user_id": str(activation.user_id),
        "is_active": activation.is_active,
        "activated_at": to_db_time(activation.activated_at),
        "total_duration_days": activation.total_duration_days,
        "paused_days_remaining": activation.paused_days_remaining,
        "last_pause_date": to_db_time(activation.last_pause_date),
        "updated_at": to_db_time(activation.updated_at),
    }


class BotActivationRepositoryAdapter(BotActivationRepository):
    """SQL implementation of the bot activation repository."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def _select_one(
        self, conn: Connection, user_id: UUID
    ) -> Optional[BotActivation]:
        row = conn.execute(
            text(f"SELECT {_COLUMNS} FROM bot_activation WHERE user_id = :user_id"),
            {"user_id": str(user_id)},
        ).mappings().first()
        return _row_to_activation(row) if row else None

    def get(self, user_id: UUID) -> Optional[BotActivation]:
        """Return the stored record for a user, or None.

        Args:
            user_id: Subject user.

        Returns:
            BotActivation entity or None.
        """
        with self._engine.connect() as conn:
            return self._select_one(conn, user_id)

    def get_many(self, user_ids: list[UUID]) -> dict[UUID, BotActivation]:
        """Return stored records for several users in one query."""
        if not user_ids:
            return {}

        query = text(
            f"SELECT {_COLUMNS} FROM bot_activation WHERE user_id IN :user_ids"
        ).bindparams(bindparam("user_ids", expanding=True))

        with self._engine.connect() as conn:
            rows = conn.execute(
                query, {"user_ids": [str(u) for u in user_ids]}
            ).mappings().all()

        activations = [_row_to_activation(row) for row in rows]
        return {a.user_id: a for a in activations}

    def upsert(self, user_id: UUID, merge: ActivationMerge) -> BotActivation:
        """Read, merge and write a user's record in a single transaction.

        Args:
            user_id: Subject user.
            merge: Pure function computing the new record from the stored one.

        Returns:
            The record as written.
        """
        with self._engine.begin() as conn:
            existing = self._select_one(conn, user_id)
            merged = merge(existing)

            if existing is not None:
                merged = _with_id(merged, existing.id)
                conn.execute(
                    text(
                        """
                        UPDATE bot_activation
                        SET is_active = :is_active,
                            activated_at = :activated_at,
                            total_duration_days = :total_duration_days,
                            paused_days_remaining = :paused_days_remaining,
                            last_pause_date = :last_pause_date,
                            updated_at = :updated_at
                        WHERE user_id = :user_id
                        """
                    ),
                    _params(merged),
                )
            else:
                merged = _with_id(merged, merged.id or uuid4())
                conn.execute(
                    text(
                        """
                        INSERT INTO bot_activation
                            (id, user_id, is_active, activated_at,
                             total_duration_days, paused_days_remaining,
                             last_pause_date, updated_at)
                        VALUES
                            (:id, :user_id, :is_active, :activated_at,
                             :total_duration_days, :paused_days_remaining,
                             :last_pause_date, :updated_at)
                        """
                    ),
                    _params(merged),
                )

        logger.debug(
            "Upserted bot_activation user_id=%s is_active=%s.",
            user_id,
            merged.is_active,
        )
        return merged
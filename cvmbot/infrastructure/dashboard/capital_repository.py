"""
Adapter: Capital repository.

Implements CapitalRepository port over the user_capital and
bot_earnings tables.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import text
from sqlalchemy.engine import Engine

from cvmbot.domain.dashboard.entities import (
    ApprovalStatus,
    BotEarning,
    Exchange,
    ExchangeClient,
    UserCapital,
)
from cvmbot.domain.dashboard.ports import CapitalRepository
from cvmbot.infrastructure.dashboard.rows import (
    from_db_time,
    to_db_time,
    to_decimal,
    to_uuid,
)

logger = logging.getLogger(__name__)


class CapitalRepositoryAdapter(CapitalRepository):
    """SQL implementation of the capital and earnings repository."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_capital(self, user_id: UUID) -> Optional[UserCapital]:
        """Return the client's capital placement, or None."""
        query = text(
            """
            SELECT id, user_id, exchange, capital_amount, is_connected,
                   created_at, updated_at
            FROM user_capital
            WHERE user_id = :user_id
            """
        )
        with self._engine.connect() as conn:
            row = conn.execute(query, {"user_id": str(user_id)}).mappings().first()

        if row is None:
            return None
        return UserCapital(
            id=to_uuid(row["id"]),
            user_id=to_uuid(row["user_id"]),
            exchange=Exchange(row["exchange"]),
            capital_amount=to_decimal(row["capital_amount"]),
            is_connected=bool(row["is_connected"]),
            created_at=from_db_time(row["created_at"]),
            updated_at=from_db_time(row["updated_at"]),
        )

    def add_capital(
        self, user_id: UUID, exchange: Exchange, amount: Decimal, now: datetime
    ) -> UserCapital:
        """Insert a connected capital placement for the client."""
        capital = UserCapital(
            id=uuid4(),
            user_id=user_id,
            exchange=exchange,
            capital_amount=amount,
            is_connected=True,
            created_at=now,
            updated_at=now,
        )
        with self._engine.begin() as conn:
            conn.execute(
                text(
                    """
                    INSERT INTO user_capital
                        (id, user_id, exchange, capital_amount, is_connected,
                         created_at, updated_at)
                    VALUES
                        (:id, :user_id, :exchange, :amount, :is_connected,
                         :created_at, :updated_at)
                    """
                ),
                {
                    "id": str(capital.id),
                    "user_id": str(user_id),
                    "exchange": exchange.value,
                    "amount": float(amount),
                    "is_connected": True,
                    "created_at": to_db_time(now),
                    "updated_at": to_db_time(now),
                },
            )
        return capital

    def remove_capital(self, user_id: UUID) -> int:
        with self._engine.begin() as conn:
            removed = conn.execute(
                text("DELETE FROM user_capital WHERE user_id = :user_id"),
                {"user_id": str(user_id)},
            ).rowcount
        return removed

    def list_earnings(self, user_id: UUID) -> list[BotEarning]:
        """Return earnings entries for the client, newest first."""
        query = text(
            """
            SELECT id, user_id, amount, created_at
            FROM bot_earnings
            WHERE user_id = :user_id
            ORDER BY created_at DESC
            """
        )
        with self._engine.connect() as conn:
            rows = conn.execute(query, {"user_id": str(user_id)}).mappings().all()

        return [
            BotEarning(
                id=to_uuid(row["id"]),
                user_id=to_uuid(row["user_id"]),
                amount=to_decimal(row["amount"]),
                created_at=from_db_time(row["created_at"]),
            )
            for row in rows
        ]

    def total_earnings(self, user_id: UUID) -> Decimal:
        with self._engine.connect() as conn:
            total = conn.execute(
                text(
                    "SELECT COALESCE(SUM(amount), 0) FROM bot_earnings "
                    "WHERE user_id = :user_id"
                ),
                {"user_id": str(user_id)},
            ).scalar()
        return to_decimal(total)

    def list_connected_clients(self) -> list[ExchangeClient]:
        """Return approved clients whose capital is connected to an exchange."""
        query = text(
            """
            SELECT u.id, u.nombre, u.apellido, u.nick_telegram,
                   c.exchange, c.capital_amount
            FROM user_capital c
            JOIN users u ON u.id = c.user_id
            WHERE u.approval_status = :status
              AND u.is_operator = :is_operator
              AND c.is_connected = :is_connected
            ORDER BY c.created_at
            """
        )
        with self._engine.connect() as conn:
            rows = conn.execute(
                query,
                {
                    "status": ApprovalStatus.APPROVED.value,
                    "is_operator": False,
                    "is_connected": True,
                },
            ).mappings().all()

        clients = []
        for row in rows:
            try:
                exchange = Exchange(row["exchange"])
            except ValueError:
                logger.warning("Skipping capital on unknown exchange %r.", row["exchange"])
                continue
            clients.append(
                ExchangeClient(
                    id=to_uuid(row["id"]),
                    nombre=row["nombre"],
                    apellido=row["apellido"],
                    nick_telegram=row["nick_telegram"],
                    exchange=exchange,
                    capital_amount=to_decimal(row["capital_amount"]),
                )
            )
        return clients

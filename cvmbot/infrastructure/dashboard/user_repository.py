"""
Adapter: User repository.

Implements UserRepository port.
Covers only what the operator panel needs: existence checks, the
approved client roster and full deletion of a user's data.
"""

import logging
from uuid import UUID

from sqlalchemy import text
from sqlalchemy.engine import Engine

from cvmbot.domain.dashboard.entities import ApprovalStatus, ClientSummary
from cvmbot.domain.dashboard.ports import UserRepository
from cvmbot.infrastructure.dashboard.rows import from_db_time, to_uuid
from cvmbot.infrastructure.dashboard.schema import USER_OWNED_TABLES

logger = logging.getLogger(__name__)


class UserRepositoryAdapter(UserRepository):
    """SQL implementation of the user repository."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def exists(self, user_id: UUID) -> bool:
        with self._engine.connect() as conn:
            row = conn.execute(
                text("SELECT 1 FROM users WHERE id = :id"),
                {"id": str(user_id)},
            ).first()
        return row is not None

    def list_approved_clients(self) -> list[ClientSummary]:
        """Return approved, non-operator users ordered newest first."""
        query = text(
            """
            SELECT id, email, nombre, apellido, nick_telegram, created_at
            FROM users
            WHERE is_operator = :is_operator
              AND approval_status = :status
            ORDER BY created_at DESC
            """
        )
        with self._engine.connect() as conn:
            rows = conn.execute(
                query,
                {"is_operator": False, "status": ApprovalStatus.APPROVED.value},
            ).mappings().all()

        return [
            ClientSummary(
                id=to_uuid(row["id"]),
                email=row["email"],
                nombre=row["nombre"],
                apellido=row["apellido"],
                nick_telegram=row["nick_telegram"],
                created_at=from_db_time(row["created_at"]),
            )
            for row in rows
        ]

    def delete_cascade(self, user_id: UUID) -> bool:
        """Delete a user and all rows it owns in one transaction.

        Args:
            user_id: User to remove.

        Returns:
            True if the user row was removed.
        """
        params = {"user_id": str(user_id)}
        with self._engine.begin() as conn:
            for table in USER_OWNED_TABLES:
                conn.execute(
                    text(f"DELETE FROM {table} WHERE user_id = :user_id"), params
                )
            removed = conn.execute(
                text("DELETE FROM users WHERE id = :user_id"), params
            ).rowcount

        logger.info("Deleted user_id=%s (removed=%s).", user_id, removed > 0)
        return removed > 0

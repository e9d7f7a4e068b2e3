"""
Adapter: System configuration repository.

Implements SystemConfigRepository port over the system_config table,
which holds operator-controlled boolean flags such as ``plans_enabled``.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import text
from sqlalchemy.engine import Engine

from cvmbot.domain.dashboard.ports import SystemConfigRepository
from cvmbot.infrastructure.dashboard.rows import to_db_time


class SystemConfigRepositoryAdapter(SystemConfigRepository):
    """SQL implementation of the feature flag repository."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_flag(self, key: str) -> Optional[bool]:
        with self._engine.connect() as conn:
            value = conn.execute(
                text("SELECT value FROM system_config WHERE key = :key"),
                {"key": key},
            ).scalar()
        return None if value is None else bool(value)

    def set_flag(
        self, key: str, value: bool, operator_id: UUID, now: datetime
    ) -> bool:
        """Update an existing flag and record who changed it.

        Returns:
            True if the key exists.
        """
        with self._engine.begin() as conn:
            matched = conn.execute(
                text(
                    """
                    UPDATE system_config
                    SET value = :value, updated_by = :updated_by,
                        updated_at = :updated_at
                    WHERE key = :key
                    """
                ),
                {
                    "key": key,
                    "value": value,
                    "updated_by": str(operator_id),
                    "updated_at": to_db_time(now),
                },
            ).rowcount
        return matched > 0

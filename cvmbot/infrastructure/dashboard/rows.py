"""
Column value conversion shared by the dashboard repositories.

The same SQL runs on PostgreSQL (psycopg2 returns native datetimes,
Decimals and booleans) and on SQLite (ISO strings, floats and 0/1).
These helpers normalise both to domain types.
"""

import json
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional
from uuid import UUID


def to_db_time(value: Optional[datetime]) -> Optional[str]:
    """Serialise an aware datetime as ISO-8601 for binding."""
    if value is None:
        return None
    return value.isoformat()


def from_db_time(value: Any) -> Optional[datetime]:
    """Parse a stored timestamp; naive values are taken as UTC."""
    if value is None:
        return None
    if not isinstance(value, datetime):
        value = datetime.fromisoformat(str(value))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def to_uuid(value: Any) -> Optional[UUID]:
    if value is None:
        return None
    if isinstance(value, UUID):
        return value
    return UUID(str(value))


def to_decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal("0")
    return Decimal(str(value))


def to_features(value: Any) -> list[str]:
    """Plan features are stored as a JSON array in a text column."""
    if not value:
        return []
    if isinstance(value, list):
        return [str(item) for item in value]
    return [str(item) for item in json.loads(value)]

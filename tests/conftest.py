"""
Shared fixtures: a controllable clock and an in-memory SQLite store
created from the production schema.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID, uuid4

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from cvmbot.infrastructure.dashboard.rows import to_db_time
from cvmbot.infrastructure.dashboard.schema import create_schema

START = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)


class FakeClock:
    """Clock whose time only moves when a test advances it."""

    def __init__(self, start: datetime = START) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta: float) -> None:
        self.now += timedelta(**delta)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def engine() -> Engine:
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    create_schema(engine)
    yield engine
    engine.dispose()


def add_user(
    engine: Engine,
    *,
    email: Optional[str] = None,
    nombre: str = "Ana",
    apellido: str = "Lopez",
    approval_status: str = "approved",
    is_operator: bool = False,
    created_at: datetime = START,
) -> UUID:
    """Insert a user row directly and return its ID."""
    user_id = uuid4()
    with engine.begin() as conn:
        conn.execute(
            text(
                """
                INSERT INTO users
                    (id, email, password_hash, nombre, apellido, nick_telegram,
                     is_operator, approval_status, created_at)
                VALUES
                    (:id, :email, :password_hash, :nombre, :apellido, :nick,
                     :is_operator, :status, :created_at)
                """
            ),
            {
                "id": str(user_id),
                "email": email or f"{user_id.hex[:8]}@example.com",
                "password_hash": "0" * 64,
                "nombre": nombre,
                "apellido": apellido,
                "nick": nombre.lower(),
                "is_operator": is_operator,
                "status": approval_status,
                "created_at": to_db_time(created_at),
            },
        )
    return user_id


def add_earning(engine: Engine, user_id: UUID, amount: float, created_at: datetime) -> None:
    with engine.begin() as conn:
        conn.execute(
            text(
                "INSERT INTO bot_earnings (id, user_id, amount, created_at) "
                "VALUES (:id, :user_id, :amount, :created_at)"
            ),
            {
                "id": str(uuid4()),
                "user_id": str(user_id),
                "amount": amount,
                "created_at": to_db_time(created_at),
            },
        )


def count_rows(engine: Engine, table: str, user_id: UUID) -> int:
    with engine.connect() as conn:
        return conn.execute(
            text(f"SELECT COUNT(*) FROM {table} WHERE user_id = :user_id"),
            {"user_id": str(user_id)},
        ).scalar()


@pytest.fixture
def make_user(engine):
    def _make(**overrides) -> UUID:
        return add_user(engine, **overrides)

    return _make

"""
Relational schema of the dashboard store.

Plain DDL kept portable between PostgreSQL and SQLite so the same
statements back both the deployed database and the test suite.
Identifiers and timestamps are generated by the application, never by
column defaults.
"""

import logging
from datetime import datetime
from uuid import uuid4

from sqlalchemy import text
from sqlalchemy.engine import Engine

from cvmbot.infrastructure.dashboard.rows import to_db_time

logger = logging.getLogger(__name__)

SCHEMA_STATEMENTS: tuple[str, ...] = (
    """
    CREATE TABLE IF NOT EXISTS users (
        id UUID PRIMARY KEY,
        email VARCHAR(255) NOT NULL UNIQUE,
        password_hash VARCHAR(64) NOT NULL,
        nombre VARCHAR(120) NOT NULL,
        apellido VARCHAR(120) NOT NULL,
        pais VARCHAR(80) NOT NULL DEFAULT '',
        telefono VARCHAR(40) NOT NULL DEFAULT '',
        nick_telegram VARCHAR(80) NOT NULL DEFAULT '',
        is_operator BOOLEAN NOT NULL DEFAULT FALSE,
        approval_status VARCHAR(16) NOT NULL DEFAULT 'pending',
        created_at TIMESTAMPTZ NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS sessions (
        id UUID PRIMARY KEY,
        user_id UUID NOT NULL REFERENCES users (id),
        token VARCHAR(128) NOT NULL UNIQUE,
        created_at TIMESTAMPTZ NOT NULL,
        expires_at TIMESTAMPTZ
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS bot_activation (
        id UUID PRIMARY KEY,
        user_id UUID NOT NULL UNIQUE REFERENCES users (id),
        is_active BOOLEAN NOT NULL DEFAULT FALSE,
        activated_at TIMESTAMPTZ,
        total_duration_days INTEGER NOT NULL DEFAULT 30,
        paused_days_remaining INTEGER,
        last_pause_date TIMESTAMPTZ,
        updated_at TIMESTAMPTZ NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS user_capital (
        id UUID PRIMARY KEY,
        user_id UUID NOT NULL UNIQUE REFERENCES users (id),
        exchange VARCHAR(16) NOT NULL,
        capital_amount NUMERIC(14, 2) NOT NULL,
        is_connected BOOLEAN NOT NULL DEFAULT TRUE,
        created_at TIMESTAMPTZ NOT NULL,
        updated_at TIMESTAMPTZ NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS bot_earnings (
        id UUID PRIMARY KEY,
        user_id UUID NOT NULL REFERENCES users (id),
        amount NUMERIC(14, 2) NOT NULL,
        created_at TIMESTAMPTZ NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS subscription_plans (
        id UUID PRIMARY KEY,
        name VARCHAR(120) NOT NULL UNIQUE,
        description TEXT NOT NULL DEFAULT '',
        price NUMERIC(12, 2) NOT NULL,
        duration_days INTEGER NOT NULL,
        features TEXT NOT NULL DEFAULT '[]',
        is_active BOOLEAN NOT NULL DEFAULT TRUE,
        display_order INTEGER NOT NULL DEFAULT 0,
        created_by UUID,
        created_at TIMESTAMPTZ NOT NULL,
        updated_at TIMESTAMPTZ NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS user_plans (
        id UUID PRIMARY KEY,
        user_id UUID NOT NULL UNIQUE REFERENCES users (id),
        plan_id UUID NOT NULL REFERENCES subscription_plans (id),
        activated_at TIMESTAMPTZ NOT NULL,
        expires_at TIMESTAMPTZ,
        is_active BOOLEAN NOT NULL DEFAULT TRUE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS plan_change_requests (
        id UUID PRIMARY KEY,
        user_id UUID NOT NULL REFERENCES users (id),
        current_plan_id UUID,
        requested_plan_id UUID NOT NULL,
        status VARCHAR(16) NOT NULL DEFAULT 'pending',
        requested_at TIMESTAMPTZ NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS system_config (
        key VARCHAR(80) PRIMARY KEY,
        value BOOLEAN NOT NULL,
        description TEXT,
        updated_by UUID,
        updated_at TIMESTAMPTZ NOT NULL
    )
    """,
)

# Child tables first so a user can be removed without FK violations.
USER_OWNED_TABLES: tuple[str, ...] = (
    "bot_earnings",
    "bot_activation",
    "user_capital",
    "plan_change_requests",
    "user_plans",
    "sessions",
)


def create_schema(engine: Engine) -> None:
    """Create every dashboard table that does not exist yet."""
    with engine.begin() as conn:
        for statement in SCHEMA_STATEMENTS:
            conn.execute(text(statement))
    logger.info("Dashboard schema ensured (%d tables).", len(SCHEMA_STATEMENTS))


DEFAULT_FLAGS: dict[str, tuple[bool, str]] = {
    "plans_enabled": (True, "Clients may browse and request subscription plans"),
}


def seed_defaults(engine: Engine, basic_plan_name: str, now: datetime) -> int:
    """Insert the basic plan and default flags when they are missing.

    Returns:
        Number of rows inserted.
    """
    inserted = 0
    with engine.begin() as conn:
        plan_exists = conn.execute(
            text("SELECT 1 FROM subscription_plans WHERE name = :name"),
            {"name": basic_plan_name},
        ).first()
        if plan_exists is None:
            conn.execute(
                text(
                    """
                    INSERT INTO subscription_plans
                        (id, name, description, price, duration_days, features,
                         is_active, display_order, created_at, updated_at)
                    VALUES
                        (:id, :name, :description, 0, 30, '[]', :is_active, 0,
                         :now, :now)
                    """
                ),
                {
                    "id": str(uuid4()),
                    "name": basic_plan_name,
                    "description": "Entry plan assigned to new clients",
                    "is_active": True,
                    "now": to_db_time(now),
                },
            )
            inserted += 1

        for key, (value, description) in DEFAULT_FLAGS.items():
            flag_exists = conn.execute(
                text("SELECT 1 FROM system_config WHERE key = :key"), {"key": key}
            ).first()
            if flag_exists is None:
                conn.execute(
                    text(
                        """
                        INSERT INTO system_config (key, value, description, updated_at)
                        VALUES (:key, :value, :description, :now)
                        """
                    ),
                    {
                        "key": key,
                        "value": value,
                        "description": description,
                        "now": to_db_time(now),
                    },
                )
                inserted += 1

    logger.info("Seeded %d default rows.", inserted)
    return inserted

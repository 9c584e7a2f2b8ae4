import os
import uuid
from collections.abc import Generator
from typing import Any

import psycopg
import pytest
from psycopg import sql

from fieldguard.config.settings import Settings
from fieldguard.database.connection import close_pool, get_connection, init_pool


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "fieldguard_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute("SELECT 1")
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env vars.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def users_table(db_conn: psycopg.Connection[Any]) -> Generator[str, None, None]:
    """Create a throwaway users table seeded with one taken email."""
    table = f"users_{uuid.uuid4().hex[:12]}"
    with db_conn.cursor() as cur:
        cur.execute(
            sql.SQL("CREATE TABLE {} (id serial PRIMARY KEY, email text, username text)").format(
                sql.Identifier(table)
            )
        )
        cur.execute(
            sql.SQL("INSERT INTO {} (email, username) VALUES (%s, %s)").format(
                sql.Identifier(table)
            ),
            ("taken@example.com", "taken"),
        )
    db_conn.commit()
    try:
        yield table
    finally:
        with db_conn.cursor() as cur:
            cur.execute(sql.SQL("DROP TABLE IF EXISTS {}").format(sql.Identifier(table)))
        db_conn.commit()

import os
import uuid
from collections.abc import Generator
from pathlib import Path
from typing import Any

import psycopg
import pytest

import studyassist.database.connection
from studyassist.config.settings import Settings
from studyassist.database.connection import close_pool, get_connection, init_pool

SCHEMA_PATH = Path(studyassist.database.connection.__file__).parent / "schema.sql"


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "studyassist_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute(SCHEMA_PATH.read_text(encoding="utf-8"))
            conn.commit()
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run integration tests")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def user_id(integration_pool: None) -> Generator[str, None, None]:
    """A fresh user id whose rows are removed after the test."""
    value = f"test-{uuid.uuid4().hex}"
    yield value
    with get_connection() as conn:
        conn.execute("DELETE FROM documents WHERE user_id = %s", (value,))
        conn.execute("DELETE FROM profiles WHERE user_id = %s", (value,))
        conn.commit()

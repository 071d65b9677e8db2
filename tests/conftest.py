"""
pytest configuration and fixtures.

Every test gets its own SQLite database file under tmp_path, with the users
table already created.
"""

from typing import Any, Generator, Sequence

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import insert
from sqlalchemy.engine import Engine

from services.api.app import create_app
from services.api.repository import UserRepository
from services.api.tracing import OperationTracer
from utils.config import Settings
from utils.db import get_engine, init_schema, users_table

API = "/api/go"


class RecordingTracer(OperationTracer):
    """Tracer that remembers every hook call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, Any]] = []

    def before(self, operation: str, args: Sequence[Any]) -> None:
        self.calls.append(("before", operation, tuple(args)))

    def after(self, operation: str, result: Any) -> None:
        self.calls.append(("after", operation, result))

    def error(self, operation: str, exc: Exception) -> None:
        self.calls.append(("error", operation, exc))


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Test settings pointing at a throwaway SQLite file."""
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite:///{tmp_path / 'users.db'}",
        DEBUG=False,
    )


@pytest.fixture
def engine(settings: Settings) -> Generator[Engine, None, None]:
    """Engine with the users table created."""
    engine = get_engine(settings.DATABASE_URL)
    init_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def bare_engine(tmp_path) -> Generator[Engine, None, None]:
    """Engine on a database without the users table, so every statement fails."""
    engine = get_engine(f"sqlite:///{tmp_path / 'empty.db'}")
    yield engine
    engine.dispose()


@pytest.fixture
def repository(engine: Engine) -> UserRepository:
    return UserRepository(engine)


@pytest.fixture
def tracer() -> RecordingTracer:
    return RecordingTracer()


@pytest.fixture
def client(settings: Settings, engine: Engine, tracer: RecordingTracer) -> TestClient:
    """Test client for an app wired to the test database."""
    return TestClient(create_app(settings, engine=engine, tracer=tracer))


@pytest.fixture
def broken_client(settings: Settings, bare_engine: Engine) -> TestClient:
    """Test client whose database has no users table."""
    return TestClient(create_app(settings, engine=bare_engine))


@pytest.fixture
def seeded(engine: Engine) -> list[dict[str, Any]]:
    """Two users with known ids."""
    rows = [
        {"id": 1, "name": "John", "email": "john@example.com"},
        {"id": 2, "name": "Doe", "email": "doe@example.com"},
    ]
    with engine.begin() as conn:
        conn.execute(insert(users_table), rows)
    return rows

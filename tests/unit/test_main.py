"""Tests for the service bootstrap."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

import services.api.__main__ as entrypoint


@pytest.fixture
def engine_mock(monkeypatch, engine) -> MagicMock:
    """Wrap the test engine so dispose() calls are visible; keep logging untouched."""
    spy = MagicMock(wraps=engine)
    spy.dialect = engine.dialect
    monkeypatch.setattr(entrypoint, "get_engine", lambda url: spy)
    monkeypatch.setattr(entrypoint, "setup_logging", lambda **kwargs: None)
    return spy


def test_schema_failure_exits_with_status_1(monkeypatch, engine_mock):
    def unreachable(target):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    run = MagicMock()
    monkeypatch.setattr(entrypoint, "wait_for_schema", unreachable)
    monkeypatch.setattr(entrypoint.uvicorn, "run", run)

    with pytest.raises(SystemExit) as exc_info:
        entrypoint.main()

    assert exc_info.value.code == 1
    run.assert_not_called()


def test_serves_app_then_disposes_engine(monkeypatch, engine_mock):
    schema_calls = []
    run = MagicMock()
    monkeypatch.setattr(entrypoint, "wait_for_schema", schema_calls.append)
    monkeypatch.setattr(entrypoint.uvicorn, "run", run)

    entrypoint.main()

    assert schema_calls == [engine_mock]
    run.assert_called_once()
    _, kwargs = run.call_args
    assert kwargs["host"] == entrypoint.settings.API_HOST
    assert kwargs["port"] == entrypoint.settings.API_PORT
    assert kwargs["log_config"] is None
    engine_mock.dispose.assert_called_once()


def test_engine_disposed_when_server_crashes(monkeypatch, engine_mock):
    monkeypatch.setattr(entrypoint, "wait_for_schema", lambda target: None)
    monkeypatch.setattr(entrypoint.uvicorn, "run", MagicMock(side_effect=RuntimeError("bind failed")))

    with pytest.raises(RuntimeError, match="bind failed"):
        entrypoint.main()

    engine_mock.dispose.assert_called_once()

"""Tests for the operation tracers."""

import logging

import pytest

from services.api.tracing import LoggingTracer, OperationTracer, build_tracer
from tests.conftest import RecordingTracer
from utils.errors import NotFound


class ExplodingTracer(OperationTracer):
    def before(self, operation, args):
        raise RuntimeError("hook broke")

    def after(self, operation, result):
        raise RuntimeError("hook broke")


class TestRun:
    def test_returns_result_and_records_hooks(self):
        tracer = RecordingTracer()
        assert tracer.run("add", lambda a, b: a + b, 2, 3) == 5
        assert tracer.calls == [("before", "add", (2, 3)), ("after", "add", 5)]

    def test_exception_propagates_after_error_hook(self):
        tracer = RecordingTracer()

        def missing():
            raise NotFound("9")

        with pytest.raises(NotFound):
            tracer.run("get_user", missing)
        assert [kind for kind, _, _ in tracer.calls] == ["before", "error"]
        assert isinstance(tracer.calls[1][2], NotFound)

    def test_failing_hooks_do_not_change_control_flow(self, caplog):
        with caplog.at_level(logging.ERROR, logger="services.api.tracing"):
            assert ExplodingTracer().run("noop", lambda: "ok") == "ok"
        assert "Tracer hook before failed" in caplog.text
        assert "Tracer hook after failed" in caplog.text


class TestLoggingTracer:
    def test_logs_each_extension_point(self, caplog):
        tracer = LoggingTracer()
        with caplog.at_level(logging.INFO, logger="services.api.tracing"):
            tracer.run("list_users", lambda: [1, 2, 3])
            with pytest.raises(NotFound):
                tracer.run("get_user", _raise_not_found, "4")

        messages = [r.getMessage() for r in caplog.records]
        assert messages == [
            "Starting list_users args=[]",
            "Finished list_users result=3 rows",
            "Starting get_user args=['4']",
            "Failed get_user error=NotFound: user 4 not found",
        ]


def _raise_not_found(user_id):
    raise NotFound(user_id)


def test_build_tracer():
    assert isinstance(build_tracer(True), LoggingTracer)
    tracer = build_tracer(False)
    assert type(tracer) is OperationTracer

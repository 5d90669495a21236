"""Tests for application trace watchers."""

import pytest

from lambda_machine import (
    EMPTY_ENVIRONMENT, LambdaApplication, LambdaBufferingTraceWatcher, LambdaClosure, LambdaFileTraceWatcher,
    LambdaInteger, LambdaMachine, LambdaSession, LambdaStdoutTraceWatcher, LambdaVarOccurrence
)


def identity_application(value: int) -> LambdaApplication:
    """Build `id value` as a live graph."""
    identity = LambdaClosure(EMPTY_ENVIRONMENT, True, LambdaVarOccurrence(), "id")
    return LambdaApplication(identity, LambdaInteger(value))


class TestBufferingTraceWatcher:
    """Test the buffering trace watcher."""

    def test_records_application(self):
        """Test that each application step is recorded as `left <- right`."""
        watcher = LambdaBufferingTraceWatcher()
        LambdaSession(application_callback=watcher.on_application).normalize(identity_application(7))

        assert watcher.get_traces() == ["id <- 7"]
        assert watcher.get_total_count() == 1
        assert not watcher.is_clipped()

    def test_clipping(self):
        """Test that the oldest traces are discarded once the buffer is full."""
        watcher = LambdaBufferingTraceWatcher(max_traces=2)
        session = LambdaSession(application_callback=watcher.on_application)
        for value in (1, 2, 3):
            session.normalize(identity_application(value))

        assert watcher.get_traces() == ["id <- 2", "id <- 3"]
        assert watcher.get_total_count() == 3
        assert watcher.is_clipped()

    def test_clear(self):
        """Test that clearing resets traces and counters."""
        watcher = LambdaBufferingTraceWatcher(max_traces=1)
        session = LambdaSession(application_callback=watcher.on_application)
        session.normalize(identity_application(1))
        session.normalize(identity_application(2))

        watcher.clear()

        assert watcher.get_traces() == []
        assert watcher.get_total_count() == 0
        assert not watcher.is_clipped()

    def test_factorial_trace(self, traced_machine, watcher, helpers):
        """Test that a traced evaluation records the head application first."""
        helpers.define_factorial(traced_machine.globals)
        helpers.define_call(traced_machine.globals, "main", "fact", 2)

        assert helpers.as_int(traced_machine.evaluate("main")) == 2
        assert watcher.get_traces()[0] == "fact <- 2"
        assert watcher.get_total_count() > 10


class TestFileTraceWatcher:
    """Test the file trace watcher."""

    def test_writes_traces(self, tmp_path):
        """Test that traces are written one per line."""
        path = tmp_path / "trace.txt"

        with LambdaFileTraceWatcher(str(path)) as watcher:
            session = LambdaSession(application_callback=watcher.on_application)
            session.normalize(identity_application(1))
            session.normalize(identity_application(2))

        assert path.read_text(encoding='utf-8') == "id <- 1\nid <- 2\n"

    def test_unwritable_path(self, tmp_path):
        """Test that failing to open the trace file is reported."""
        with pytest.raises(RuntimeError, match="Failed to open trace file"):
            LambdaFileTraceWatcher(str(tmp_path / "missing" / "trace.txt"))


class TestStdoutTraceWatcher:
    """Test the stdout trace watcher."""

    def test_prints_traces(self, capsys):
        """Test that traces are printed as they happen."""
        machine = LambdaMachine(trace_watcher=LambdaStdoutTraceWatcher())
        session = machine.session
        session.normalize(identity_application(5))

        assert capsys.readouterr().out == "id <- 5\n"

    def test_custom_name_of(self, capsys):
        """Test that the watcher renders with the caller's naming function."""
        watcher = LambdaStdoutTraceWatcher(name_of=lambda meta: f"<{meta}>")
        LambdaSession(application_callback=watcher.on_application).normalize(identity_application(5))

        assert capsys.readouterr().out == "<id> <- 5\n"

"""Tests for log_step."""

from structlog.testing import capture_logs

from continuator.pipeline.builtin_steps import log_step
from continuator.pipeline.registry import StepRegistry
from continuator.pipeline.runner import run_sync


class TestLogStep:
    def test_logs_and_passes_through(self):
        with capture_logs() as logs:
            result = run_sync(StepRegistry([log_step]), {"id": 1})
        assert result.value == {"id": 1}
        assert {"event": "pipeline.log", "log_level": "info", "value": {"id": 1}} in logs

    def test_called_directly(self):
        with capture_logs() as logs:
            assert log_step("plain") == "plain"
        assert logs[0]["value"] == "plain"

    def test_halt_only(self):
        halted = []
        with capture_logs():
            log_step(5, halt=halted.append)
        assert halted == [5]

    def test_advance_preferred_over_halt(self):
        advanced, halted = [], []
        with capture_logs():
            log_step(5, advanced.append, halted.append)
        assert advanced == [5]
        assert halted == []

    def test_ends_run_when_wrapped_with_halt(self):
        def finish(value, advance, halt, jump):
            return log_step(value, halt=halt)

        with capture_logs():
            result = run_sync(StepRegistry([finish, lambda v, advance, halt, jump: advance(-1)]), 3)
        assert result.value == 3
        assert result.halted

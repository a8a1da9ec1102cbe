"""Run state — per-invocation bookkeeping for the execution engines.

A :class:`RunState` is created fresh by every ``run``/``debug`` call, owned
by that call alone and discarded when it returns.  Nothing about a run is
stored on the registry, so independent runs of one registry never interfere.

State machine::

    RUNNING ──advance──▶ RUNNING | COMPLETED (past the last step)
    RUNNING ──jump─────▶ RUNNING            (position := target)
    RUNNING ──halt─────▶ HALTED
    RUNNING ──fault────▶ FAULTED

:class:`RunResult` is what ``Pipeline.execute`` returns: the final value plus
how the run ended.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from continuator.pipeline.tracer import TraceEntry


class RunStatus(str, Enum):
    """Lifecycle state of a single run."""

    RUNNING = "running"
    HALTED = "halted"
    COMPLETED = "completed"
    FAULTED = "faulted"

    @property
    def is_terminal(self) -> bool:
        return self is not RunStatus.RUNNING


@dataclass
class RunState:
    """Mutable state of one run.

    Attributes:
        value: Current value, handed to the next step.
        position: Registry position of the next step to invoke.
        status: Current lifecycle state.
        steps_executed: Number of step invocations so far.
    """

    value: Any
    position: int = 0
    status: RunStatus = RunStatus.RUNNING
    steps_executed: int = 0

    @property
    def running(self) -> bool:
        return self.status is RunStatus.RUNNING


@dataclass
class RunResult:
    """Outcome of a run that did not fault.

    Attributes:
        value: Final value (the halt value, after ``on_halt`` if given).
        status: ``COMPLETED`` or ``HALTED``.
        steps_executed: Number of step invocations.
        run_id: Identifier of the run, as used in log events.
        trace: Trace entries for debug runs, empty otherwise.
    """

    value: Any
    status: RunStatus
    steps_executed: int
    run_id: str = ""
    trace: list[TraceEntry] = field(default_factory=list)

    @property
    def halted(self) -> bool:
        return self.status is RunStatus.HALTED

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logging."""
        return {
            "run_id": self.run_id,
            "status": self.status.value,
            "steps_executed": self.steps_executed,
            "trace_length": len(self.trace),
        }


__all__ = ["RunStatus", "RunState", "RunResult"]

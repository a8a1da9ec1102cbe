"""Pipeline Runner — synchronous execution engine.

Walks a :class:`~continuator.pipeline.registry.StepRegistry` against a seed
value.  Each step is called as ``step(value, advance, halt, jump)`` and the
first signal it produces decides what happens next:

- ``advance(v)`` — value := v, move to the next position
- ``halt(h)``    — stop; result is ``on_halt(h)`` if given, else ``h``
- ``jump(id)``   — move to the position mapped by ``id``, value unchanged

Step invocations are chained through :func:`~continuator.pipeline.trampoline.trampoline`,
so a pipeline of any length (or a step that jumps backwards forever until
some condition) runs at constant stack depth.

Failures are raised as a single :class:`~continuator.pipeline.exceptions.PipelineFault`
built by :func:`~continuator.pipeline.exceptions.wrap`:

- a step body raising          → ``StepBodyFault``
- a jump to an unmapped id     → ``UnknownJumpTarget``
- a step returning unresolved  → ``UnresolvedStep``

Logging: a plain run emits only ``pipeline.run.faulted`` (warning) when it
fails.  Traced runs also emit ``pipeline.run.start`` and
``pipeline.run.complete`` at debug level.

Example::

    registry = StepRegistry()
    registry.add_named_step("double", lambda v, advance, halt, jump: advance(v * 2))
    registry.add_named_step("addOne", lambda v, advance, halt, jump: advance(v + 1))

    run_sync(registry, 3).value   # 7
"""

from __future__ import annotations

import inspect
import uuid
from collections.abc import Callable
from typing import Any

from continuator.core.logging import get_logger
from continuator.pipeline.exceptions import (
    PipelineFault,
    StepBodyFault,
    UnknownJumpTarget,
    UnresolvedStep,
    wrap,
)
from continuator.pipeline.registry import StepFn, StepRegistry
from continuator.pipeline.run_state import RunResult, RunState, RunStatus
from continuator.pipeline.signals import Advance, Halt, Jump, Resolution, Signal
from continuator.pipeline.tracer import Tracer
from continuator.pipeline.trampoline import Bounce, trampoline

logger = get_logger(__name__)

OnHalt = Callable[[Any], Any]


class Run:
    """One traversal of a registry: state plus the transitions both engines share."""

    def __init__(
        self,
        registry: StepRegistry,
        seed: Any,
        on_halt: OnHalt | None = None,
        tracer: Tracer | None = None,
        name: str | None = None,
    ) -> None:
        self.registry = registry
        self.on_halt = on_halt
        self.tracer = tracer
        self.name = name
        self.run_id = uuid.uuid4().hex[:12]
        self.state = RunState(value=seed)
        self._settle()

    @property
    def running(self) -> bool:
        return self.state.running

    def begin_step(self) -> StepFn:
        """Record the upcoming invocation and return the step to call."""
        position = self.state.position
        if self.tracer is not None:
            self.tracer.record(position, self.registry.identifier_of(position), self.state.value)
        self.state.steps_executed += 1
        return self.registry.step_at(position)

    def apply(self, signal: Signal) -> None:
        """Apply a step's winning signal to the run state."""
        if isinstance(signal, Advance):
            self.state.value = signal.value
            self.state.position += 1
        elif isinstance(signal, Halt):
            value = signal.value
            if self.on_halt is not None:
                try:
                    value = self.on_halt(value)
                except Exception as exc:
                    raise self.fault(exc) from exc
            self.state.value = value
            self.state.status = RunStatus.HALTED
            return
        elif isinstance(signal, Jump):
            position = self.registry.resolve(signal.target)
            if position is None:
                fault = self.fault(f"No step found for id {signal.target!r}", kind=UnknownJumpTarget)
                raise fault.with_context(target=signal.target)
            self.state.position = position
        self._settle()

    def fault(
        self,
        error: BaseException | str,
        *,
        kind: type[PipelineFault] | None = None,
    ) -> PipelineFault:
        """Move to ``FAULTED`` and build the fault to raise."""
        self.state.status = RunStatus.FAULTED
        trace = self.tracer.entries if self.tracer is not None else None
        fault = wrap(error, trace, kind=kind)

        position = self.state.position
        step_id = self.registry.identifier_of(position)
        fault.with_context(
            pipeline=self.name,
            run_id=self.run_id,
            position=position,
            step=str(step_id) if step_id is not None else None,
        )
        logger.warning(
            "pipeline.run.faulted",
            pipeline=self.name,
            run_id=self.run_id,
            fault=fault.fault_name,
            position=position,
            error=fault.message,
        )
        return fault

    def unresolved(self) -> PipelineFault:
        step_id = self.registry.identifier_of(self.state.position)
        return self.fault(
            f"Step {step_id} returned without calling advance, halt or jump",
            kind=UnresolvedStep,
        )

    def started(self, mode: str) -> None:
        """Log the run start.  Only traced runs log their lifecycle."""
        if self.tracer is None:
            return
        logger.debug(
            "pipeline.run.start",
            pipeline=self.name,
            run_id=self.run_id,
            mode=mode,
            step_count=len(self.registry),
        )

    def result(self) -> RunResult:
        if self.tracer is not None:
            logger.debug(
                "pipeline.run.complete",
                pipeline=self.name,
                run_id=self.run_id,
                status=self.state.status.value,
                steps_executed=self.state.steps_executed,
            )
        return RunResult(
            value=self.state.value,
            status=self.state.status,
            steps_executed=self.state.steps_executed,
            run_id=self.run_id,
            trace=self.tracer.entries if self.tracer is not None else [],
        )

    def _settle(self) -> None:
        if self.state.running and self.state.position >= len(self.registry):
            self.state.status = RunStatus.COMPLETED


def _process(run: Run) -> Bounce | RunResult:
    if not run.running:
        return run.result()

    step = run.begin_step()
    resolution = Resolution()
    try:
        returned = step(run.state.value, resolution.advance, resolution.halt, resolution.jump)
    except Exception as exc:
        raise run.fault(exc) from exc

    if inspect.isawaitable(returned):
        if inspect.iscoroutine(returned):
            returned.close()
        raise run.fault(
            "Step returned an awaitable; use run_async() for asynchronous steps",
            kind=StepBodyFault,
        )

    resolution.accept(returned)
    if resolution.signal is None:
        raise run.unresolved()

    run.apply(resolution.signal)
    return Bounce(_process, run)


def run_sync(
    registry: StepRegistry,
    seed: Any,
    on_halt: OnHalt | None = None,
    *,
    tracer: Tracer | None = None,
    name: str | None = None,
) -> RunResult:
    """Run ``registry`` on ``seed`` synchronously.

    Args:
        registry: Steps to run.
        seed: Initial value.
        on_halt: Applied to the halt value when a step halts.
        tracer: Records a trace entry before every step (debug mode).
        name: Pipeline name for logs and fault context.

    Raises:
        PipelineFault: If the run faults.
    """
    run = Run(registry, seed, on_halt=on_halt, tracer=tracer, name=name)
    run.started("sync")
    return trampoline(_process, run)


__all__ = ["Run", "OnHalt", "run_sync"]

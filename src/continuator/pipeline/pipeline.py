"""Pipeline — a step registry you can run.

:class:`Pipeline` is the entry point most callers need: it is a
:class:`~continuator.pipeline.registry.StepRegistry` (so all registration,
removal, lookup and composition operations are available) plus the run
entry points of both engines.

ARCHITECTURE
────────────
::

    Pipeline(StepRegistry)
      ├── run(seed, on_halt)                 → value       (sync)
      ├── debug(seed, on_halt, observers)    → value       (sync, traced)
      ├── execute(seed, on_halt, debug=...)  → RunResult   (sync)
      ├── run_async / debug_async / execute_async          (asyncio)
      └── settings                            ContinuatorSettings

``debug`` differs from ``run`` only in that a tracer records every step
invocation; if the run faults, the trace is attached to the raised
:class:`~continuator.pipeline.exceptions.PipelineFault` and the fault is
written to the log with :func:`~continuator.pipeline.exceptions.report`.
With ``CONTINUATOR_DEBUG=true`` every ``run`` is traced.

Example::

    from continuator import Pipeline

    pipeline = Pipeline(name="arith")
    pipeline.add_named_step("double", lambda v, advance, halt, jump: advance(v * 2))
    pipeline.add_named_step("addOne", lambda v, advance, halt, jump: advance(v + 1))

    pipeline.run(3)            # 7
    await pipeline.run_async(3)  # 7

Tags:
    pipeline, continuation, trampoline, asyncio, debug

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from continuator.core.settings import ContinuatorSettings, get_settings
from continuator.pipeline.async_runner import run_async
from continuator.pipeline.exceptions import PipelineFault, report
from continuator.pipeline.registry import StepCollection, StepRegistry
from continuator.pipeline.run_state import RunResult
from continuator.pipeline.runner import OnHalt, run_sync
from continuator.pipeline.tracer import TraceObserver, Tracer


class Pipeline(StepRegistry):
    """Step registry with sync and async run entry points.

    Args:
        steps: Optional initial steps (sequence or name → step mapping).
        name: Pipeline name, attached to log events and fault context.
        settings: Settings to use instead of :func:`get_settings`.
    """

    def __init__(
        self,
        steps: StepCollection | None = None,
        *,
        name: str | None = None,
        settings: ContinuatorSettings | None = None,
    ) -> None:
        super().__init__(steps)
        self.name = name
        self._settings = settings

    @property
    def settings(self) -> ContinuatorSettings:
        if self._settings is None:
            return get_settings()
        return self._settings

    # ------------------------------------------------------------------
    # Synchronous
    # ------------------------------------------------------------------

    def run(self, seed: Any, on_halt: OnHalt | None = None) -> Any:
        """Run on ``seed`` and return the final value."""
        return self.execute(seed, on_halt).value

    def debug(
        self,
        seed: Any,
        on_halt: OnHalt | None = None,
        observers: Iterable[TraceObserver] | None = None,
    ) -> Any:
        """Run on ``seed`` with step tracing and return the final value.

        Args:
            seed: Initial value.
            on_halt: Applied to the halt value when a step halts.
            observers: Called with each trace entry.  Defaults to logging
                a ``pipeline.trace`` event per step.
        """
        return self.execute(seed, on_halt, debug=True, observers=observers).value

    def execute(
        self,
        seed: Any,
        on_halt: OnHalt | None = None,
        *,
        debug: bool | None = None,
        observers: Iterable[TraceObserver] | None = None,
    ) -> RunResult:
        """Run on ``seed`` and return the full :class:`RunResult`."""
        tracer = self._tracer(debug, observers)
        try:
            return run_sync(self, seed, on_halt, tracer=tracer, name=self.name)
        except PipelineFault as fault:
            if tracer is not None:
                report(fault)
            raise

    # ------------------------------------------------------------------
    # Asynchronous
    # ------------------------------------------------------------------

    async def run_async(self, seed: Any, on_halt: OnHalt | None = None) -> Any:
        result = await self.execute_async(seed, on_halt)
        return result.value

    async def debug_async(
        self,
        seed: Any,
        on_halt: OnHalt | None = None,
        observers: Iterable[TraceObserver] | None = None,
    ) -> Any:
        result = await self.execute_async(seed, on_halt, debug=True, observers=observers)
        return result.value

    async def execute_async(
        self,
        seed: Any,
        on_halt: OnHalt | None = None,
        *,
        debug: bool | None = None,
        observers: Iterable[TraceObserver] | None = None,
    ) -> RunResult:
        tracer = self._tracer(debug, observers)
        try:
            return await run_async(self, seed, on_halt, tracer=tracer, name=self.name)
        except PipelineFault as fault:
            if tracer is not None:
                report(fault)
            raise

    def _tracer(
        self,
        debug: bool | None,
        observers: Iterable[TraceObserver] | None,
    ) -> Tracer | None:
        settings = self.settings
        if debug is None:
            debug = settings.debug
        if not debug:
            return None
        return Tracer.from_settings(settings, observers)

    def __repr__(self) -> str:
        return f"Pipeline(name={self.name!r}, steps={len(self)}, names={list(self.names)})"


__all__ = ["Pipeline"]

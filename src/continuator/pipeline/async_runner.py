"""Async Pipeline Runner — asyncio execution engine.

Same contract as :mod:`continuator.pipeline.runner`, with two additions:

- a step may be a coroutine function; its coroutine is awaited
- a step may signal *later*, e.g. from a callback scheduled on the loop

Each invocation waits on an :class:`asyncio.Future` that the step's first
signal completes.  The next step never starts before the current one has
signalled and, if it returned an awaitable, finished.  A step that never
signals leaves the run waiting; there is no timeout.

Example::

    async def fetch(value, advance, halt, jump):
        data = await client.get(value)
        advance(data)

    registry = StepRegistry().add_step(fetch).add_step(store)
    result = await run_async(registry, "https://example.org")
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Callable
from typing import Any

from continuator.pipeline.registry import StepRegistry
from continuator.pipeline.run_state import RunResult
from continuator.pipeline.runner import OnHalt, Run
from continuator.pipeline.signals import Resolution, Signal
from continuator.pipeline.tracer import Tracer


def _completer(future: asyncio.Future[Signal]) -> Callable[[Signal], None]:
    def complete(signal: Signal) -> None:
        if not future.done():
            future.set_result(signal)

    return complete


async def run_async(
    registry: StepRegistry,
    seed: Any,
    on_halt: OnHalt | None = None,
    *,
    tracer: Tracer | None = None,
    name: str | None = None,
) -> RunResult:
    """Run ``registry`` on ``seed`` on the running event loop.

    Args:
        registry: Steps to run.
        seed: Initial value.
        on_halt: Applied to the halt value when a step halts.
        tracer: Records a trace entry before every step (debug mode).
        name: Pipeline name for logs and fault context.

    Raises:
        PipelineFault: If the run faults.
    """
    loop = asyncio.get_running_loop()
    run = Run(registry, seed, on_halt=on_halt, tracer=tracer, name=name)
    run.started("async")

    while run.running:
        step = run.begin_step()
        future: asyncio.Future[Signal] = loop.create_future()
        resolution = Resolution(on_resolve=_completer(future))

        try:
            returned = step(run.state.value, resolution.advance, resolution.halt, resolution.jump)
            if inspect.isawaitable(returned):
                returned = await returned
        except Exception as exc:
            raise run.fault(exc) from exc

        resolution.accept(returned)
        signal = await future
        run.apply(signal)

    return run.result()


__all__ = ["run_async"]

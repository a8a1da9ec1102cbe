"""
Continuator Pipeline — continuation-passing step execution engine.

ARCHITECTURE
────────────
::

    Pipeline (StepRegistry + run entry points)
      ├── add_step / add_step_with_context
      ├── add_named_step / add_named_step_with_context
      ├── remove_step / identifier_of / resolve
      ├── compose(source, overwrite)
      └── run / debug / execute  (+ *_async)

    run_sync      ─ trampoline engine, constant stack depth
    run_async     ─ asyncio engine, one Future per step
    Tracer        ─ debug-mode trace entries + observers
    PipelineFault ─ the one fault a failed run raises

MODULE MAP (recommended reading order)
──────────────────────────────────────
1. step_id.py        ─ Index / Name identifiers
2. signals.py        ─ Advance / Halt / Jump + Resolution latch
3. exceptions.py     ─ fault hierarchy, wrap, report
4. registry.py       ─ StepRegistry
5. composition.py    ─ compose
6. trampoline.py     ─ Bounce + trampoline loop
7. run_state.py      ─ RunStatus / RunState / RunResult
8. tracer.py         ─ TraceEntry / Tracer
9. runner.py         ─ synchronous engine
10. async_runner.py  ─ asyncio engine
11. builtin_steps.py ─ log_step
12. pipeline.py      ─ Pipeline facade

Example:
    from continuator.pipeline import Pipeline, Halt

    def guard(value, advance, halt, jump):
        if value < 0:
            return Halt(0)
        advance(value)

    pipeline = Pipeline([guard, lambda v, advance, halt, jump: advance(v * 2)])
    pipeline.run(-5)   # 0
    pipeline.run(4)    # 8
"""

from continuator.pipeline.async_runner import run_async
from continuator.pipeline.builtin_steps import log_step
from continuator.pipeline.composition import compose
from continuator.pipeline.exceptions import (
    DuplicateStepID,
    InvalidStepSignature,
    PipelineFault,
    RegistryError,
    StepBodyFault,
    UnknownJumpTarget,
    UnknownStepID,
    UnresolvedStep,
    report,
    wrap,
)
from continuator.pipeline.pipeline import Pipeline
from continuator.pipeline.registry import StepRegistry
from continuator.pipeline.run_state import RunResult, RunState, RunStatus
from continuator.pipeline.runner import run_sync
from continuator.pipeline.signals import Advance, Halt, Jump, Resolution, Signal
from continuator.pipeline.step_id import Index, Name, StepID, as_step_id
from continuator.pipeline.tracer import TraceEntry, Tracer, log_observer
from continuator.pipeline.trampoline import Bounce, trampoline

__all__ = [
    # Facade
    "Pipeline",
    "StepRegistry",
    "compose",
    # Identifiers
    "Index",
    "Name",
    "StepID",
    "as_step_id",
    # Signals
    "Advance",
    "Halt",
    "Jump",
    "Signal",
    "Resolution",
    # Engines
    "run_sync",
    "run_async",
    "RunStatus",
    "RunState",
    "RunResult",
    "Bounce",
    "trampoline",
    # Debug
    "Tracer",
    "TraceEntry",
    "log_observer",
    # Faults
    "PipelineFault",
    "RegistryError",
    "InvalidStepSignature",
    "UnknownStepID",
    "DuplicateStepID",
    "UnknownJumpTarget",
    "StepBodyFault",
    "UnresolvedStep",
    "wrap",
    "report",
    # Steps
    "log_step",
]

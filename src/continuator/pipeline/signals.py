"""Control signals — the three ways a step hands control back to the engine.

Every step invocation ends in exactly one signal:

- :class:`Advance` — continue at the next position with a new value
- :class:`Halt`    — stop the run with a final value
- :class:`Jump`    — continue at the position mapped by a step identifier

Steps usually produce a signal by calling one of the callbacks the engine
passes in (``advance``, ``halt``, ``jump``).  A step may also simply
``return`` a signal object.  Either way a :class:`Resolution` latches the
*first* signal of the invocation; later ones are ignored.

ARCHITECTURE
────────────
::

    Resolution (one per step invocation)
      ├── .advance(value)  → Advance(value)
      ├── .halt(value)     → Halt(value)
      ├── .jump(target)    → Jump(target)
      ├── .accept(result)  → latch a returned signal, if any
      └── .signal          → first signal, or None

Example::

    def double(value, advance, halt, jump):
        advance(value * 2)

    def double_returning(value, advance, halt, jump):
        return Advance(value * 2)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Union

from continuator.core.logging import get_logger
from continuator.pipeline.step_id import StepRef

logger = get_logger(__name__)


@dataclass(frozen=True)
class Advance:
    """Move to the next position carrying ``value``."""

    value: Any


@dataclass(frozen=True)
class Halt:
    """Terminate the run with ``value``."""

    value: Any


@dataclass(frozen=True)
class Jump:
    """Continue at the step identified by ``target``; the value is unchanged."""

    target: StepRef


Signal = Union[Advance, Halt, Jump]


def is_signal(obj: Any) -> bool:
    return isinstance(obj, (Advance, Halt, Jump))


class Resolution:
    """First-signal-wins latch for a single step invocation.

    Args:
        on_resolve: Called once, with the winning signal, when the latch
            closes.  The async engine uses it to complete a future.
    """

    def __init__(self, on_resolve: Callable[[Signal], None] | None = None) -> None:
        self._signal: Signal | None = None
        self._on_resolve = on_resolve

    @property
    def signal(self) -> Signal | None:
        return self._signal

    @property
    def resolved(self) -> bool:
        return self._signal is not None

    def resolve(self, signal: Signal) -> Signal:
        if self._signal is None:
            self._signal = signal
            if self._on_resolve is not None:
                self._on_resolve(signal)
        elif signal is not self._signal:
            logger.debug(
                "pipeline.signal.ignored",
                winner=type(self._signal).__name__,
                ignored=type(signal).__name__,
            )
        return signal

    def advance(self, value: Any) -> Advance:
        return self.resolve(Advance(value))

    def halt(self, value: Any) -> Halt:
        return self.resolve(Halt(value))

    def jump(self, target: StepRef) -> Jump:
        return self.resolve(Jump(target))

    def accept(self, returned: Any) -> None:
        """Latch a signal the step returned instead of calling back."""
        if is_signal(returned):
            self.resolve(returned)


__all__ = ["Advance", "Halt", "Jump", "Signal", "Resolution", "is_signal"]

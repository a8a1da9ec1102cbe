"""Debug Tracer — record the path a run takes through the registry.

In debug mode the engine calls :meth:`Tracer.record` before every step
invocation.  Each call appends a :class:`TraceEntry` and forwards it to the
observers the caller supplied.  When the run faults, the accumulated entries
are attached to the fault so the caller can see exactly which steps ran and
with which values.

Architecture::

    Tracer
    ├── record(position, step_id, value) → TraceEntry
    │   ├── append to entries (bounded by max_entries)
    │   └── notify observers
    └── entries → list[TraceEntry]

    TraceObserver = Callable[[TraceEntry], None]
    log_observer(entry)   ── default; emits ``pipeline.trace`` at debug level

Example::

    seen = []
    pipeline.debug(3, observers=[seen.append])
    assert [e.position for e in seen] == [0, 1]
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from continuator.core.logging import get_logger
from continuator.pipeline.step_id import StepID

logger = get_logger(__name__)


@dataclass(frozen=True)
class TraceEntry:
    """Immutable record of one step invocation.

    Attributes:
        position: Registry position of the invoked step.
        step_id: Identifier of the step, or ``None`` if it had none.
        value: Value the step received.
    """

    position: int
    step_id: StepID | None
    value: Any

    def to_dict(self) -> dict[str, Any]:
        return {
            "position": self.position,
            "step_id": str(self.step_id) if self.step_id is not None else None,
            "value": self.value,
        }


TraceObserver = Callable[[TraceEntry], None]


def log_observer(entry: TraceEntry) -> None:
    """Emit a ``pipeline.trace`` debug event for ``entry``."""
    logger.debug("pipeline.trace", **entry.to_dict())


def _log_without_value(entry: TraceEntry) -> None:
    logger.debug(
        "pipeline.trace",
        position=entry.position,
        step_id=str(entry.step_id) if entry.step_id is not None else None,
    )


class Tracer:
    """Collects trace entries for a single run.

    Args:
        observers: Callables notified of every entry, in order.
        max_entries: Keep only the most recent N entries (``None`` keeps all).
    """

    def __init__(
        self,
        observers: Iterable[TraceObserver] = (),
        max_entries: int | None = None,
    ) -> None:
        self._observers = list(observers)
        self._entries: deque[TraceEntry] = deque(maxlen=max_entries)
        self._recorded = 0

    @classmethod
    def from_settings(
        cls,
        settings: Any,
        observers: Iterable[TraceObserver] | None = None,
    ) -> Tracer:
        """Build a tracer from :class:`~continuator.core.settings.ContinuatorSettings`.

        Without explicit observers the tracer logs each entry, including the
        value unless ``settings.trace_values`` is off.
        """
        if observers is None:
            observers = [log_observer if settings.trace_values else _log_without_value]
        return cls(observers=observers, max_entries=settings.max_trace_entries)

    @property
    def entries(self) -> list[TraceEntry]:
        return list(self._entries)

    @property
    def recorded(self) -> int:
        """Total entries recorded, including any dropped by ``max_entries``."""
        return self._recorded

    def record(self, position: int, step_id: StepID | None, value: Any) -> TraceEntry:
        entry = TraceEntry(position=position, step_id=step_id, value=value)
        self._entries.append(entry)
        self._recorded += 1
        for observer in self._observers:
            observer(entry)
        return entry

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["TraceEntry", "TraceObserver", "Tracer", "log_observer"]

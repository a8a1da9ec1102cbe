"""Pipeline exceptions — fault hierarchy and fault wrapping.

All pipeline faults inherit from :class:`PipelineFault`, which itself extends
``continuator.core.errors.ContinuatorError``.  A ``PipelineFault`` carries the
original failure (message, classification, traceback) and, for debug runs,
the step trace leading up to it.

Hierarchy::

    ContinuatorError  (from continuator.core.errors)
      └── PipelineFault                 ── wrapped fault object
            ├── RegistryError           ── base for registration/lookup errors
            │     ├── InvalidStepSignature  ── malformed registration call
            │     ├── UnknownStepID         ── removal of an unmapped id
            │     └── DuplicateStepID       ── explicit name already mapped
            ├── UnknownJumpTarget       ── jump to an unmapped id
            ├── StepBodyFault           ── a step body raised
            └── UnresolvedStep          ── sync step returned without a signal

The engine turns every run-time failure into exactly one fault through
:func:`wrap` and raises it; :func:`report` writes a fault to the structured
log.
"""

from __future__ import annotations

import traceback
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from continuator.core.errors import ContinuatorError, ErrorCategory
from continuator.core.logging import get_logger

if TYPE_CHECKING:
    from continuator.pipeline.step_id import StepID
    from continuator.pipeline.tracer import TraceEntry

logger = get_logger(__name__)


class PipelineFault(ContinuatorError):
    """Base class for every pipeline fault.

    Attributes:
        fault_name: Classification of the original failure (the original
            exception's class name when wrapping one).
        trace: Trace entries recorded by a debug run, else ``None``.
        original_traceback: Formatted traceback of the wrapped exception.
    """

    default_category = ErrorCategory.PIPELINE

    def __init__(
        self,
        message: str,
        *,
        fault_name: str | None = None,
        trace: Iterable[TraceEntry] | None = None,
        original_traceback: str | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.fault_name = fault_name or type(self).__name__
        self.trace: list[TraceEntry] | None = list(trace) if trace is not None else None
        self.original_traceback = original_traceback

    @classmethod
    def from_exception(
        cls, exc: BaseException, trace: Iterable[TraceEntry] | None = None
    ) -> PipelineFault:
        """Wrap ``exc``, keeping its message, class name and traceback."""
        formatted = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return cls(
            str(exc),
            fault_name=type(exc).__name__,
            trace=trace,
            original_traceback=formatted,
            cause=exc,
        )

    # Lookups over the recorded trace

    @property
    def last_entry(self) -> TraceEntry | None:
        """Last recorded step, or ``None`` when no trace is attached."""
        if not self.trace:
            return None
        return self.trace[-1]

    @property
    def last_position(self) -> int | None:
        entry = self.last_entry
        return entry.position if entry is not None else None

    @property
    def last_step_id(self) -> StepID | None:
        entry = self.last_entry
        return entry.step_id if entry is not None else None

    @property
    def last_value(self) -> Any:
        entry = self.last_entry
        return entry.value if entry is not None else None

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["fault_name"] = self.fault_name
        if self.trace is not None:
            result["trace_length"] = len(self.trace)
            last = self.last_entry
            if last is not None:
                result["last_step"] = last.to_dict()
        return result


class RegistryError(PipelineFault):
    """Base class for registration and lookup errors."""

    default_category = ErrorCategory.REGISTRY


class InvalidStepSignature(RegistryError):
    """Raised when a registration call has a malformed argument shape."""


class UnknownStepID(RegistryError):
    """Raised when removing a step whose identifier is not mapped."""


class DuplicateStepID(RegistryError):
    """Raised when registering an explicit name that is already mapped."""


class UnknownJumpTarget(PipelineFault):
    """Raised when a step jumps to an identifier absent from the registry."""

    @property
    def target(self) -> Any:
        return self.context.metadata.get("target")


class StepBodyFault(PipelineFault):
    """Raised when a step body (or the halt handler) raises."""


class UnresolvedStep(PipelineFault):
    """Raised when a synchronous step returns without signalling."""


def wrap(
    fault: BaseException | str,
    trace: Iterable[TraceEntry] | None = None,
    *,
    kind: type[PipelineFault] | None = None,
) -> PipelineFault:
    """Build the fault object for a failed run.

    Args:
        fault: The exception a step raised, or a message describing the fault.
        trace: Trace entries to attach (debug runs only).
        kind: Fault class to build.  Defaults to :class:`StepBodyFault` for
            exceptions and :class:`PipelineFault` for messages.
    """
    if isinstance(fault, BaseException):
        return (kind or StepBodyFault).from_exception(fault, trace)
    return (kind or PipelineFault)(str(fault), trace=trace)


def report(err: BaseException) -> None:
    """Write ``err`` and any attached trace to the structured log."""
    if isinstance(err, PipelineFault):
        logger.error("pipeline.fault", **err.to_dict())
        if err.trace:
            logger.error(
                "pipeline.fault.trace",
                steps=[entry.to_dict() for entry in err.trace],
            )
        if err.original_traceback:
            logger.error("pipeline.fault.traceback", traceback=err.original_traceback)
    else:
        logger.error("pipeline.error", error=str(err), error_type=type(err).__name__)


__all__ = [
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
]

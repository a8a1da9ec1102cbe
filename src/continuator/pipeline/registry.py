"""Step Registry — ordered steps plus their identifier map.

The registry stores step callables in order and keeps a map from explicit
names to positions.  Every position is always addressable by its implicit
identifier ``Index(position)``; a named step additionally answers to its
``Name``.

ARCHITECTURE
────────────
::

    StepRegistry
      ├── add_step(fn)                                 → Index(n)
      ├── add_step_with_context(fn, context)           → Index(n)
      ├── add_named_step(name, fn)                     → Name(name)
      ├── add_named_step_with_context(name, fn, ctx)   → Name(name)
      ├── step(*args)           ── dispatch on argument shape to the four above
      ├── remove_step(step_id)  ── delete + renumber
      ├── identifier_of(pos)    ── Name, else Index, else None
      ├── resolve(step_id)      ── position or None
      └── compose(other, overwrite)

    InvalidStepSignature ── malformed registration
    DuplicateStepID      ── explicit name already mapped
    UnknownStepID        ── removal of an unmapped id

Steps registered "with context" are invoked as
``step(context, value, advance, halt, jump)``; the context is bound with
:func:`functools.partial` at registration time.

Removal renumbers: later steps move down one position, so their implicit
``Index`` identifiers shift, and names that pointed past the removed step are
decremented so they keep naming the same step body.

The registry is not locked.  Mutating it while a run is in progress is the
caller's responsibility.

Example::

    registry = StepRegistry()
    registry.add_named_step("double", lambda v, advance, halt, jump: advance(v * 2))
    registry.add_step(lambda v, advance, halt, jump: advance(v + 1))
    registry.identifier_of(0)   # Name("double")
    registry.identifier_of(1)   # Index(1)
"""

from __future__ import annotations

import functools
import numbers
from collections.abc import Callable, Iterator, Mapping, Sequence
from typing import Any, Self

from continuator.core.logging import get_logger
from continuator.pipeline.composition import compose
from continuator.pipeline.exceptions import (
    DuplicateStepID,
    InvalidStepSignature,
    UnknownStepID,
)
from continuator.pipeline.step_id import (
    Index,
    Name,
    StepID,
    StepRef,
    as_step_id,
    is_valid_name,
)

logger = get_logger(__name__)

StepFn = Callable[..., Any]
StepCollection = Sequence[StepFn] | Mapping[str, StepFn]


def _signature(args: Sequence[Any]) -> str:
    """Describe an argument list by type, e.g. ``"str,function"``."""
    parts = []
    for arg in args:
        if isinstance(arg, str):
            parts.append("str")
        elif callable(arg):
            parts.append("function")
        else:
            parts.append(type(arg).__name__)
    return ",".join(parts)


def _is_context(arg: Any) -> bool:
    """Contexts are plain objects: not names, numbers or step functions."""
    return not isinstance(arg, (str, numbers.Number)) and not callable(arg)


class StepRegistry:
    """Ordered container of steps addressable by position or name.

    Args:
        steps: Optional initial steps — a sequence of callables (implicit
            ids) or a mapping of name to callable (explicit ids).
    """

    def __init__(self, steps: StepCollection | None = None) -> None:
        self._steps: list[StepFn] = []
        self._names: dict[str, int] = {}
        # Reverse of _names
        self._positions: dict[int, str] = {}

        if steps is None:
            return
        if isinstance(steps, Mapping):
            for name, fn in steps.items():
                self.add_named_step(name, fn)
        elif isinstance(steps, Sequence) and not isinstance(steps, (str, bytes)):
            for fn in steps:
                self.add_step(fn)
        else:
            raise InvalidStepSignature(
                "Steps must be a sequence of callables or a mapping of name to callable"
            )

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_step(self, fn: StepFn) -> Self:
        """Append ``fn``; its identifier is its position."""
        self._append(fn)
        return self

    def add_step_with_context(self, fn: StepFn, context: Any) -> Self:
        """Append ``fn``, invoked with ``context`` as its first argument."""
        self._check_callable(fn)
        self._append(functools.partial(fn, context))
        return self

    def add_named_step(self, name: str, fn: StepFn) -> Self:
        """Append ``fn`` under the explicit identifier ``name``."""
        self._append(fn, name)
        return self

    def add_named_step_with_context(self, name: str, fn: StepFn, context: Any) -> Self:
        """Append ``fn`` under ``name``, invoked with ``context`` first."""
        self._check_callable(fn)
        self._append(functools.partial(fn, context), name)
        return self

    def step(self, *args: Any) -> Self:
        """Register a step from any of the four argument shapes.

        ``(fn)``, ``(fn, context)``, ``(name, fn)`` and ``(name, fn, context)``
        route to the matching named operation.  A context must be a plain
        object: strings, numbers and callables in the context slot are
        rejected.  Prefer calling the named operations directly; this exists
        for callers that build registrations dynamically.

        Raises:
            InvalidStepSignature: For any other argument shape.
        """
        if len(args) == 1 and callable(args[0]):
            return self.add_step(args[0])
        if len(args) == 2 and isinstance(args[0], str) and callable(args[1]):
            return self.add_named_step(args[0], args[1])
        if len(args) == 2 and callable(args[0]) and _is_context(args[1]):
            return self.add_step_with_context(args[0], args[1])
        if (
            len(args) == 3
            and isinstance(args[0], str)
            and callable(args[1])
            and _is_context(args[2])
        ):
            return self.add_named_step_with_context(args[0], args[1], args[2])

        signature = _signature(args)
        raise InvalidStepSignature(f"Invalid step signature: {signature}").with_context(
            signature=signature
        )

    def _append(self, fn: StepFn, name: str | None = None) -> None:
        self._check_callable(fn)
        if name is not None:
            self._check_name(name)

        self._steps.append(fn)
        position = len(self._steps) - 1
        if name is not None:
            self._names[name] = position
            self._positions[position] = name

    def _check_callable(self, fn: Any) -> None:
        if not callable(fn):
            raise InvalidStepSignature(
                f"Step must be callable, got {type(fn).__name__}"
            )

    def _check_name(self, name: Any) -> None:
        if not is_valid_name(name):
            raise InvalidStepSignature(
                f"Step name must be a non-numeric, non-empty string, got {name!r}"
            )
        if name in self._names:
            raise DuplicateStepID(f"Step id already registered: {name!r}").with_context(
                step=name, position=self._names[name]
            )

    # ------------------------------------------------------------------
    # Removal
    # ------------------------------------------------------------------

    def remove_step(self, ref: StepRef) -> Self:
        """Remove the step identified by ``ref`` and renumber the rest.

        Raises:
            UnknownStepID: If ``ref`` is not mapped.
        """
        position = self.resolve(ref)
        if position is None:
            raise UnknownStepID(f"Cannot remove step of unknown id {ref!r}").with_context(
                step=str(ref)
            )

        del self._steps[position]
        renumbered: dict[str, int] = {}
        for name, mapped in self._names.items():
            if mapped == position:
                continue
            renumbered[name] = mapped - 1 if mapped > position else mapped
        self._names = renumbered
        self._positions = {mapped: name for name, mapped in renumbered.items()}

        logger.debug("pipeline.step.removed", step=str(ref), position=position)
        return self

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def resolve(self, ref: Any) -> int | None:
        """Return the position for ``ref``, or ``None`` if it is not mapped."""
        try:
            step_id = as_step_id(ref)
        except TypeError:
            return None

        if isinstance(step_id, Name):
            return self._names.get(step_id.name)
        if 0 <= step_id.position < len(self._steps):
            return step_id.position
        return None

    def identifier_of(self, position: int) -> StepID | None:
        """Return the identifier for ``position``.

        The step's ``Name`` if it has one, otherwise ``Index(position)``;
        ``None`` when ``position`` is out of range.
        """
        name = self._positions.get(position)
        if name is not None:
            return Name(name)
        if 0 <= position < len(self._steps):
            return Index(position)
        return None

    def step_at(self, position: int) -> StepFn:
        return self._steps[position]

    def replace_step_at(self, position: int, fn: StepFn) -> None:
        """Swap the body at ``position`` keeping its identifiers."""
        self._check_callable(fn)
        self._steps[position] = fn

    @property
    def steps(self) -> tuple[StepFn, ...]:
        return tuple(self._steps)

    @property
    def names(self) -> dict[str, int]:
        """Explicit name → position map (a copy)."""
        return dict(self._names)

    @property
    def step_ids(self) -> dict[StepID, int]:
        """One identifier per position: its name if named, else its index."""
        return {self.identifier_of(pos): pos for pos in range(len(self._steps))}

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[tuple[StepID, StepFn]]:
        for position, fn in enumerate(self._steps):
            yield self.identifier_of(position), fn

    def __contains__(self, ref: object) -> bool:
        return self.resolve(ref) is not None

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    def compose(self, source: StepRegistry, overwrite: bool = False) -> Self:
        """Merge ``source`` into this registry (see :func:`compose`)."""
        compose(self, source, overwrite)
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}(steps={len(self._steps)}, names={list(self._names)})"


__all__ = ["StepRegistry", "StepFn", "StepCollection"]

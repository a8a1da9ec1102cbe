"""Step identifiers — implicit positions and explicit names.

A step is addressed either by its position (``Index``) or by a name given at
registration (``Name``).  The two are distinct types, so ``Index(3)`` and
``Name("3")`` never collide; names that *look* numeric are rejected at
registration instead.

ARCHITECTURE
────────────
::

    StepID = Index | Name

    as_step_id(3)          → Index(3)
    as_step_id("parse")    → Name("parse")
    as_step_id(Name("x"))  → Name("x")

Example::

    from continuator.pipeline.step_id import Index, Name, as_step_id

    assert as_step_id("double") == Name("double")
    assert str(Index(0)) == "0"
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

_NUMERIC = re.compile(r"^\s*[+-]?\d+(\.\d*)?\s*$")


@dataclass(frozen=True)
class Index:
    """Implicit identifier: the step's position in the registry."""

    position: int

    def __str__(self) -> str:
        return str(self.position)


@dataclass(frozen=True)
class Name:
    """Explicit identifier given at registration."""

    name: str

    def __str__(self) -> str:
        return self.name


StepID = Union[Index, Name]
StepRef = Union[Index, Name, int, str]


def is_valid_name(name: object) -> bool:
    """True for a non-empty string that does not look like a number."""
    return isinstance(name, str) and bool(name.strip()) and not _NUMERIC.match(name)


def as_step_id(ref: StepRef) -> StepID:
    """Convert a caller-supplied reference into a :data:`StepID`.

    ``int`` becomes :class:`Index`, ``str`` becomes :class:`Name`.  Anything
    else raises ``TypeError``.
    """
    if isinstance(ref, (Index, Name)):
        return ref
    # bool is an int subclass; True is not a position
    if isinstance(ref, bool):
        raise TypeError(f"Not a step identifier: {ref!r}")
    if isinstance(ref, int):
        return Index(ref)
    if isinstance(ref, str):
        return Name(ref)
    raise TypeError(f"Not a step identifier: {ref!r}")


__all__ = ["Index", "Name", "StepID", "StepRef", "as_step_id", "is_valid_name"]

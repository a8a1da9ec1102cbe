"""Trampoline — run a chain of deferred calls without growing the stack.

A function that would normally recurse instead returns a :class:`Bounce`
describing the next call.  :func:`trampoline` keeps calling until a plain
value comes back.  Using an explicit marker type (rather than "any callable")
means a pipeline whose final value happens to be a function still terminates
correctly.

Example::

    def countdown(n):
        if n == 0:
            return "done"
        return Bounce(countdown, n - 1)

    trampoline(countdown, 100_000)   # "done", constant stack depth
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any


class Bounce:
    """A deferred call: ``fn(*args)`` to be made by the trampoline."""

    __slots__ = ("fn", "args")

    def __init__(self, fn: Callable[..., Any], *args: Any) -> None:
        self.fn = fn
        self.args = args

    def __call__(self) -> Any:
        return self.fn(*self.args)

    def __repr__(self) -> str:
        name = getattr(self.fn, "__qualname__", repr(self.fn))
        return f"Bounce({name})"


def trampoline(fn: Callable[..., Any], *args: Any) -> Any:
    """Call ``fn(*args)`` and keep following returned bounces."""
    result = fn(*args)
    while isinstance(result, Bounce):
        result = result()
    return result


__all__ = ["Bounce", "trampoline"]

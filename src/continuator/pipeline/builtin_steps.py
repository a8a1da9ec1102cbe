"""Reusable steps."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from continuator.core.logging import get_logger

logger = get_logger(__name__)


def log_step(
    value: Any,
    advance: Callable[[Any], Any] | None = None,
    halt: Callable[[Any], Any] | None = None,
    jump: Callable[[Any], Any] | None = None,
) -> Any:
    """Log ``value`` and pass it through unchanged.

    The value is forwarded through ``advance`` when given, else through
    ``halt``.  Called without callbacks it returns the value.
    """
    logger.info("pipeline.log", value=value)
    if advance is not None:
        return advance(value)
    if halt is not None:
        return halt(value)
    return value


__all__ = ["log_step"]

"""Composition — merge one step registry into another.

``compose(target, source, overwrite)`` walks the source registry in position
order and folds each step into the target:

============================  ===============================================
Source step                   Effect on target
============================  ===============================================
named, name already in target ``overwrite=True``: replace the body at the
                              target's position for that name.
                              ``overwrite=False``: append as an unnamed
                              step; the target keeps its own mapping.
named, name not in target     append; map the name to the new position.
unnamed                       append; its identifier is the new position.
============================  ===============================================

Positions never carry over between registries, so a source step that jumps to
a *numeric* identifier is not guaranteed to land on the same step after
composition.  Jump by name when composing.

Composition never reorders the target's existing steps and returns the target
so calls can be chained.

Example::

    base = StepRegistry().add_named_step("parse", parse).add_step(store)
    extra = StepRegistry().add_named_step("parse", parse_v2).add_step(audit)

    compose(base, extra, overwrite=True)
    # base: parse_v2 (position 0, "parse"), store, audit
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from continuator.core.logging import get_logger
from continuator.pipeline.step_id import Name

if TYPE_CHECKING:
    from continuator.pipeline.registry import StepRegistry

logger = get_logger(__name__)


def compose(
    target: StepRegistry,
    source: StepRegistry,
    overwrite: bool = False,
) -> StepRegistry:
    """Merge ``source`` into ``target`` in place and return ``target``.

    Parameters
    ----------
    target
        Registry that receives the steps.
    source
        Registry whose steps are merged.  It is not modified.
    overwrite
        Replace target steps whose name collides with a source name.

    Returns
    -------
    StepRegistry
        ``target``, for chaining.
    """
    # Snapshot first: composing a registry with itself must terminate
    incoming = list(source)

    appended = replaced = 0
    for step_id, fn in incoming:
        if isinstance(step_id, Name):
            position = target.resolve(step_id)
            if position is not None:
                if overwrite:
                    target.replace_step_at(position, fn)
                    replaced += 1
                    continue
                target.add_step(fn)
            else:
                target.add_named_step(step_id.name, fn)
        else:
            target.add_step(fn)
        appended += 1

    logger.debug(
        "pipeline.composed",
        source_steps=len(incoming),
        appended=appended,
        replaced=replaced,
        overwrite=overwrite,
    )
    return target


__all__ = ["compose"]

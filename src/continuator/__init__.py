"""
Continuator - sequential pipelines driven by explicit control signals.

Each step receives the current value plus three callbacks (``advance``,
``halt``, ``jump``) and decides where the run goes next.

- continuator.core: errors, structured logging, settings
- continuator.pipeline: registry, composition, sync and async engines
"""

__version__ = "0.1.0"

from continuator.pipeline import (
    Advance,
    Halt,
    Index,
    Jump,
    Name,
    Pipeline,
    PipelineFault,
    StepRegistry,
    compose,
    log_step,
)

__all__ = [
    "__version__",
    "Advance",
    "Halt",
    "Index",
    "Jump",
    "Name",
    "Pipeline",
    "PipelineFault",
    "StepRegistry",
    "compose",
    "log_step",
]

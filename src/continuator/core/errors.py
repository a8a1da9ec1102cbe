"""
Structured error types for Continuator.

Every error raised by the library extends :class:`ContinuatorError`, so callers
can catch the whole family with one ``except`` clause while still getting
typed metadata for logging and reporting.

Manifesto:
    - **Typed Error Hierarchy:** Different error types for different concerns
    - **Rich Context:** Errors carry pipeline/step metadata for logging
    - **Error Chaining:** Preserve original exceptions while adding context

Architecture:
    ::

        ┌──────────────────────────────────────────────────────┐
        │                  ContinuatorError                     │
        │          (category, context, cause)                   │
        ├──────────────────────────────────────────────────────┤
        │   ConfigError            PipelineFault                │
        │   (CONFIG)               (PIPELINE, see               │
        │                           continuator.pipeline.       │
        │                           exceptions)                 │
        └──────────────────────────────────────────────────────┘

Examples:
    Adding context to an error:

    >>> error = ContinuatorError("Step failed")
    >>> error.with_context(pipeline="etl", step="parse")
    ContinuatorError('Step failed', category=INTERNAL)
    >>> error.context.step
    'parse'

    Chaining errors for root cause:

    >>> try:
    ...     raise KeyError("missing")
    ... except KeyError as e:
    ...     error = ContinuatorError("Lookup failed", cause=e)
    >>> error.cause
    KeyError('missing')

Tags:
    error-handling, exception-hierarchy, error-context, continuator

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification.

    Attributes:
        REGISTRY: Malformed registration, unknown or duplicate step ids
        PIPELINE: Run-time faults (step bodies, jumps, unresolved steps)
        CONFIG: Missing or invalid settings
        INTERNAL: Bugs, unexpected state
        UNKNOWN: Uncategorized errors
    """

    REGISTRY = "REGISTRY"  # Step registration and lookup
    PIPELINE = "PIPELINE"  # Run-time faults
    CONFIG = "CONFIG"  # Missing config, invalid settings
    INTERNAL = "INTERNAL"  # Bugs, unexpected state
    UNKNOWN = "UNKNOWN"  # Uncategorized errors


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Only fields that are set are serialized by :meth:`to_dict`; anything that
    does not fit a typed field goes into ``metadata``.

    Attributes:
        pipeline: Name of the pipeline where the error occurred
        step: Identifier of the step (rendered as a string)
        position: Position of the step in the registry
        run_id: Run identifier
        metadata: Additional key-value pairs
    """

    pipeline: str | None = None
    step: str | None = None
    position: int | None = None
    run_id: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["pipeline", "step", "position", "run_id"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class ContinuatorError(Exception):
    """
    Base exception for all Continuator errors.

    Subclasses set ``default_category`` to classify themselves; instances may
    override it per call.

    Attributes:
        message: Human-readable message
        category: ErrorCategory for classification
        context: ErrorContext with structured metadata
        cause: Optional underlying exception (also set as ``__cause__``)
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> ContinuatorError:
        """
        Add context to this error (fluent API).

        Usage:
            raise ContinuatorError("Failed").with_context(pipeline="etl", step="load")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


class ConfigError(ContinuatorError):
    """Missing or invalid configuration."""

    default_category = ErrorCategory.CONFIG


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "ContinuatorError",
    "ConfigError",
]

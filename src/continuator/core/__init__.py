"""Continuator core primitives: errors, logging, settings."""

from continuator.core.errors import (
    ConfigError,
    ContinuatorError,
    ErrorCategory,
    ErrorContext,
)
from continuator.core.logging import (
    LogContext,
    bind_context,
    configure_from_settings,
    configure_logging,
    get_logger,
)
from continuator.core.settings import ContinuatorSettings, get_settings

__all__ = [
    "ConfigError",
    "ContinuatorError",
    "ErrorCategory",
    "ErrorContext",
    "LogContext",
    "bind_context",
    "configure_from_settings",
    "configure_logging",
    "get_logger",
    "ContinuatorSettings",
    "get_settings",
]

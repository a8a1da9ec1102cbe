"""Settings for Continuator.

Configuration is explicit, validated, and environment-driven. Every field can
be set through a ``CONTINUATOR_*`` environment variable (for example
``CONTINUATOR_MAX_TRACE_ENTRIES=500``) or a ``.env`` file.

Fields
──────
log_level          : Structlog log level
log_format         : ``console`` or ``json`` renderer
service_name       : Service name attached to log events
debug              : Route ``Pipeline.run`` through the debug tracer
max_trace_entries  : Cap on retained trace entries (``None`` = unbounded)
trace_values       : Include step input values in ``pipeline.trace`` events

Examples:
    >>> from continuator.core.settings import get_settings
    >>> settings = get_settings()
    >>> settings.max_trace_entries is None
    True

Tags:
    settings, configuration, pydantic, environment, continuator

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from continuator.core.errors import ConfigError


class ContinuatorSettings(BaseSettings):
    """Continuator configuration."""

    model_config = SettingsConfigDict(
        env_prefix="CONTINUATOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = Field(default="INFO", description="Structlog log level")
    log_format: Literal["console", "json"] = Field(default="console")
    service_name: str = Field(default="continuator")

    # ── Debug tracing ────────────────────────────────────────────
    debug: bool = Field(default=False, description="Trace every run, not only debug()")
    max_trace_entries: int | None = Field(
        default=None,
        ge=1,
        description="Keep only the most recent N trace entries",
    )
    trace_values: bool = Field(default=True, description="Log step values in trace events")

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return level


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: ContinuatorSettings | None = None


def get_settings(*, _force_reload: bool = False) -> ContinuatorSettings:
    """Load, validate, and cache a :class:`ContinuatorSettings` instance.

    Raises:
        ConfigError: If an environment value fails validation.
    """
    global _settings_cache

    if _settings_cache is not None and not _force_reload:
        return _settings_cache

    try:
        _settings_cache = ContinuatorSettings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid continuator settings: {exc}", cause=exc) from exc
    return _settings_cache


def clear_settings_cache() -> None:
    """Drop the cached settings (for tests)."""
    global _settings_cache
    _settings_cache = None


__all__ = ["ContinuatorSettings", "get_settings", "clear_settings_cache"]

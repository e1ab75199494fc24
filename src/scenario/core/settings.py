"""Runtime settings for scenario.

The types themselves are pure, so there is little to configure: how chatty
the library is, whether ``inspect(None, fn)`` runs, and how strictly signal
handlers are held to their "never return" contract.

Fields
──────
debug                  : Verbose (debug-level) logging; default ``inspect`` condition
strict_signal_handlers : Raise SignalHandlerReturnedError when a handler returns
log_level              : Structlog log level used by configure_logging_from_settings()
log_json               : JSON output (True), console (False), auto-detect (None)

Examples:
    >>> import os
    >>> os.environ["SCENARIO_DEBUG"] = "true"
    >>> get_settings.cache_clear()
    >>> get_settings().debug
    True

Tags:
    settings, configuration, pydantic, environment, scenario-core
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Callable

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from scenario.core.logging import configure_logging


class ScenarioSettings(BaseSettings):
    """Settings read from ``SCENARIO_*`` environment variables and ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="SCENARIO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Behaviour ────────────────────────────────────────────────
    debug: bool = False
    strict_signal_handlers: bool = Field(
        default=True,
        description="Raise when a signal handler returns instead of raising",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    log_json: bool | None = None

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level


@lru_cache
def get_settings() -> ScenarioSettings:
    """Get cached settings instance."""
    return ScenarioSettings()


def should_run(condition: bool | Callable[[], bool] | None) -> bool:
    """Resolve an ``inspect`` condition; ``None`` defers to ``debug``."""
    if condition is None:
        return get_settings().debug
    if callable(condition):
        return bool(condition())
    return bool(condition)


def configure_logging_from_settings(settings: ScenarioSettings | None = None) -> None:
    """Apply ``log_level``/``log_json`` via configure_logging()."""
    settings = settings or get_settings()
    configure_logging(level=settings.log_level, json_format=settings.log_json)


__all__ = [
    "ScenarioSettings",
    "get_settings",
    "should_run",
    "configure_logging_from_settings",
]

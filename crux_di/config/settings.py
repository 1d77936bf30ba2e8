"""Typed container settings.

Purpose
-------
Capture the few knobs the container honours in a validated parameter
object, built by merging sources in a predictable order:

1. Built-in defaults (``config.defaults``)
2. Environment variables (``CRUX_DI_*``)
3. In-code overrides passed to :func:`get_container_settings`

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and ``.model_dump()``.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from .defaults import DEFAULT_JSON_LOGS, DEFAULT_LOG_LEVEL, DEFAULT_WARN_ON_AMBIGUOUS
from .env import env_overrides

_LEVEL_NAMES = ("DEBUG", "INFO", "WARN", "WARNING", "ERROR", "CRITICAL")


class ContainerSettings(BaseModel):
    """Settings consumed by :class:`crux_di.di.DIContainer`.

    Attributes
    ----------
    log_level:
        Level name for the shared ``crux_di`` logger.
    json_logs:
        Emit JSON lines (``True``) or plain text records.
    warn_on_ambiguous:
        Log ``container.field.ambiguous`` at WARNING when a field matches
        more than one bean; otherwise the event is logged at DEBUG.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    log_level: str = DEFAULT_LOG_LEVEL
    json_logs: bool = DEFAULT_JSON_LOGS
    warn_on_ambiguous: bool = DEFAULT_WARN_ON_AMBIGUOUS

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        name = value.strip().upper()
        if name not in _LEVEL_NAMES:
            raise ValueError(f"unknown log level '{value}'")
        return name

    @property
    def level_no(self) -> int:
        return logging.getLevelName("WARNING" if self.log_level == "WARN" else self.log_level)


def get_container_settings(overrides: Optional[Dict[str, Any]] = None) -> ContainerSettings:
    """Return merged container settings.

    Merge order (later wins): defaults -> env vars -> overrides. ``None``
    override values are ignored.

    Raises
    ------
    pydantic.ValidationError
        When a merged value fails validation (unknown level, bad boolean).
    """
    cfg: Dict[str, Any] = {}
    cfg |= env_overrides()
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return ContainerSettings(**cfg)


__all__ = ["ContainerSettings", "get_container_settings"]

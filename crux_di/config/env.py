"""crux_di.config.env
==================

Environment variable mapping and small parsing helpers for container
settings.

Failure Modes
-------------
- Helpers never raise on unset variables; unknown boolean spellings are
  passed through unchanged so settings validation can reject them with a
  precise message.
"""

from __future__ import annotations

import os
from typing import Any, Dict, Optional

from .defaults import ENV_JSON_LOGS, ENV_LOG_LEVEL, ENV_WARN_ON_AMBIGUOUS

# Settings field -> environment variable
ENV_FIELD_MAP: Dict[str, str] = {
    "log_level": ENV_LOG_LEVEL,
    "json_logs": ENV_JSON_LOGS,
    "warn_on_ambiguous": ENV_WARN_ON_AMBIGUOUS,
}

_TRUTHY = frozenset(("1", "true", "yes", "on"))
_FALSY = frozenset(("0", "false", "no", "off", ""))


def parse_bool(val: Optional[str]) -> Optional[bool | str]:
    """Interpret a boolean-ish environment string.

    Returns ``None`` for ``None`` input, ``True``/``False`` for common
    spellings (case-insensitive, surrounding spaces ignored) and the original
    string otherwise.
    """
    if val is None:
        return None
    v = val.strip().lower()
    if v in _TRUTHY:
        return True
    if v in _FALSY:
        return False
    return val


def env_overrides() -> Dict[str, Any]:
    """Collect settings values present in the process environment."""
    out: Dict[str, Any] = {}
    for field, name in ENV_FIELD_MAP.items():
        raw = os.getenv(name)
        if raw is None:
            continue
        out[field] = raw.strip() if field == "log_level" else parse_bool(raw)
    return out


__all__ = ["ENV_FIELD_MAP", "parse_bool", "env_overrides"]

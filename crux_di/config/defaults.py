"""crux_di.config.defaults
=======================

Central place for small, stable default values used across the container
package. These defaults can be overridden via environment variables or
explicit overrides, but provide sensible fallbacks for local development
and tests.

This module intentionally avoids importing from other crux_di packages to
prevent circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Logging ----
# Name of the shared base logger; every container logger is a child of it.
BASE_LOGGER_NAME = "crux_di"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_JSON_LOGS = True

# ---- Bootstrap ----
# Emit a warning event when a field matches more than one bean.
DEFAULT_WARN_ON_AMBIGUOUS = True

# ---- Environment variable names ----
ENV_LOG_LEVEL = "CRUX_DI_LOG_LEVEL"
ENV_JSON_LOGS = "CRUX_DI_JSON_LOGS"
ENV_WARN_ON_AMBIGUOUS = "CRUX_DI_WARN_AMBIGUOUS"


__all__ = [
    "BASE_LOGGER_NAME",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_JSON_LOGS",
    "DEFAULT_WARN_ON_AMBIGUOUS",
    "ENV_LOG_LEVEL",
    "ENV_JSON_LOGS",
    "ENV_WARN_ON_AMBIGUOUS",
]

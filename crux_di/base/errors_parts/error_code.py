"""
Normalized container error codes (taxonomy).

Defines the `ErrorCode` enumeration used by the bootstrap phases and the
error classification helper. Values are lowercase snake_case and are
considered a stable public contract for logging.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing bootstrap failure categories."""

    NOT_A_TYPE = "not_a_type"
    ABSTRACT_TYPE = "abstract_type"
    MISSING_CONSTRUCTOR = "missing_constructor"
    CONSTRUCTOR_FAILED = "constructor_failed"
    FIELD_WRITE_FAILED = "field_write_failed"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]

"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

The container classifies most failures up front (see ``di.introspection``);
this helper covers exceptions surfacing from user code where only the
exception object is available.
"""
from __future__ import annotations

from .container_error import ContainerError
from .error_code import ErrorCode


_TYPE_ERROR_PATTERNS = (
    (ErrorCode.ABSTRACT_TYPE, ("abstract class",)),
    (ErrorCode.ABSTRACT_TYPE, ("protocols cannot be instantiated",)),
    (ErrorCode.MISSING_CONSTRUCTOR, ("required positional argument",)),
    (ErrorCode.MISSING_CONSTRUCTOR, ("required keyword-only argument",)),
)


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ContainerError passthrough.
        2. ``AttributeError`` (failed attribute write).
        3. ``TypeError`` message heuristics for constructor problems.
        4. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ContainerError):
        return exc.code
    if isinstance(exc, AttributeError):
        return ErrorCode.FIELD_WRITE_FAILED
    if isinstance(exc, TypeError):
        msg = str(exc).lower()
        for code, patterns in _TYPE_ERROR_PATTERNS:
            if any(p in msg for p in patterns):
                return code
    return ErrorCode.UNKNOWN


__all__ = ["classify_exception"]

"""
Structured container error exception type.

Wraps failures raised while instantiating or wiring beans with a normalized
`ErrorCode` so callers receive a single clearly-labeled failure identifying
the offending type or field.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ContainerError(Exception):
    """Represents a fatal bootstrap failure with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        bean_type: Qualified name of the candidate type being built or wired.
        field_name: Field name when the failure happened during injection.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    bean_type: str
    field_name: Optional[str] = None
    raw: Optional[BaseException] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining owner type, field, code, and message."""
        where = f"{self.bean_type}.{self.field_name}" if self.field_name else self.bean_type
        return f"{where} {self.code.value}: {self.message}"


# Name used by callers that think in terms of the bootstrap contract.
BootstrapError = ContainerError


__all__ = ["ContainerError", "BootstrapError"]

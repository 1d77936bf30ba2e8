"""Structured logging context object for container events.

:class:`LogContext` carries the fields shared by bootstrap events (bean
type, field, phase) plus an ``extra`` bag. ``to_dict`` merges ``extra`` and
prunes ``None`` values for clean structured output.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for container logging events."""

    bean_type: Optional[str] = None
    field_name: Optional[str] = None
    phase: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]

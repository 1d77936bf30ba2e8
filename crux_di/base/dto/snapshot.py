"""Wiring snapshot DTOs returned by ``DIContainer.describe()``.

Purpose
-------
Expose a read-only, JSON-friendly record of what the bootstrap did: which
beans exist, which fields were injected with what, and which fields were
left at their default.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and `.model_dump()` convenience.
"""
from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class BeanInfo(BaseModel):
    """Wiring outcome for a single bean.

    Attributes
    ----------
    type_name:
        Qualified name of the bean's class.
    injected:
        Field name -> qualified class name of the injected bean.
    unresolved:
        Fields whose declared type matched no bean (left at default).
    skipped:
        ``Final`` and ``ClassVar`` annotations, never written.
    """

    model_config = ConfigDict(frozen=True)

    type_name: str
    injected: Dict[str, str] = Field(default_factory=dict)
    unresolved: List[str] = Field(default_factory=list)
    skipped: List[str] = Field(default_factory=list)


class ContainerSnapshot(BaseModel):
    """Snapshot of the instance pool after bootstrap, in pool order."""

    model_config = ConfigDict(frozen=True)

    beans: List[BeanInfo] = Field(default_factory=list)

    def bean(self, type_name: str) -> Optional[BeanInfo]:
        """Return the entry for ``type_name``.

        An exact qualified name always wins. Otherwise a short or partially
        qualified name (``"Repo"``, ``"store.Repo"``) is accepted when exactly
        one entry ends with it; ``None`` is returned when it is ambiguous or
        unknown.
        """
        suffix = "." + type_name
        partial: List[BeanInfo] = []
        for info in self.beans:
            if info.type_name == type_name:
                return info
            if info.type_name.endswith(suffix):
                partial.append(info)
        return partial[0] if len(partial) == 1 else None


__all__ = ["BeanInfo", "ContainerSnapshot"]

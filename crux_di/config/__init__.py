"""Configuration layer for the container.

Public API
----------
* ContainerSettings
* get_container_settings(overrides: dict | None = None) -> ContainerSettings
"""
from __future__ import annotations

from .settings import ContainerSettings, get_container_settings

__all__ = ["ContainerSettings", "get_container_settings"]

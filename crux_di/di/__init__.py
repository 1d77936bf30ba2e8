"""Dependency injection container entry points.

The container consumes an already-discovered set of classes; how those
classes are found is up to the caller.
"""
from __future__ import annotations

from .container import DIContainer, build_container

__all__ = ["DIContainer", "build_container"]

"""Shared testing utilities for container tests.

Exports:
    - assert_true(condition: bool, message: str) -> None
    - events_named(events, name) -> list of payloads with that event name
"""
from __future__ import annotations

from typing import Any, Dict, List


def assert_true(condition: bool, message: str) -> None:
    """Raise AssertionError with the provided message if condition is False."""
    if not condition:
        raise AssertionError(message)


def events_named(events: List[Dict[str, Any]], name: str) -> List[Dict[str, Any]]:
    """Return the captured structured payloads whose ``event`` equals ``name``."""
    return [e for e in events if e.get("event") == name]

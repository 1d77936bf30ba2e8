"""Pytest configuration for the container test suite.

Keeps the ``CRUX_DI_*`` environment out of the tests and offers a fixture
collecting the structured events emitted by the shared ``crux_di`` logger.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterator, List

import pytest

from crux_di.base.logging import configure_logger, get_logger
from crux_di.config.env import ENV_FIELD_MAP


class _EventCollector(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.NOTSET)
        self.events: List[Dict[str, Any]] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            payload = json.loads(record.getMessage())
        except ValueError:
            return
        if isinstance(payload, dict):
            payload["_level"] = record.levelname
            self.events.append(payload)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove container settings variables for the duration of a test."""
    for name in ENV_FIELD_MAP.values():
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_log_level() -> None:
    """Start every test with the shared logger at INFO."""
    configure_logger(level=logging.INFO)


@pytest.fixture()
def captured_events() -> Iterator[List[Dict[str, Any]]]:
    """Yield the list of structured payloads logged under ``crux_di``."""
    collector = _EventCollector()
    # initialise first; the first setup replaces the base handler list
    base = get_logger()
    base.addHandler(collector)
    try:
        yield collector.events
    finally:
        base.removeHandler(collector)

"""Pytest configuration for the provider layer test suite.

Every test runs with configuration isolated from the developer machine: no
``.env`` file, no external config file, and a fresh config cache. Network
access is never needed; HTTP is faked with ``httpx.MockTransport``.
"""

from __future__ import annotations

import json
import logging
from typing import Iterator, List

import pytest

from unified_providers.config import reset_config_cache


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Point config loading away from real files for the duration of a test."""

    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    monkeypatch.delenv("PROVIDERS_CONFIG_FILE", raising=False)
    reset_config_cache()
    yield
    reset_config_cache()


class _ListHandler(logging.Handler):
    """Capture decoded JSON log payloads into a list."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.events: List[dict] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.events.append(json.loads(record.getMessage()))
        except ValueError:
            self.events.append({"event": record.getMessage()})


@pytest.fixture()
def provider_logs(monkeypatch: pytest.MonkeyPatch) -> Iterator[List[dict]]:
    """Collect structured events written under the ``providers`` logger.

    The base logger does not propagate to root, so the handler is attached
    to it directly. ``PROVIDERS_LOG_LEVEL`` is raised for the test because
    ``get_logger`` re-reads it whenever an adapter is constructed.
    """

    monkeypatch.setenv("PROVIDERS_LOG_LEVEL", "DEBUG")
    logger = logging.getLogger("providers")
    handler = _ListHandler()
    previous = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        yield handler.events
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous)

"""Shared fixtures for chat-graph tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest

_CONFIG_VARS = (
    "LOG_LEVEL",
    "CHAT_GRAPH_INITIATION_MARKERS",
    "CHAT_GRAPH_AMBIGUOUS_MARKERS",
    "CHAT_GRAPH_COMPOUND_SEPARATOR",
    "CHAT_GRAPH_MIN_EDGE_WEIGHT",
)


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove all chat-graph environment variables.

    Patches ``load_dotenv`` so a real ``.env`` file cannot re-inject values
    that the test explicitly removed.
    """
    monkeypatch.setattr("chat_graph.config.load_dotenv", lambda *_a, **_kw: None)
    for key in _CONFIG_VARS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def fixtures_dir() -> Path:
    """Directory holding the CSV transcript fixtures."""
    return Path(__file__).resolve().parent / "fixtures"


@pytest.fixture(autouse=True)
def _reset_root_logger() -> Generator[None, None, None]:
    """Reset the root logger after each test to prevent handler leaks."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)

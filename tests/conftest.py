"""
Shared pytest fixtures for the EmojiChat test suite.

This module provides fixtures that are automatically available to all test files:
- Handler factories backed by in-memory token lists and config mappings
- Usage metrics collectors
- Temporary YAML config and token list files
"""

import copy
from collections.abc import Callable
from pathlib import Path

import pytest
import yaml

from emoji_chat import config as config_module
from emoji_chat.handler import EmojiHandler
from emoji_chat.metrics import UsageMetrics
from tests.constants import TOKENS, VALID_CONFIG

# ============================================================================
# HANDLER FIXTURES
# ============================================================================


@pytest.fixture
def metrics() -> UsageMetrics:
    """Fresh usage counters."""
    return UsageMetrics()


@pytest.fixture
def make_handler(metrics: UsageMetrics) -> Callable[..., EmojiHandler]:
    """
    Factory for handlers that never touch the filesystem.

    The config mapping is deep-copied on every load, so tests can mutate
    their own dict between ``load()`` calls to simulate config edits.

    Usage:
        handler = make_handler(config={...}, tokens=[":a:"])
    """

    def _make(config=None, tokens=None, **kwargs) -> EmojiHandler:
        cfg = VALID_CONFIG if config is None else config
        lines = TOKENS if tokens is None else tokens
        kwargs.setdefault("metrics", metrics)
        return EmojiHandler(
            config_loader=lambda: copy.deepcopy(cfg),
            token_loader=lambda: list(lines),
            **kwargs,
        )

    return _make


@pytest.fixture
def handler(make_handler) -> EmojiHandler:
    """Handler loaded from ``VALID_CONFIG`` and ``TOKENS``."""
    return make_handler()


# ============================================================================
# FILE FIXTURES
# ============================================================================


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[object], Path]:
    """Write a YAML config to ``tmp_path`` and return its path."""

    def _write(content, name: str = "emojichat.yml") -> Path:
        path = tmp_path / name
        if isinstance(content, str):
            path.write_text(content, encoding="utf-8")
        else:
            path.write_text(yaml.safe_dump(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def no_config_overrides(monkeypatch, tmp_path: Path) -> None:
    """Hide ``EMOJICHAT_CONFIG`` and any project-level config file."""
    monkeypatch.delenv(config_module.CONFIG_ENV_VAR, raising=False)
    monkeypatch.setattr(config_module, "CONFIG_FILE", tmp_path / "absent" / "emojichat.yml")

"""Pytest configuration and fixtures."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from flick_backup.prompt import PasswordPrompt, PromptResult

# Kivy parses sys.argv on import unless told not to
os.environ.setdefault("KIVY_NO_ARGS", "1")


@pytest.fixture
def flick_state(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point FLICK_STATE_DIR at a throwaway directory."""
    state = tmp_path / "flick"
    monkeypatch.setenv("FLICK_STATE_DIR", str(state))
    return state


@pytest.fixture
def results() -> list[PromptResult]:
    """Collects every result a prompt delivers."""
    return []


@pytest.fixture
def prompt(results: list[PromptResult]) -> PasswordPrompt:
    """Fresh prompt whose callback records into `results`."""
    return PasswordPrompt(results.append)

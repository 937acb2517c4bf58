"""Tests for Flick shell integration."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from flick_backup.shell import request_keyboard, setup_logging, state_dir


def test_state_dir_override(flick_state: Path) -> None:
    """Test FLICK_STATE_DIR takes priority."""
    assert state_dir() == flick_state


def test_state_dir_default(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test the default location under the home directory."""
    monkeypatch.delenv("FLICK_STATE_DIR", raising=False)
    monkeypatch.setattr(Path, "home", lambda: tmp_path)

    assert state_dir() == tmp_path / ".local" / "state" / "flick"


@pytest.mark.parametrize("show,expected", [(True, "show"), (False, "hide")])
def test_request_keyboard_writes_request(flick_state: Path, show: bool, expected: str) -> None:
    """Test the keyboard request file is created with the right verb."""
    assert request_keyboard(show) is True
    assert (flick_state / "keyboard_request").read_text() == expected


def test_request_keyboard_failure_is_logged(
    flick_state: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Test IO errors are logged and reported as False."""
    flick_state.parent.mkdir(parents=True, exist_ok=True)
    flick_state.write_text("not a directory")

    with caplog.at_level(logging.ERROR, logger="flick_backup.shell"):
        assert request_keyboard(True) is False

    assert "Failed to write keyboard request" in caplog.text


def test_setup_logging_creates_log_file(flick_state: Path) -> None:
    """Test the log file lands in the state directory."""
    root = logging.getLogger()
    saved = root.handlers[:]
    saved_level = root.level
    root.handlers = []
    try:
        log_path = setup_logging("flick_backup_test", "info")
        logging.getLogger("flick_backup").info("hello from the test")
        for handler in root.handlers:
            handler.flush()

        assert log_path == flick_state / "flick_backup_test.log"
        assert root.level == logging.INFO
        assert "[INFO] flick_backup: hello from the test" in log_path.read_text()
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers = saved
        root.setLevel(saved_level)


def _reset_root(saved: list[logging.Handler], saved_level: int) -> None:
    root = logging.getLogger()
    for handler in root.handlers:
        handler.close()
    root.handlers = saved
    root.setLevel(saved_level)


def test_setup_logging_replaces_existing_handlers(flick_state: Path) -> None:
    """Test the log file is written even when the root logger already has handlers."""
    root = logging.getLogger()
    saved = root.handlers[:]
    saved_level = root.level
    foreign = logging.NullHandler()
    root.addHandler(foreign)
    try:
        log_path = setup_logging("flick_backup_test")
        logging.getLogger("flick_backup").warning("written despite another handler")
        for handler in root.handlers:
            handler.flush()

        assert foreign not in root.handlers
        assert "written despite another handler" in log_path.read_text()
    finally:
        _reset_root(saved, saved_level)


def test_setup_logging_after_kivy_import(flick_state: Path) -> None:
    """Test logging still reaches the file once kivy has configured the root logger."""
    import kivy  # noqa: F401

    root = logging.getLogger()
    saved = root.handlers[:]
    saved_level = root.level
    try:
        log_path = setup_logging("flick_backup_test")
        logging.getLogger("flick_backup").info("logged after kivy import")
        for handler in root.handlers:
            handler.flush()

        assert "logged after kivy import" in log_path.read_text()
    finally:
        _reset_root(saved, saved_level)

"""Tests for the Kivy password field configuration."""

from __future__ import annotations

from flick_backup import flick_backup


def test_enter_keeps_field_focused() -> None:
    """Test Enter is not allowed to unfocus the field when it is swallowed."""
    assert flick_backup.FIELD_OPTIONS["text_validate_unfocus"] is False


def test_field_is_single_line() -> None:
    """Test newlines never reach the field as text."""
    assert flick_backup.FIELD_OPTIONS["multiline"] is False

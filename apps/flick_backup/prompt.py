"""
Flick Backup - password prompt state machine
Decides when the typed password is usable, when the Next action is enabled,
and delivers the final result (accepted password or cancel) exactly once.
No Kivy imports here so the prompt can be driven without a display.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Union

from .errors import ConfirmDisabledError, PromptClosedError, ResultAlreadyDeliveredError
from .password import Password, validate

logger = logging.getLogger("flick_backup.prompt")

# Characters the keyboard can send for "done": LF, VT, FF, CR, NEL, LS, PS
NEWLINES = "\n\x0b\x0c\r\x85\u2028\u2029"


def contains_newline(text: str) -> bool:
    """Check whether text holds any newline character"""
    return any(ch in NEWLINES for ch in text)


def apply_edit(text: str, start: int, end: int, replacement: str) -> str:
    """Replace text[start:end] with replacement, like a text field edit"""
    if not 0 <= start <= end <= len(text):
        raise ValueError(f"Edit range {start}..{end} outside text of length {len(text)}")
    return text[:start] + replacement + text[end:]


@dataclass(frozen=True)
class Accepted:
    """The user confirmed a valid password"""
    password: Password
    accepted = True


@dataclass(frozen=True)
class Cancelled:
    """The user backed out without a password"""
    password = None
    accepted = False


PromptResult = Union[Accepted, Cancelled]


class ResultChannel:
    """Hands one result to a callback and refuses to do it twice"""

    def __init__(self, callback: Callable[[PromptResult], None]):
        self._callback = callback
        self._result = None
        self._delivered = False

    @property
    def delivered(self) -> bool:
        return self._delivered

    @property
    def result(self) -> Optional[PromptResult]:
        return self._result

    def deliver(self, result: PromptResult) -> PromptResult:
        if self._delivered:
            raise ResultAlreadyDeliveredError(f"Result already delivered: {self._result!r}")
        # Mark first so a callback that re-enters the prompt sees it closed
        self._delivered = True
        self._result = result
        self._callback(result)
        return result


class PasswordPrompt:
    """Backup password prompt.

    Lifecycle: created with a result callback, fed zero or more edits,
    then closed by confirm(), cancel(), or a newline while a valid password
    is present. The callback runs exactly once. After that the prompt is
    inert: edits are ignored and confirm()/cancel() raise PromptClosedError.

    Edits come in two shapes. update_candidate() takes the full text after
    an edit; replace_text() takes the current text plus the replaced range
    and replacement, the way a text field asks whether a change is allowed.
    Both reject anything carrying a newline, treating it as "done" instead
    of literal input, and leave the candidate untouched.
    """

    def __init__(self, on_result: Callable[[PromptResult], None]):
        self.candidate = ""
        self.password: Optional[Password] = None
        self._channel = ResultChannel(on_result)
        self._enabled_callbacks = []

    @property
    def is_terminal(self) -> bool:
        return self._channel.delivered

    @property
    def result(self) -> Optional[PromptResult]:
        return self._channel.result

    def is_confirm_enabled(self) -> bool:
        return self.password is not None

    def bind_confirm_enabled(self, callback: Callable[[bool], None]):
        """Call callback(enabled) whenever confirm enablement flips"""
        self._enabled_callbacks.append(callback)

    def update_candidate(self, new_text: str) -> bool:
        """Take the full post-edit text; return whether it may be displayed"""
        if self.is_terminal:
            logger.warning("Edit after prompt closed, ignoring")
            return False

        if contains_newline(new_text):
            self.handle_newline_submit()
            return False

        was_enabled = self.is_confirm_enabled()
        self.candidate = new_text
        self.password = validate(new_text)
        enabled = self.is_confirm_enabled()
        logger.debug(f"Candidate updated: length={len(new_text)}, valid={enabled}")

        if enabled != was_enabled:
            for callback in list(self._enabled_callbacks):
                callback(enabled)
        return True

    def replace_text(self, text: str, start: int, end: int, replacement: str) -> bool:
        """Text field hook: should text[start:end] become replacement?"""
        if self.is_terminal:
            logger.warning("Edit after prompt closed, ignoring")
            return False

        if contains_newline(replacement):
            self.handle_newline_submit()
            return False

        return self.update_candidate(apply_edit(text, start, end, replacement))

    def handle_newline_submit(self) -> Optional[PromptResult]:
        """Keyboard "done": confirm if the password is valid, else do nothing"""
        if self.is_terminal:
            return None
        if self.password is None:
            logger.debug("Newline with no valid password, swallowed")
            return None
        logger.info("Newline submit with valid password")
        return self.confirm()

    def confirm(self) -> PromptResult:
        if self.is_terminal:
            raise PromptClosedError("Prompt already closed")
        if self.password is None:
            # The Next control is disabled in this state; reaching here is a caller bug
            logger.warning("confirm() called without a valid password")
            raise ConfirmDisabledError("No valid password to confirm")
        logger.info("Backup password accepted")
        return self._channel.deliver(Accepted(self.password))

    def cancel(self) -> PromptResult:
        if self.is_terminal:
            raise PromptClosedError("Prompt already closed")
        logger.info("Backup password prompt cancelled")
        return self._channel.deliver(Cancelled())

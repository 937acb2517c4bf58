"""Flick Backup - password prompt for encrypted history backups"""

from .errors import (
    BackupPromptError,
    ConfirmDisabledError,
    PasswordTooShortError,
    PromptClosedError,
    ResultAlreadyDeliveredError,
)
from .password import MINIMUM_CHARACTERS, Password, character_count, is_acceptable, trim, validate
from .prompt import Accepted, Cancelled, PasswordPrompt, PromptResult, ResultChannel

__version__ = "0.1.0"

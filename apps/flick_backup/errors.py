"""Exceptions raised by the backup password prompt"""


class BackupPromptError(Exception):
    """Base class for prompt contract violations"""


class ConfirmDisabledError(BackupPromptError):
    """confirm() was called while no valid password was entered"""


class PromptClosedError(BackupPromptError):
    """The prompt already delivered its result"""


class ResultAlreadyDeliveredError(BackupPromptError):
    """A result channel was asked to deliver a second time"""


class PasswordTooShortError(ValueError):
    """Password rejected by the length policy"""

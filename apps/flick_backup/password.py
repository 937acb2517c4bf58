"""
Flick Backup - password policy
Minimum-length check for the password that encrypts a history backup
"""

from dataclasses import dataclass

import regex

from .errors import PasswordTooShortError

MINIMUM_CHARACTERS = 8

# Unicode separators plus TAB..CR and NEL; the FS/GS/RS/US controls are not trimmed
_EDGE_WHITESPACE = regex.compile(r"\A[\p{Z}\t\n\x0b\x0c\r\x85]+|[\p{Z}\t\n\x0b\x0c\r\x85]+\Z")
_GRAPHEME = regex.compile(r"\X")


def trim(text: str) -> str:
    """Strip leading and trailing whitespace and newlines"""
    return _EDGE_WHITESPACE.sub("", text)


def character_count(text: str) -> int:
    """Count user-perceived characters (grapheme clusters), not code points"""
    return len(_GRAPHEME.findall(text))


def is_acceptable(text: str) -> bool:
    """Check the length policy, ignoring surrounding whitespace and newlines"""
    return character_count(trim(text)) >= MINIMUM_CHARACTERS


@dataclass(frozen=True, repr=False)
class Password:
    """A backup password that met the length policy when it was created.

    The stored value is the text exactly as entered. Only the length check
    ignores leading and trailing whitespace, so "   abcdefgh   " is accepted
    and kept with its spaces.
    """
    value: str

    def __post_init__(self):
        if not is_acceptable(self.value):
            raise PasswordTooShortError(
                f"Password must be at least {MINIMUM_CHARACTERS} characters"
            )

    def __repr__(self):
        # Never leak the secret into logs
        return f"Password(<{character_count(self.value)} chars>)"


def validate(text: str):
    """Return a Password for text, or None if it is too short"""
    if not is_acceptable(text):
        return None
    return Password(text)

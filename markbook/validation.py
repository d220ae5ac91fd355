"""Input checks for marks and the character-shift scheme for stored passwords."""

from __future__ import annotations

__all__ = [
    "MIN_MARK",
    "MAX_MARK",
    "is_number",
    "is_in_range",
    "shift_encrypt",
    "shift_decrypt",
]

MIN_MARK = 0
MAX_MARK = 100

_DIGITS = frozenset("0123456789")


def is_number(text: str) -> bool:
    """Return True when every character of ``text`` is an ASCII digit.

    An empty string has no non-digit characters and counts as a number.
    """
    return all(char in _DIGITS for char in text)


def is_in_range(text: str) -> bool:
    """Return True when ``text`` is a whole number from 0 to 100.

    Signs, spaces and any other non-digit characters make the text invalid,
    as does an empty string.
    """
    if not text or not is_number(text):
        return False
    return MIN_MARK <= int(text) <= MAX_MARK


def shift_encrypt(text: str) -> str:
    """Shift every character of ``text`` down by one code point."""
    return "".join(chr(ord(char) - 1) for char in text)


def shift_decrypt(text: str) -> str:
    """Shift every character of ``text`` up by one code point."""
    return "".join(chr(ord(char) + 1) for char in text)
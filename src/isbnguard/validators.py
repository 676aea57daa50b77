"""ISBN-10 / ISBN-13 checksum validation.

Everything here is pure: no I/O, no logging, no shared state.
"""

from __future__ import annotations

from enum import Enum

ISBN10_LENGTH = 10
ISBN13_LENGTH = 13

_DIGITS = frozenset("0123456789")


class IsbnFormat(Enum):
    """Format of a cleaned ISBN, decided by its length alone."""

    TEN_DIGIT = "isbn10"
    THIRTEEN_DIGIT = "isbn13"
    INVALID = "invalid"


def clean_isbn(text: str) -> str:
    """Return only ASCII digits and X (uppercased) from text."""
    return "".join(ch.upper() for ch in text if ch in _DIGITS or ch in "xX")


def classify(cleaned: str) -> IsbnFormat:
    """Return the format implied by the length of a cleaned ISBN."""
    if len(cleaned) == ISBN10_LENGTH:
        return IsbnFormat.TEN_DIGIT
    if len(cleaned) == ISBN13_LENGTH:
        return IsbnFormat.THIRTEEN_DIGIT
    return IsbnFormat.INVALID


def isbn10_valid(cleaned: str) -> bool:
    """Return True if cleaned passes the ISBN-10 mod-11 checksum.

    X is only accepted as the check character (value 10).
    """
    if len(cleaned) != ISBN10_LENGTH:
        return False

    body, check = cleaned[:9], cleaned[9]
    if not all(ch in _DIGITS for ch in body):
        return False

    total = sum(int(ch) * (10 - index) for index, ch in enumerate(body))
    if check == "X":
        total += 10
    elif check in _DIGITS:
        total += int(check)
    else:
        return False

    return total % 11 == 0


def isbn13_valid(cleaned: str) -> bool:
    """Return True if cleaned passes the ISBN-13 (EAN) checksum."""
    if len(cleaned) != ISBN13_LENGTH or not all(ch in _DIGITS for ch in cleaned):
        return False

    total = sum(int(ch) * (1 if index % 2 == 0 else 3) for index, ch in enumerate(cleaned[:12]))
    expected = (10 - total % 10) % 10
    return expected == int(cleaned[12])


def validate_isbn(text: str | None) -> bool:
    """Return True if text is a valid ISBN-10 or ISBN-13.

    Anything that is not a string, including None, is False. Characters
    other than digits and X are dropped before the length check, so
    "ISBN 0-306-40615-2" is accepted. This never raises.
    """
    if not isinstance(text, str):
        return False

    cleaned = clean_isbn(text)
    fmt = classify(cleaned)
    if fmt is IsbnFormat.TEN_DIGIT:
        return isbn10_valid(cleaned)
    if fmt is IsbnFormat.THIRTEEN_DIGIT:
        return isbn13_valid(cleaned)
    return False


def invalid_isbn_message(value: object) -> str:
    """Return the rejection message callers match on."""
    return f"{value} is not a valid ISBN!"

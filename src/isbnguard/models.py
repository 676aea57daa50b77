"""Book record schema with field-level constraints."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass

from .validators import invalid_isbn_message, validate_isbn

BOOK_FIELDS: tuple[str, ...] = ("isbn", "genre", "author", "title")

REQUIRED_MESSAGES: dict[str, str] = {
    "isbn": "The book must have a valid ISBN.",
    "genre": "The book must have a genre.",
    "author": "The book must have an author.",
    "title": "The book must have a title.",
}

DUPLICATE_ISBN_MESSAGE = "The ISBN for any given book must be unique."


class BookValidationError(ValueError):
    """Raised when a book record fails one or more field constraints."""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        super().__init__("; ".join(self.messages))

    @property
    def messages(self) -> list[str]:
        return [self.errors[name] for name in BOOK_FIELDS if name in self.errors]


@dataclass(slots=True, frozen=True)
class Book:
    """A validated book record."""

    isbn: str
    genre: str
    author: str
    title: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)

    def update(self, changes: Mapping[str, object]) -> Book:
        """Return a new Book with changes applied and the whole record revalidated."""
        merged: dict[str, object] = self.to_dict()
        merged.update({k: v for k, v in changes.items() if k in BOOK_FIELDS})
        return validate_book(merged)


def _is_missing(value: object) -> bool:
    # Only None and "" count as missing; "  " is present and checked as a value.
    return value is None or value == ""


def validate_book(data: Mapping[str, object]) -> Book:
    """Validate a raw mapping and return a Book.

    Every field is checked before raising, so the error lists all problems.
    Keys outside the schema are ignored.
    """
    errors: dict[str, str] = {}

    for name in BOOK_FIELDS:
        value = data.get(name)
        if _is_missing(value):
            errors[name] = REQUIRED_MESSAGES[name]
        elif name == "isbn" and not validate_isbn(value):
            errors[name] = invalid_isbn_message(value)
        elif not isinstance(value, str):
            errors[name] = REQUIRED_MESSAGES[name]

    if errors:
        raise BookValidationError(errors)

    return Book(**{name: data[name] for name in BOOK_FIELDS})

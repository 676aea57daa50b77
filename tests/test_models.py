import pytest

from isbnguard.models import (
    REQUIRED_MESSAGES,
    Book,
    BookValidationError,
    validate_book,
)


def _record(**overrides: object) -> dict[str, object]:
    record: dict[str, object] = {
        "isbn": "978-3-16-148410-0",
        "genre": "Fantasy",
        "author": "J. R. R. Tolkien",
        "title": "The Hobbit",
    }
    record.update(overrides)
    return record


def test_valid_record_becomes_book() -> None:
    book = validate_book(_record(extra="ignored"))
    assert isinstance(book, Book)
    assert book.isbn == "978-3-16-148410-0"
    assert book.to_dict() == _record()


def test_invalid_isbn_uses_message_shape() -> None:
    with pytest.raises(BookValidationError) as exc_info:
        validate_book(_record(isbn="978-3-16-148410-1"))

    assert exc_info.value.errors == {"isbn": "978-3-16-148410-1 is not a valid ISBN!"}
    assert "978-3-16-148410-1 is not a valid ISBN!" in str(exc_info.value)


def test_non_text_isbn_is_rejected() -> None:
    with pytest.raises(BookValidationError) as exc_info:
        validate_book(_record(isbn=9783161484100))

    assert exc_info.value.errors["isbn"] == "9783161484100 is not a valid ISBN!"


def test_all_missing_fields_are_reported() -> None:
    with pytest.raises(BookValidationError) as exc_info:
        validate_book({"title": ""})

    err = exc_info.value
    assert set(err.errors) == {"isbn", "genre", "author", "title"}
    assert err.messages == [
        REQUIRED_MESSAGES["isbn"],
        REQUIRED_MESSAGES["genre"],
        REQUIRED_MESSAGES["author"],
        REQUIRED_MESSAGES["title"],
    ]


def test_validation_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        validate_book(_record(genre=None))


def test_update_revalidates_whole_record() -> None:
    book = validate_book(_record())

    updated = book.update({"title": "The Hobbit, or There and Back Again"})
    assert updated.title == "The Hobbit, or There and Back Again"
    assert updated.isbn == book.isbn
    assert book.title == "The Hobbit"

    with pytest.raises(BookValidationError) as exc_info:
        book.update({"isbn": "185723569Y"})
    assert exc_info.value.errors == {"isbn": "185723569Y is not a valid ISBN!"}


def test_whitespace_isbn_is_checked_as_a_value() -> None:
    with pytest.raises(BookValidationError) as exc_info:
        validate_book(_record(isbn="  "))

    assert exc_info.value.errors == {"isbn": "   is not a valid ISBN!"}


def test_whitespace_text_field_counts_as_present() -> None:
    book = validate_book(_record(genre=" "))
    assert book.genre == " "

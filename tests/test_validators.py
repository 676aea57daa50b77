import pytest

from isbnguard.validators import (
    IsbnFormat,
    classify,
    clean_isbn,
    invalid_isbn_message,
    isbn10_valid,
    isbn13_valid,
    validate_isbn,
)

VALID_ISBN10 = ["185723569X", "0306406152", "0-306-40615-2"]
VALID_ISBN13 = ["978-3-16-148410-0", "9781857235692", "9780306406157"]


@pytest.mark.parametrize("isbn", VALID_ISBN10 + VALID_ISBN13)
def test_valid_isbns(isbn: str) -> None:
    assert validate_isbn(isbn) is True


@pytest.mark.parametrize(
    "isbn",
    [None, "", "978-3-16-148410-1", "185723569Y", "9781857235691"],
)
def test_invalid_isbns(isbn: str | None) -> None:
    assert validate_isbn(isbn) is False


@pytest.mark.parametrize("value", [9780306406157, 306406152.0, b"0306406152", ["0306406152"]])
def test_non_text_values_are_rejected(value: object) -> None:
    assert validate_isbn(value) is False  # type: ignore[arg-type]


def test_lowercase_check_character() -> None:
    assert validate_isbn("185723569x") is True
    assert validate_isbn("185723569x") == validate_isbn("185723569X")


def test_repeated_calls_agree() -> None:
    for isbn in ["185723569X", "978-3-16-148410-1", "garbage"]:
        assert validate_isbn(isbn) == validate_isbn(isbn)


@pytest.mark.parametrize("isbn", ["0306406152", "9780306406157", "978-3-16-148410-0"])
def test_single_digit_change_is_detected(isbn: str) -> None:
    cleaned = clean_isbn(isbn)
    for index, ch in enumerate(cleaned):
        mutated = cleaned[:index] + str((int(ch) + 1) % 10) + cleaned[index + 1 :]
        assert validate_isbn(mutated) is False, mutated


def test_single_digit_change_before_x_check() -> None:
    cleaned = "185723569X"
    for index in range(9):
        digit = (int(cleaned[index]) + 1) % 10
        assert validate_isbn(cleaned[:index] + str(digit) + cleaned[index + 1 :]) is False


def test_clean_keeps_digits_and_x() -> None:
    assert clean_isbn("ISBN 978-3-16 148410-0") == "9783161484100"
    assert clean_isbn("0-8044-2957-x") == "080442957X"
    assert clean_isbn("-- ..") == ""


def test_clean_drops_non_ascii_digits() -> None:
    # Arabic-Indic digits are not ASCII and must not survive cleaning
    assert clean_isbn("٠١٢٣") == ""


@pytest.mark.parametrize(
    ("cleaned", "expected"),
    [
        ("", IsbnFormat.INVALID),
        ("123456789", IsbnFormat.INVALID),
        ("0306406152", IsbnFormat.TEN_DIGIT),
        ("12345678901", IsbnFormat.INVALID),
        ("9780306406157", IsbnFormat.THIRTEEN_DIGIT),
        ("97803064061570", IsbnFormat.INVALID),
    ],
)
def test_classify_by_length(cleaned: str, expected: IsbnFormat) -> None:
    assert classify(cleaned) is expected


def test_wrong_lengths_are_invalid() -> None:
    assert validate_isbn("030640615") is False
    assert validate_isbn("03064061522") is False
    assert validate_isbn("97803064061") is False


def test_x_only_allowed_as_isbn10_check_character() -> None:
    assert isbn10_valid("X306406152") is False
    assert isbn10_valid("03064X6152") is False
    assert isbn13_valid("978030640615X") is False
    assert validate_isbn("97803064X6157") is False


def test_permissive_cleaning_accepts_embedded_text() -> None:
    assert validate_isbn("ISBN 0-306-40615-2") is True
    assert validate_isbn("isbn:978 3 16 148410 0") is True


def test_invalid_isbn_message_shape() -> None:
    assert invalid_isbn_message("123") == "123 is not a valid ISBN!"

"""High-level orchestration: extractor selection, detection and record checks."""

from __future__ import annotations

import mimetypes
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .detectors import Finding, detect
from .models import DUPLICATE_ISBN_MESSAGE, Book, BookValidationError, validate_book
from .utils import get_logger
from .validators import clean_isbn

SUPPORTED_SUFFIXES = {".txt", ".csv", ".pdf"}

SUPPORTED_MIME_TYPES = {
    "text/plain",
    "text/csv",
    "application/pdf",
}

ExtractorFunc = Callable[[Path], tuple[str, str]]

log = get_logger(__name__)


def _pick_extractor(path: Path) -> ExtractorFunc | None:
    """Return the correct extractor function for a file, if supported."""

    # Import extractors lazily so pdfminer is only loaded when needed.
    from .extractors import from_csv, from_pdf, from_txt

    suffix = path.suffix.lower()

    if suffix == ".txt":
        return from_txt
    if suffix == ".csv":
        return from_csv
    if suffix == ".pdf":
        return from_pdf

    mime_type, _ = mimetypes.guess_type(str(path))
    if mime_type == "text/plain":
        return from_txt
    if mime_type == "text/csv":
        return from_csv
    if mime_type == "application/pdf":
        return from_pdf

    return None


def read_any(path: Path) -> str:
    """Return text content from a supported file type."""
    extractor = _pick_extractor(path)
    if extractor is None:
        raise ValueError(f"Unsupported or unknown file type: {path}")

    _kind, text = extractor(path)
    return text


def scan_file(
    input_path: str | Path,
    *,
    options: dict[str, Any] | None = None,
) -> tuple[list[Finding], str]:
    """Scan a file for ISBN candidates; return (findings, extracted text).

    Unsupported file types give ([], ""). Read and decode errors propagate.
    """
    path = Path(input_path)
    options = options or {}

    if _pick_extractor(path) is None:
        log.warning("Skipping unsupported file %s", path.name)
        return [], ""

    file_text = read_any(path)

    findings = detect(file_text, file_name=path.name)
    if options.get("only_invalid"):
        findings = [f for f in findings if not f.valid]

    log.info("Scanned %s: %d ISBN candidates", path.name, len(findings))
    return findings, file_text


@dataclass(slots=True)
class RecordResult:
    """Outcome of validating one book record from a batch."""

    row: int
    isbn: object
    book: Book | None = None
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.book is not None and not self.errors

    def to_dict(self) -> dict[str, object]:
        return {
            "row": self.row,
            "isbn": self.isbn,
            "ok": self.ok,
            "book": self.book.to_dict() if self.book else None,
            "errors": dict(self.errors),
        }


def check_records(records: Iterable[Mapping[str, object]]) -> list[RecordResult]:
    """Validate each record and flag ISBNs repeated within the batch.

    Duplicates are compared on the cleaned ISBN, so "978-3-16-148410-0"
    and "9783161484100" collide. Only the later occurrence is rejected.
    """
    results: list[RecordResult] = []
    seen: dict[str, int] = {}

    for row, record in enumerate(records, start=1):
        result = RecordResult(row=row, isbn=record.get("isbn"))
        try:
            book = validate_book(record)
        except BookValidationError as exc:
            result.errors = exc.errors
            log.debug("Row %d rejected: %s", row, exc)
            results.append(result)
            continue

        key = clean_isbn(book.isbn)
        if key in seen:
            result.errors = {"isbn": DUPLICATE_ISBN_MESSAGE}
            log.debug("Row %d duplicates ISBN of row %d", row, seen[key])
        else:
            seen[key] = row
            result.book = book
        results.append(result)

    rejected = sum(1 for r in results if not r.ok)
    log.info("Checked %d records: %d rejected", len(results), rejected)
    return results


def check_file(input_path: str | Path) -> list[RecordResult]:
    """Validate every book record in a CSV file."""
    path = Path(input_path)
    if path.suffix.lower() != ".csv":
        raise ValueError(f"Book records must be a CSV file: {path}")

    from .extractors import read_records

    return check_records(read_records(path))

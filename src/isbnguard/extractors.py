"""Text and record extraction for supported upload types."""

from __future__ import annotations

import csv
from pathlib import Path

# ---------------------------------------------------------
# TEXT Extractor
# ---------------------------------------------------------


def from_txt(path: Path) -> tuple[str, str]:
    """Read content from a text file."""
    return "text", path.read_text(encoding="utf-8")


# ---------------------------------------------------------
# CSV Extractors
# ---------------------------------------------------------


def from_csv(path: Path) -> tuple[str, str]:
    """Read content from a CSV file and return concatenated text."""
    all_text = []
    with path.open("r", newline="", encoding="utf-8-sig") as f:
        reader = csv.reader(f)
        for row in reader:
            all_text.extend(row)
    return "csv", " ".join(all_text)


def read_records(path: Path) -> list[dict[str, str]]:
    """Read a CSV with a header row into one dict per data row.

    Header names are stripped and lower-cased so "ISBN" and " isbn" both
    map to the "isbn" field. Cell values are stripped.
    """
    with path.open("r", newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)
        if reader.fieldnames is None:
            return []
        reader.fieldnames = [name.strip().lower() for name in reader.fieldnames]
        return [
            {key: value.strip() if isinstance(value, str) else value for key, value in row.items()}
            for row in reader
        ]


# ---------------------------------------------------------
# PDF Extractor (heavy import kept local)
# ---------------------------------------------------------


def from_pdf(path: Path) -> tuple[str, str]:
    """Read content from a PDF file."""
    from io import StringIO

    from pdfminer.high_level import extract_text_to_fp

    output_string = StringIO()

    with path.open("rb") as input_file:
        extract_text_to_fp(input_file, output_string)

    return "pdf", output_string.getvalue()

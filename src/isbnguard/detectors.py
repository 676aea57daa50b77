"""Pattern-based ISBN detection in free text with explainable results."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass

from .validators import IsbnFormat, classify, clean_isbn, validate_isbn

# 9-12 digits, single hyphen or space between groups, then a digit or X.
ISBN_CANDIDATE = re.compile(r"(?<![\w-])(?:[0-9][- ]?){9,12}[0-9Xx](?![\w-])")

ISBN_LABEL = re.compile(r"(?i)\bISBN(?:-?1[03])?\s*:?\s*$")

DETECTOR_BY_FORMAT: dict[IsbnFormat, str] = {
    IsbnFormat.TEN_DIGIT: "isbn10",
    IsbnFormat.THIRTEEN_DIGIT: "isbn13",
}


@dataclass(slots=True)
class Finding:
    """Single ISBN candidate found in text."""

    detector: str
    match: str
    start: int
    end: int
    valid: bool
    why: str

    def to_dict(self) -> dict[str, object]:
        """Return a stable, serializable representation of this finding."""
        return asdict(self)


def _explain(detector: str, valid: bool, labelled: bool) -> str:
    kind = "ISBN-10" if detector == "isbn10" else "ISBN-13"
    if valid:
        why = f"Verified: passed the {kind} checksum."
    else:
        why = f"Rejected: looks like an {kind} but the check digit does not match."
    if labelled:
        why += " Preceded by an ISBN label."
    return why


def _split_joined(raw_value: str, start: int) -> tuple[str, int]:
    """Return (value, start) of the space-separated group that is a whole code.

    A space may join "978 3 16 148410 0", but in "0306406152 320" the
    first group is already complete and the rest is an unrelated number.
    """
    offset = start
    for group in raw_value.split(" "):
        if classify(clean_isbn(group)) is not IsbnFormat.INVALID:
            return group, offset
        offset += len(group) + 1
    return raw_value, start


def detect(text: str, *, file_name: str | None = None) -> list[Finding]:
    """Return every 10- or 13-character ISBN candidate in text."""
    findings: list[Finding] = []

    for match_obj in ISBN_CANDIDATE.finditer(text):
        raw_value, start = _split_joined(match_obj.group(0), match_obj.start())
        fmt = classify(clean_isbn(raw_value))
        if fmt is IsbnFormat.INVALID:
            continue

        detector = DETECTOR_BY_FORMAT[fmt]
        valid = validate_isbn(raw_value)
        window = text[max(0, start - 12) : start]
        labelled = ISBN_LABEL.search(window) is not None

        findings.append(
            Finding(
                detector=detector,
                match=raw_value,
                start=start,
                end=start + len(raw_value),
                valid=valid,
                why=_explain(detector, valid, labelled),
            )
        )

    return findings

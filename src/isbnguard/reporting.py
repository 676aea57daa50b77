"""Report generation utilities."""

from __future__ import annotations

import json
import re
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from .detectors import Finding
from .scanner import RecordResult

UNSAFE_REPORT_CHARS = re.compile(r"[^A-Za-z0-9_.-]+")


class Reportable(Protocol):
    def to_dict(self) -> dict[str, object]: ...


def to_json(
    items: Sequence[Reportable], outfile: Path, return_as_string: bool = False
) -> str | None:
    payload = [item.to_dict() for item in items]
    json_str = json.dumps(payload, indent=2)

    if return_as_string:
        return json_str

    outfile.parent.mkdir(parents=True, exist_ok=True)
    outfile.write_text(json_str, encoding="utf-8")
    return None


def human_summary(findings: list[Finding]) -> str:
    counts: dict[str, int] = {}
    for finding in findings:
        counts[finding.detector] = counts.get(finding.detector, 0) + 1

    if not counts:
        return "Findings Summary:\n- No ISBNs detected"

    valid = sum(1 for f in findings if f.valid)
    lines = [f"- {detector}: {count}" for detector, count in sorted(counts.items())]
    lines.append(f"- valid: {valid}, invalid: {len(findings) - valid}")
    return "Findings Summary:\n" + "\n".join(lines)


def records_summary(results: list[RecordResult]) -> str:
    accepted = [r for r in results if r.ok]
    rejected = [r for r in results if not r.ok]

    lines = [f"- accepted: {len(accepted)}", f"- rejected: {len(rejected)}"]
    for result in rejected:
        fields = ", ".join(sorted(result.errors))
        lines.append(f"  row {result.row}: {fields}")
    return "Records Summary:\n" + "\n".join(lines)


def report_name(upload_name: str) -> str:
    """Return a name for the JSON report of an upload, safe to use on disk."""
    base = Path(upload_name.replace("\\", "/")).name
    cleaned = UNSAFE_REPORT_CHARS.sub("_", base).strip("._")
    return cleaned or "upload"

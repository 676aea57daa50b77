"""isbnguard Streamlit App (locally run ISBN checker UI)."""

from __future__ import annotations

import gc
import time
from collections import Counter
from contextlib import suppress
from pathlib import Path
from tempfile import NamedTemporaryFile

import altair as alt
import pandas as pd
import streamlit as stream

from isbnguard.detectors import Finding
from isbnguard.reporting import records_summary, report_name, to_json
from isbnguard.scanner import RecordResult, check_file, scan_file
from isbnguard.utils import get_logger
from isbnguard.validators import (
    IsbnFormat,
    classify,
    clean_isbn,
    invalid_isbn_message,
    validate_isbn,
)

MAX_UPLOAD_BYTES = 5 * 1024 * 1024
REPORTS_DIR = Path("data/reports")

# --- Caching Functions ---


@stream.cache_resource
def get_cached_logger(name: str):
    """Initializes and caches the logger."""
    return get_logger(name)


def highlight_text(text: str, findings: list[Finding]) -> str:
    """Wrap each finding in text with a VALID/INVALID marker."""
    # Work from the end so earlier offsets stay correct
    sorted_findings = sorted(findings, key=lambda x: x.start, reverse=True)
    chars = list(text)
    for f in sorted_findings:
        if f.start >= 0 and f.end <= len(chars):
            label = "VALID" if f.valid else "INVALID"
            chars[f.start : f.end] = list(f"[{label} {f.detector.upper()}: {f.match}]")
    return "".join(chars)


def render_quick_check() -> None:
    """Single ISBN input with an immediate verdict."""
    with stream.container(border=True):
        stream.markdown("### Quick Check")
        raw = stream.text_input("ISBN", placeholder="978-3-16-148410-0", key="quick_isbn")
        if not raw:
            return

        fmt = classify(clean_isbn(raw))
        if validate_isbn(raw):
            kind = "ISBN-10" if fmt is IsbnFormat.TEN_DIGIT else "ISBN-13"
            stream.success(f"✅ Valid {kind}: `{clean_isbn(raw)}`")
        else:
            stream.error(invalid_isbn_message(raw))
            if fmt is IsbnFormat.INVALID:
                stream.caption(
                    f"Found {len(clean_isbn(raw))} digits; an ISBN has 10 or 13."
                )
            else:
                stream.caption("The length is right but the check digit does not match.")


# --- Main Application Logic Wrapped in a Function ---


def main():
    # 1. Page Config
    stream.set_page_config(
        page_title="isbnguard - ISBN Checker",
        page_icon="📚",
        layout="wide",
    )

    # 2. Logger & Styles
    log = get_cached_logger("isbnguard")

    stream.title("isbnguard 📚 ISBN Checker")
    stream.caption("Validate ISBN-10 and ISBN-13 numbers in text, PDFs and book lists.")

    # 3. Sidebar Recent Scans
    with stream.sidebar:
        stream.header("Your Session")
        recent_scan_items = stream.session_state.get("recent_scans", [])

        if not recent_scan_items:
            stream.caption("No files checked yet.")
        else:
            stream.caption(f"Total Scans: {len(recent_scan_items)}")
            for scan_entry in recent_scan_items[-5:][::-1]:
                with stream.container(border=True):
                    stream.markdown(f"**{scan_entry['name']}**")
                    stream.markdown(
                        f"⏱️ {scan_entry['elapsed']:.2f}s | ❌ {scan_entry['invalid']} invalid"
                    )

    # 4. Session State Init
    if "uploader_key" not in stream.session_state:
        stream.session_state.uploader_key = 0

    render_quick_check()

    # 5. Scan Options
    scan_options = stream.session_state.setdefault(
        "options",
        {"only_invalid": False, "as_records": True},
    )

    with stream.expander("Scan options ⚙️"):
        col_opt1, col_opt2 = stream.columns(2)
        with col_opt1:
            scan_options["only_invalid"] = stream.toggle(
                "Only list invalid ISBNs",
                value=scan_options["only_invalid"],
                key="opt_only_invalid",
            )
        with col_opt2:
            scan_options["as_records"] = stream.toggle(
                "Check CSV files as book records",
                value=scan_options["as_records"],
                key="opt_as_records",
                help="Expects isbn, genre, author and title columns.",
            )

    # 6. File Uploader
    with stream.container(border=True):
        stream.markdown("### Check a File")
        uploaded_file = stream.file_uploader(
            "Drag and drop your file here",
            type=["txt", "csv", "pdf"],
            key=f"uploader_{stream.session_state.uploader_key}",
            label_visibility="collapsed",
        )

        col1, col2 = stream.columns([1, 1])
        with col1:
            scan_clicked = stream.button(
                "Scan Now",
                type="primary",
                use_container_width=True,
                key="btn_scan",
            )
        with col2:
            clear_clicked = stream.button(
                "Clear File",
                use_container_width=True,
                key="btn_clear",
            )

    if clear_clicked:
        stream.session_state.uploader_key += 1
        stream.toast("Cleared.", icon="🧹")
        gc.collect()
        stream.rerun()

    if not (uploaded_file and scan_clicked):
        return

    # 7. Scan Logic
    scan_findings: list[Finding] = []
    record_results: list[RecordResult] = []
    extracted_text = ""
    scan_report_path = None
    scan_elapsed_seconds = 0.0
    scan_failed = False

    file_bytes = uploaded_file.getvalue()
    if len(file_bytes) > MAX_UPLOAD_BYTES:
        stream.error("File too large (>5MB).")
        stream.stop()

    scan_safe_name = report_name(uploaded_file.name)
    suffix = Path(uploaded_file.name).suffix
    check_as_records = scan_options["as_records"] and suffix.lower() == ".csv"

    with stream.status("Scanning...", expanded=True):
        start_time = time.perf_counter()
        tmp_path = None
        try:
            with NamedTemporaryFile(delete=False, suffix=suffix) as tmp:
                tmp.write(file_bytes)
                tmp_path = Path(tmp.name)

            if check_as_records:
                record_results = check_file(tmp_path)
            scan_findings, extracted_text = scan_file(tmp_path, options=scan_options)

        except Exception as e:
            log.exception("Scan failed")
            stream.error(f"Scan failed: {e}")
            scan_failed = True
        finally:
            if tmp_path:
                with suppress(OSError):
                    tmp_path.unlink()
            gc.collect()

        scan_elapsed_seconds = time.perf_counter() - start_time

    if scan_failed:
        return

    REPORTS_DIR.mkdir(parents=True, exist_ok=True)
    scan_report_path = REPORTS_DIR / f"{scan_safe_name}.json"
    to_json(record_results or scan_findings, scan_report_path)

    # 8. Results Display
    invalid_count = sum(1 for f in scan_findings if not f.valid)
    invalid_count += sum(1 for r in record_results if not r.ok)

    recent = stream.session_state.setdefault("recent_scans", [])
    recent.append(
        {
            "name": scan_safe_name,
            "elapsed": scan_elapsed_seconds,
            "invalid": invalid_count,
        }
    )
    if len(recent) > 10:
        del recent[:-10]

    tab_res, tab_find, tab_rec, tab_rep = stream.tabs(
        ["Overview 📊", "Findings 🔍", "Records 📚", "JSON Report 📥"]
    )

    # Tab 1: Overview (donut of valid vs invalid)
    with tab_res:
        stream.subheader("Scan Overview")

        col_m1, col_m2 = stream.columns(2)
        col_m1.metric("ISBNs Found", len(scan_findings))
        col_m1.metric("Scan Time", f"{scan_elapsed_seconds:.2f}s")
        if record_results:
            col_m2.metric("Records", len(record_results))
            col_m2.metric("Rejected Records", sum(1 for r in record_results if not r.ok))

        stream.divider()

        counts = Counter(
            f"{'✅ Valid' if f.valid else '❌ Invalid'} {f.detector.upper()}" for f in scan_findings
        )

        if counts:
            df = pd.DataFrame([{"Result": key, "Count": count} for key, count in counts.items()])

            base = alt.Chart(df).encode(theta=alt.Theta("Count", stack=True))
            pie = base.mark_arc(outerRadius=120, innerRadius=80).encode(
                color=alt.Color(
                    "Result",
                    scale=alt.Scale(scheme="tableau10"),
                    legend=alt.Legend(title="Result", orient="right"),
                ),
                order=alt.Order("Count", sort="descending"),
                tooltip=["Result", "Count"],
            )
            text = (
                alt.Chart(pd.DataFrame({"text": [sum(counts.values())]}))
                .mark_text(align="center", fontSize=30, fontWeight="bold")
                .encode(text="text")
            )
            subtext = (
                alt.Chart(pd.DataFrame({"text": ["ISBNs"]}))
                .mark_text(align="center", dy=20, fontSize=14, color="gray")
                .encode(text="text")
            )

            stream.altair_chart(pie + text + subtext, use_container_width=True)
        else:
            stream.info("No ISBNs found in this file.")

    # Tab 2: Findings
    with tab_find:
        if scan_findings:
            stream.write("### Detected ISBNs")
            for f in scan_findings:
                icon = "✅" if f.valid else "❌"
                with stream.expander(f"{icon} {f.detector.upper()} `{f.match}` at index {f.start}"):
                    stream.caption(f.why)
            if extracted_text:
                stream.text_area(
                    "Annotated Preview",
                    value=highlight_text(extracted_text, scan_findings)[:2000],
                    height=250,
                    disabled=True,
                )
        else:
            stream.info("No findings to list.")

    # Tab 3: Book records
    with tab_rec:
        if record_results:
            stream.text(records_summary(record_results))
            df = pd.DataFrame(
                [
                    {
                        "Row": r.row,
                        "ISBN": r.isbn,
                        "OK": r.ok,
                        "Errors": " ".join(r.errors.values()),
                    }
                    for r in record_results
                ]
            )
            stream.dataframe(df, use_container_width=True, hide_index=True)
        elif check_as_records:
            stream.warning("No records found. Is the header row present?")
        else:
            stream.info("Upload a CSV with book records to check them here.")

    # Tab 4: JSON Report
    with tab_rep:
        if scan_report_path and scan_report_path.exists():
            stream.download_button(
                "⬇️ Download Full JSON Report",
                data=scan_report_path.read_bytes(),
                file_name=f"{scan_safe_name}.json",
                mime="application/json",
                use_container_width=True,
            )
            stream.json([item.to_dict() for item in (record_results or scan_findings)])
        else:
            stream.info("No report generated.")

    gc.collect()


if __name__ == "__main__":
    main()

"""Saving the rendered report as a plain-text file."""

from __future__ import annotations

from pathlib import Path


def report_filename(iso_date: str) -> str:
    return f"summary_{iso_date}.txt"


def save_report(text: str, iso_date: str, output_dir: str | Path = ".") -> Path:
    """Write the report to ``output_dir/summary_<date>.txt``.

    Returns:
        Path of the written file. An existing file for the same date is
        overwritten.
    """
    output_dir = Path(output_dir).expanduser()
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / report_filename(iso_date)
    path.write_text(text, encoding="utf-8")
    return path

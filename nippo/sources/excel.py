"""Excel exports (first worksheet) via openpyxl."""

from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Any

from . import RowReader


class ExcelRowReader(RowReader):
    """Reads the first worksheet; empty cells become ""."""

    def read_rows(self, path: str | Path) -> list[dict[str, Any]]:
        try:
            import openpyxl
            from openpyxl.utils.exceptions import InvalidFileException
        except ImportError:
            raise ImportError(
                "Excel の読み込みには openpyxl が必要です: pip install openpyxl"
            )

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"ファイルが見つかりません: {path}")

        if path.suffix.lower() == ".xls":
            raise ValueError(
                f"旧形式の .xls は読み込めません。.xlsx で保存し直してください: {path}"
            )

        try:
            workbook = openpyxl.load_workbook(path, read_only=True, data_only=True)
        except (InvalidFileException, zipfile.BadZipFile, KeyError) as e:
            raise ValueError(f"Excel ファイルを開けません: {path} ({e})")
        try:
            if not workbook.sheetnames:
                return []
            sheet = workbook[workbook.sheetnames[0]]
            values = sheet.iter_rows(values_only=True)
            header = next(values, None)
            if header is None:
                return []
            columns = ["" if h is None else str(h) for h in header]

            rows: list[dict[str, Any]] = []
            for record in values:
                if all(v is None or str(v).strip() == "" for v in record):
                    continue
                row = {
                    col: ("" if value is None else value)
                    for col, value in zip(columns, record)
                    if col
                }
                # Short records still carry every header
                for col in columns[len(record):]:
                    if col:
                        row.setdefault(col, "")
                rows.append(row)
            return rows
        finally:
            workbook.close()

"""CSV exports, decoded with a list of candidate encodings."""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Any

from . import RowReader

logger = logging.getLogger(__name__)


class CsvRowReader(RowReader):
    """Reads a header-row CSV, skipping blank lines.

    POS exports are UTF-8 (often with a BOM) or Shift_JIS, so the encodings
    are tried in order until one decodes the whole file.
    """

    def __init__(self, encodings: list[str] | None = None) -> None:
        self._encodings = encodings or ["utf-8-sig", "cp932"]

    def read_rows(self, path: str | Path) -> list[dict[str, Any]]:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"ファイルが見つかりません: {path}")
        return self.parse(self._decode(path.read_bytes(), path))

    def _decode(self, data: bytes, path: Path) -> str:
        for encoding in self._encodings:
            try:
                return data.decode(encoding)
            except UnicodeDecodeError:
                logger.debug("%s は %s で読めませんでした", path.name, encoding)
        raise ValueError(
            f"CSVの文字コードを判別できません: {path} "
            f"(試行: {', '.join(self._encodings)})"
        )

    @staticmethod
    def parse(text: str) -> list[dict[str, Any]]:
        """Parse CSV text into rows keyed by the header line.

        Repeated headers are renamed ``割引合計``, ``割引合計_1``, ... so no
        column is lost.
        """
        reader = csv.reader(io.StringIO(text, newline=""))
        header = next(reader, None)
        if header is None:
            return []
        columns = _unique_headers(header)

        rows: list[dict[str, Any]] = []
        for record in reader:
            # Short rows are padded with "", extra cells are dropped
            row = {
                col: (record[i] if i < len(record) else "")
                for i, col in enumerate(columns)
            }
            if not any(str(v).strip() for v in row.values()):
                continue
            rows.append(row)
        return rows


def _unique_headers(header: list[str]) -> list[str]:
    seen: set[str] = set()
    columns = []
    for name in header:
        column, n = name, 0
        while column in seen:
            n += 1
            column = f"{name}_{n}"
        seen.add(column)
        columns.append(column)
    return columns

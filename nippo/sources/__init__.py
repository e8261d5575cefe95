"""Row readers turning POS exports into header → value mappings."""

from __future__ import annotations

import mimetypes
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..config import NippoConfig

_EXCEL_MIME_TYPES = {
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


class RowReader(ABC):
    """Abstract base for reading one export file into rows."""

    @abstractmethod
    def read_rows(self, path: str | Path) -> list[dict[str, Any]]:
        """Read the file at ``path``; the first row holds the headers."""
        ...


def is_excel_file(name: str, mime: str | None = None) -> bool:
    """Decide by extension first, then by MIME type."""
    if Path(name).suffix.lower() in (".xlsx", ".xls", ".xlsm"):
        return True
    mime = (mime or mimetypes.guess_type(name)[0] or "").lower()
    if not mime:
        return False
    return mime in _EXCEL_MIME_TYPES or "spreadsheetml" in mime


def create_reader(path: str | Path, config: NippoConfig | None = None) -> RowReader:
    """Create a reader suited to the file's format."""
    if is_excel_file(str(path)):
        from .excel import ExcelRowReader

        return ExcelRowReader()

    from .csv_reader import CsvRowReader

    if config is not None:
        return CsvRowReader(encodings=config.input.encodings)
    return CsvRowReader()


def read_rows(path: str | Path, config: NippoConfig | None = None) -> list[dict[str, Any]]:
    return create_reader(path, config).read_rows(path)


__all__ = ["RowReader", "create_reader", "is_excel_file", "read_rows"]

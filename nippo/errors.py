"""Exceptions raised when a classification run has to be refused."""

from __future__ import annotations


class ReportError(Exception):
    """Base class for structural failures of a report run."""


class MissingInputError(ReportError):
    """One of the two required row sets was not supplied."""

    def __init__(self) -> None:
        super().__init__(
            "「商品別 CSV/Excel」と「支払方法別 CSV/Excel」を両方選んでください。"
        )


class EmptyStatsInputError(ReportError):
    """The payment summary export contained no rows."""

    def __init__(self) -> None:
        super().__init__("売上詳細CSVに行がありません。")

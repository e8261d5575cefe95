"""Classification pass and the session that owns the current report state."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo

from .catalog import PERIOD_COLUMN
from .config import NippoConfig
from .errors import EmptyStatsInputError, MissingInputError
from .models import ReportState
from .payments import PaymentClassifier
from .products import ProductClassifier
from .reassign import assign_all_to_default, reassign, reassign_to_course, shift_date
from .render import render_report
from .text import resolve_text

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]

_ISO_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}")
# 20250105 / 2025-01-05 first, then the looser 2025年1月5日 form
_FILENAME_DATES = (
    re.compile(r"(20\d{2})[-_.]?(\d{2})[-_.]?(\d{2})(?!\d)"),
    re.compile(r"(20\d{2})年?0?(\d{1,2})月?0?(\d{1,2})日?"),
)


def _date_from_filename(name: str) -> str | None:
    for pattern in _FILENAME_DATES:
        m = pattern.search(name)
        if not m:
            continue
        try:
            return date(int(m.group(1)), int(m.group(2)), int(m.group(3))).isoformat()
        except ValueError:
            continue
    return None


def infer_report_date(
    stats_row: Row,
    stats_name: str = "",
    product_name: str = "",
    today: date | None = None,
) -> str:
    """Pick the report date.

    Order: the 集計期間 column, the stats file name, the product file name,
    and finally ``today``.
    """
    m = _ISO_PREFIX.match(resolve_text(stats_row, [PERIOD_COLUMN]).strip())
    if m:
        try:
            return date.fromisoformat(m.group(0)).isoformat()
        except ValueError:
            logger.warning("集計期間の日付が不正です: %s", m.group(0))

    for name in (stats_name, product_name):
        found = _date_from_filename(Path(name).name) if name else None
        if found:
            return found

    return (today or date.today()).isoformat()


def classify_report(
    product_rows: Sequence[Row] | None,
    stats_rows: Sequence[Row] | None,
    config: NippoConfig | None = None,
    stats_name: str = "",
    product_name: str = "",
    today: date | None = None,
) -> ReportState:
    """Build a fresh ReportState from the two exports.

    Only the first stats row is used.

    Raises:
        MissingInputError: If either row set is None.
        EmptyStatsInputError: If the stats export has no rows.
    """
    if product_rows is None or stats_rows is None:
        raise MissingInputError()
    if not stats_rows:
        raise EmptyStatsInputError()

    config = config or NippoConfig()
    day_row = stats_rows[0]

    payment_classifier = PaymentClassifier(
        extra_aliases=config.payments.aliases,
        extra_ignore=config.payments.ignore_columns,
    )
    product_classifier = ProductClassifier(
        excluded_patterns=config.products.excluded_patterns,
    )

    summary = payment_classifier.classify(day_row)
    tally = product_classifier.classify(product_rows)

    state = ReportState(
        date=infer_report_date(day_row, stats_name, product_name, today),
        payments=summary.payments,
        other_payments=summary.other_payments,
        groups=summary.groups,
        people=summary.people,
        sides=tally.sides,
        ramen=tally.ramen,
        course_people=tally.course_people,
        unassigned=tally.unassigned,
    )
    logger.info(
        "商品 %d 行を集計しました (ラーメン %d 杯, 未振り分け %d 件)",
        len(product_rows),
        state.ramen_total,
        len(state.unassigned),
    )
    return state


class ReportSession:
    """Holds the current report and applies operator actions to it.

    A failed classification leaves the previous state untouched.
    """

    def __init__(self, config: NippoConfig | None = None) -> None:
        self._config = config or NippoConfig()
        self._state = ReportState(date=self._today().isoformat())

    def _today(self) -> date:
        return datetime.now(ZoneInfo(self._config.report.timezone)).date()

    @property
    def state(self) -> ReportState:
        return self._state

    def load(
        self,
        product_rows: Sequence[Row] | None,
        stats_rows: Sequence[Row] | None,
        stats_name: str = "",
        product_name: str = "",
    ) -> ReportState:
        self._state = classify_report(
            product_rows,
            stats_rows,
            config=self._config,
            stats_name=stats_name,
            product_name=product_name,
            today=self._today(),
        )
        return self._state

    def shift_date(self, days: int) -> ReportState:
        self._state = shift_date(self._state, days)
        return self._state

    def reassign(
        self,
        index: int,
        variant: str,
        as_set: bool = False,
        amount: int | float | None = None,
    ) -> ReportState:
        self._state = reassign(self._state, index, variant, as_set, amount)
        return self._state

    def reassign_to_course(
        self, index: int, variant: str, amount: int | float | None = None
    ) -> ReportState:
        self._state = reassign_to_course(self._state, index, variant, amount)
        return self._state

    def assign_all_to_default(self) -> int:
        """Bulk-assign to the configured variant; returns the units moved."""
        moved = self._state.unassigned_total
        self._state = assign_all_to_default(self._state, self._config.report.bulk_variant)
        return moved

    def render(self) -> str:
        return render_report(self._state)

"""Rendering of a ReportState into the daily report text."""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from .catalog import (
    PAYMENT_KEY_ORDER,
    PAYMENT_LABELS,
    RAMEN_DISPLAY_ORDER,
    RAMEN_LABELS,
    SIDE_LABELS,
)
from .models import ReportState

_WEEKDAYS = ["月曜日", "火曜日", "水曜日", "木曜日", "金曜日", "土曜日", "日曜日"]


def jp_currency(amount: int | float) -> str:
    """Format an amount as integer yen, e.g. ¥12,345."""
    yen = Decimal(str(amount or 0)).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return f"¥{int(yen):,}"


def jp_date_label(iso_date: str) -> str:
    """Format an ISO date as 1月5日（月曜日）."""
    d = date.fromisoformat(iso_date)
    return f"{d.month}月{d.day}日（{_WEEKDAYS[d.weekday()]}）"


def _count(n: int | float) -> str:
    return str(int(n)) if float(n).is_integer() else str(n)


def _payment_lines(state: ReportState) -> list[str]:
    lines = []
    for key in PAYMENT_KEY_ORDER:
        amount = state.payments.get(key, 0)
        if amount > 0:
            lines.append(f"{PAYMENT_LABELS[key]}　{jp_currency(amount)}")
    for other in state.other_payments:
        if other.amount > 0:
            lines.append(f"{other.label}　{jp_currency(other.amount)}")
    return lines


def _visitor_lines(state: ReportState) -> list[str]:
    lines = []
    if state.groups > 0:
        lines.append(f"{_count(state.groups)}組")
    if state.people > 0:
        lines.append(f"{_count(state.people)}人")
    return lines


def _ramen_lines(state: ReportState) -> list[str]:
    grand_total = state.ramen_total
    if grand_total <= 0:
        return []

    lines = [f"ラーメン  {grand_total}杯"]
    for key in RAMEN_DISPLAY_ORDER:
        count = state.ramen[key]
        if count.total <= 0:
            continue
        notes = []
        if count.set > 0:
            notes.append(f"+セット{count.set}杯")
        if count.course > 0:
            notes.append(f"+コース{count.course}杯")
        note = f"({', '.join(notes)})" if notes else ""
        lines.append(f"・{RAMEN_LABELS[key]}　{count.total}杯{note}")
    return lines


def _side_lines(state: ReportState) -> list[str]:
    return [
        f"{label}　{state.sides[key]}杯"
        for key, label in SIDE_LABELS.items()
        if state.sides.get(key, 0) > 0
    ]


def _course_lines(state: ReportState) -> list[str]:
    lines = []
    for entry in state.course_people:
        if entry.count <= 0:
            continue
        label = f"{entry.label}{entry.price}" if entry.price > 0 else entry.label
        lines.append(f"{label} {entry.count}名")
    return lines


def _unassigned_lines(state: ReportState) -> list[str]:
    if not state.unassigned:
        return []
    return [f"（要振り分け候補：未計上 {len(state.unassigned)} 件）"]


_SECTIONS = (
    _payment_lines,
    _visitor_lines,
    _ramen_lines,
    _side_lines,
    _course_lines,
    _unassigned_lines,
)


def render_report(state: ReportState) -> str:
    """Render the report; empty sections are omitted, one blank line between the rest."""
    blocks = [[jp_date_label(state.date)]]
    for section in _SECTIONS:
        lines = section(state)
        if lines:
            blocks.append(lines)
    return "\n\n".join("\n".join(block) for block in blocks)

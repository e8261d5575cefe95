"""Operator actions on a classified report.

Every function takes a ReportState and returns a new one; the input state is
never mutated.
"""

from __future__ import annotations

import copy
import logging
import math
from datetime import date, timedelta

from .catalog import DEFAULT_BULK_VARIANT, RAMEN_KEYS
from .models import ReportState

logger = logging.getLogger(__name__)


def _check_variant(variant: str) -> None:
    if variant not in RAMEN_KEYS:
        raise ValueError(
            f"不明なラーメン銘柄: {variant!r}  ({' / '.join(RAMEN_KEYS)} から選択してください)"
        )


def _clamp_amount(amount: int | float | None, remaining: int) -> int:
    """Floor the requested amount and clamp it to [0, remaining]."""
    if amount is None or not math.isfinite(amount):
        return remaining
    return max(0, min(math.floor(amount), remaining))


def _move(
    state: ReportState,
    index: int,
    variant: str,
    bucket: str,
    amount: int | float | None,
) -> ReportState:
    _check_variant(variant)
    if not 0 <= index < len(state.unassigned):
        logger.warning("未振り分け項目 %d は存在しません", index)
        return state

    item = state.unassigned[index]
    qty = _clamp_amount(amount, item.count)
    if qty <= 0:
        return state

    new = copy.deepcopy(state)
    count = new.ramen[variant]
    setattr(count, bucket, getattr(count, bucket) + qty)
    if qty >= item.count:
        del new.unassigned[index]
    else:
        new.unassigned[index].count = item.count - qty

    logger.info("%s を %s(%s) に %d 杯振り分けました", item.name, variant, bucket, qty)
    return new


def reassign(
    state: ReportState,
    index: int,
    variant: str,
    as_set: bool = False,
    amount: int | float | None = None,
) -> ReportState:
    """Move up to ``amount`` units of an unassigned item into a variant.

    The units go to the variant's set count when ``as_set`` is true,
    otherwise to its plain count. ``amount`` defaults to everything that
    remains on the item.
    """
    return _move(state, index, variant, "set" if as_set else "plain", amount)


def reassign_to_course(
    state: ReportState,
    index: int,
    variant: str,
    amount: int | float | None = None,
) -> ReportState:
    """Like reassign, but into the variant's course count."""
    return _move(state, index, variant, "course", amount)


def assign_all_to_default(
    state: ReportState, variant: str = DEFAULT_BULK_VARIANT
) -> ReportState:
    """Book every unassigned unit as a set of ``variant`` and clear the list."""
    _check_variant(variant)
    if not state.unassigned:
        logger.info("未振り分けの項目はありません")
        return state

    new = copy.deepcopy(state)
    moved = new.unassigned_total
    new.ramen[variant].set += moved
    new.unassigned.clear()
    logger.info("未振り分け %d 杯を %s セットに一括計上しました", moved, variant)
    return new


def shift_date(state: ReportState, days: int) -> ReportState:
    """Move the report date by whole days."""
    new = copy.deepcopy(state)
    new.date = (date.fromisoformat(state.date) + timedelta(days=days)).isoformat()
    return new

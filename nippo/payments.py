"""Payment channel classification of the day's stats row."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .catalog import (
    GROUP_CANDS,
    PAYMENT_ALIASES,
    PAYMENT_IGNORE_COLUMNS,
    PAYMENT_KEY_ORDER,
    PAYMENT_LABELS,
    PEOPLE_CANDS,
)
from .models import OtherPayment, empty_payments
from .text import normalize, resolve_numeric, to_number

logger = logging.getLogger(__name__)


@dataclass
class PaymentSummary:
    payments: dict[str, int | float] = field(default_factory=empty_payments)
    other_payments: list[OtherPayment] = field(default_factory=list)
    groups: int | float = 0
    people: int | float = 0


class PaymentClassifier:
    """Maps stats-row columns onto the fixed payment channels.

    Columns that match no channel and are not known non-payment figures
    (tax breakdowns, discounts, headcounts...) are kept as other payments.
    """

    def __init__(
        self,
        extra_aliases: Mapping[str, Iterable[str]] | None = None,
        extra_ignore: Iterable[str] = (),
    ) -> None:
        aliases = {key: list(PAYMENT_ALIASES[key]) for key in PAYMENT_KEY_ORDER}
        for key, names in (extra_aliases or {}).items():
            if key not in aliases:
                raise ValueError(
                    f"不明な支払チャネル: {key!r}  "
                    f"({' / '.join(PAYMENT_KEY_ORDER)} から選択してください)"
                )
            aliases[key].extend(names)
        self._aliases = aliases

        self._alias_map: dict[str, str] = {}
        for key in PAYMENT_KEY_ORDER:
            for alias in aliases[key]:
                self._alias_map[normalize(alias)] = key

        ignore = set(self._alias_map)
        ignore.update(normalize(label) for label in PAYMENT_LABELS.values())
        ignore.update(normalize(label) for label in PAYMENT_IGNORE_COLUMNS)
        ignore.update(normalize(label) for label in extra_ignore)
        self._ignore = ignore

    def channel_for(self, header: str) -> str | None:
        """Return the channel whose alias matches the header, if any."""
        return self._alias_map.get(normalize(header))

    def classify(self, row: Mapping[str, Any]) -> PaymentSummary:
        summary = PaymentSummary()

        for raw_key, raw_value in row.items():
            amount = to_number(raw_value)
            if not amount:
                continue
            nk = normalize(raw_key)
            channel = self._alias_map.get(nk)
            # total is never accumulated here; see _pick_total
            if channel and channel != "total":
                summary.payments[channel] += amount
                continue
            if nk in self._ignore or amount < 0:
                continue
            logger.debug("未登録の支払列: %s = %s", raw_key, amount)
            summary.other_payments.append(OtherPayment(label=str(raw_key), amount=amount))

        total = self._pick_total(row)
        if total:
            summary.payments["total"] = total

        summary.groups = resolve_numeric(row, GROUP_CANDS)
        summary.people = resolve_numeric(row, PEOPLE_CANDS)
        return summary

    def _pick_total(self, row: Mapping[str, Any]) -> int | float:
        # Tax-included gross only: first alias with a positive value wins
        for alias in self._aliases["total"]:
            value = resolve_numeric(row, [alias])
            if value > 0:
                return value
        return 0

"""Product line classification into ramen variants, sides and course bookings.

Each product row goes through an ordered list of rules; the first rule whose
predicate matches decides the row's fate and later rules are not consulted.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .catalog import PRODUCT_CATEGORY_CANDS, PRODUCT_NAME_CANDS, PRODUCT_QTY_CANDS
from .models import (
    CoursePeopleEntry,
    RamenCount,
    UnassignedItem,
    empty_ramen,
    empty_sides,
)
from .text import resolve_numeric, resolve_text

logger = logging.getLogger(__name__)


def _word(pattern: str) -> str:
    """Wrap a romanized keyword so it only matches as a standalone ASCII word."""
    return rf"(?<![A-Za-z0-9_]){pattern}(?![A-Za-z0-9_])"


# Never counted anywhere (e.g. the 月花 course bundle)
EXCLUDED_PRODUCT_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"月花.*コース", re.IGNORECASE),
]

# 「花」or「月花」…セット cannot be decided from the name alone
_FORCE_AMBIG_SET_HANA_GEKKA = re.compile(
    r"ラーメン.*(?:「|『)?花(?:」|』)?\s*or\s*(?:「|『)?月花(?:」|』)?.*セット",
    re.IGNORECASE,
)
_SET_WORD = re.compile(r"セット|set", re.IGNORECASE)
_SET_MARKER = re.compile(r"セット|" + _word("set"), re.IGNORECASE)

_YOKUBARI_CURRY = re.compile(r"よくばり.*カレー", re.IGNORECASE)
_PATTY_CURRY = re.compile(r"(?:パティ|ﾊﾟﾃｨ).*(?:カレー|ｶﾚｰ)", re.IGNORECASE)

_COURSE_NAME = re.compile(r"コース|course", re.IGNORECASE)
_COURSE_CATEGORY = re.compile(r"予約メニュー|予約|コース|course", re.IGNORECASE)
_DINNER = re.compile(r"ディナー|dinner", re.IGNORECASE)
_CROWDFUND = re.compile(r"クラファン", re.IGNORECASE)
_NAME_PEOPLE = re.compile(r"([0-9]+)名")
_PRICE = re.compile(r"([0-9]{4,5})")

_RAMENISH = re.compile(r"ラーメン|らーめん|麺|ramen", re.IGNORECASE)

# Compound names come before the names they contain (雪月花 ⊃ 雪月 ⊃ 月 ...)
VARIANT_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    ("雪月花", re.compile(r"雪月花|setsugekka", re.IGNORECASE)),
    ("雪月", re.compile(r"雪月|setsugetsu", re.IGNORECASE)),
    ("月花", re.compile(r"月花|gekka", re.IGNORECASE)),
    ("氷花", re.compile(r"氷花|hyouka|hyoka|ice\s*hana", re.IGNORECASE)),
    ("花こふれ", re.compile(r"花こふれ|hana\s*cof+ret|hana\s*coffret", re.IGNORECASE)),
    ("カレーラーメン", re.compile(r"(?:カレー|curry).*(?:ラーメン|らーめん|ramen)", re.IGNORECASE)),
    ("花", re.compile(r"豆乳ラーメン「?花|(?:^|\s)花(?:」|$)|" + _word("hana"), re.IGNORECASE)),
    ("月", re.compile(r"(?:「|^|\s)月(?:」|$)|" + _word("tsuki"), re.IGNORECASE)),
    ("雪", re.compile(r"(?:「|^|\s)雪(?:」|$)|" + _word("yuki"), re.IGNORECASE)),
]


def guess_variant(name: str) -> str | None:
    """Return the ramen variant key a product name refers to, if any."""
    for key, pattern in VARIANT_PATTERNS:
        if pattern.search(name):
            return key
    return None


def is_set(name: str, category: str = "") -> bool:
    return bool(_SET_MARKER.search(name)) or "セット" in category


def parse_course_entry(name: str, quantity: int) -> CoursePeopleEntry:
    """Build a course booking from a product name.

    The price is the first 4-5 digit run in the name, the headcount comes
    from an "N名" marker and falls back to the sold quantity.
    """
    price_match = _PRICE.search(name)
    people_match = _NAME_PEOPLE.search(name)
    if _DINNER.search(name):
        label = "ディナー"
    elif _CROWDFUND.search(name):
        label = "クラファンコース"
    else:
        label = "コース"
    return CoursePeopleEntry(
        label=label,
        price=int(price_match.group(1)) if price_match else 0,
        count=int(people_match.group(1)) if people_match else quantity,
    )


@dataclass
class ProductLine:
    """The fields of a product row the rules look at."""

    name: str
    category: str
    quantity: int


@dataclass
class ProductTally:
    ramen: dict[str, RamenCount] = field(default_factory=empty_ramen)
    sides: dict[str, int] = field(default_factory=empty_sides)
    course_people: list[CoursePeopleEntry] = field(default_factory=list)
    unassigned: list[UnassignedItem] = field(default_factory=list)


@dataclass(frozen=True)
class ProductRule:
    name: str
    matches: Callable[[ProductLine], bool]
    apply: Callable[[ProductLine, ProductTally], None]


# ── Handlers ──


def _discard(line: ProductLine, tally: ProductTally) -> None:
    pass


def _to_unassigned(line: ProductLine, tally: ProductTally) -> None:
    # One entry per row, same-named rows are not merged
    tally.unassigned.append(UnassignedItem(name=line.name, count=line.quantity))


def _to_side(side: str) -> Callable[[ProductLine, ProductTally], None]:
    def handler(line: ProductLine, tally: ProductTally) -> None:
        tally.sides[side] += line.quantity

    return handler


def _to_course(line: ProductLine, tally: ProductTally) -> None:
    tally.course_people.append(parse_course_entry(line.name, line.quantity))


def _to_ramen(line: ProductLine, tally: ProductTally) -> None:
    key = guess_variant(line.name)
    if key is None:
        return
    if is_set(line.name, line.category):
        tally.ramen[key].set += line.quantity
    else:
        tally.ramen[key].plain += line.quantity


# ── Predicates ──


def _is_forced_ambiguous(line: ProductLine) -> bool:
    return bool(
        _FORCE_AMBIG_SET_HANA_GEKKA.search(line.name) and _SET_WORD.search(line.name)
    )


def _is_course(line: ProductLine) -> bool:
    return bool(_COURSE_NAME.search(line.name) or _COURSE_CATEGORY.search(line.category))


def _is_ramenish(line: ProductLine) -> bool:
    return bool(_RAMENISH.search(line.name))


class ProductClassifier:
    """Buckets per-product rows with a first-match-wins rule list."""

    def __init__(self, excluded_patterns: Iterable[str] = ()) -> None:
        self._excluded = list(EXCLUDED_PRODUCT_PATTERNS)
        for pattern in excluded_patterns:
            try:
                self._excluded.append(re.compile(pattern, re.IGNORECASE))
            except re.error as e:
                raise ValueError(f"除外パターンが不正です: {pattern!r} ({e})") from e

        self.rules: tuple[ProductRule, ...] = (
            ProductRule("excluded", self._is_excluded, _discard),
            ProductRule("forced_ambiguous", _is_forced_ambiguous, _to_unassigned),
            ProductRule(
                "yokubari_curry",
                lambda line: bool(_YOKUBARI_CURRY.search(line.name)),
                _to_side("yokubari_curry"),
            ),
            ProductRule(
                "patty_curry",
                lambda line: bool(_PATTY_CURRY.search(line.name)),
                _to_side("patty_curry"),
            ),
            ProductRule("course", _is_course, _to_course),
            ProductRule(
                "ramen",
                lambda line: guess_variant(line.name) is not None,
                _to_ramen,
            ),
            ProductRule("ramenish", _is_ramenish, _to_unassigned),
        )

    def _is_excluded(self, line: ProductLine) -> bool:
        return any(rx.search(line.name) for rx in self._excluded)

    @staticmethod
    def read_line(row: Mapping[str, Any]) -> ProductLine:
        return ProductLine(
            name=resolve_text(row, PRODUCT_NAME_CANDS),
            category=resolve_text(row, PRODUCT_CATEGORY_CANDS),
            quantity=int(resolve_numeric(row, PRODUCT_QTY_CANDS)),
        )

    def classify_line(self, line: ProductLine, tally: ProductTally) -> str | None:
        """Apply the first matching rule to one line.

        Returns the name of the rule that fired, or None when the line was
        skipped (no quantity) or matched nothing.
        """
        if line.quantity <= 0:
            return None
        for rule in self.rules:
            if rule.matches(line):
                rule.apply(line, tally)
                logger.debug("%s × %d → %s", line.name, line.quantity, rule.name)
                return rule.name
        return None

    def classify(self, rows: Iterable[Mapping[str, Any]]) -> ProductTally:
        tally = ProductTally()
        for row in rows:
            self.classify_line(self.read_line(row), tally)
        return tally

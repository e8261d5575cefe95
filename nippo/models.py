"""Data models for the aggregated daily report."""

from __future__ import annotations

from dataclasses import dataclass, field

from .catalog import PAYMENT_KEY_ORDER, RAMEN_KEYS, SIDE_LABELS


@dataclass
class OtherPayment:
    """A positive stats column that matched no known payment channel."""

    label: str  # raw header
    amount: int | float


@dataclass
class CoursePeopleEntry:
    """A reservable course booking parsed from a product line."""

    label: str  # ディナー / クラファンコース / コース
    price: int = 0
    count: int = 0  # headcount


@dataclass
class UnassignedItem:
    """A product line waiting for the operator to pick its variant."""

    name: str
    count: int


@dataclass
class RamenCount:
    plain: int = 0
    set: int = 0
    course: int = 0

    @property
    def total(self) -> int:
        return self.plain + self.set + self.course


def empty_payments() -> dict[str, int | float]:
    return {key: 0 for key in PAYMENT_KEY_ORDER}


def empty_ramen() -> dict[str, RamenCount]:
    return {key: RamenCount() for key in RAMEN_KEYS}


def empty_sides() -> dict[str, int]:
    return {key: 0 for key in SIDE_LABELS}


@dataclass
class ReportState:
    """Everything the daily report is rendered from."""

    date: str  # ISO calendar date
    payments: dict[str, int | float] = field(default_factory=empty_payments)
    other_payments: list[OtherPayment] = field(default_factory=list)
    groups: int | float = 0
    people: int | float = 0
    sides: dict[str, int] = field(default_factory=empty_sides)
    ramen: dict[str, RamenCount] = field(default_factory=empty_ramen)
    course_people: list[CoursePeopleEntry] = field(default_factory=list)
    unassigned: list[UnassignedItem] = field(default_factory=list)

    @property
    def ramen_total(self) -> int:
        return sum(count.total for count in self.ramen.values())

    @property
    def unassigned_total(self) -> int:
        return sum(item.count for item in self.unassigned)

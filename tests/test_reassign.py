"""Tests for manual reassignment of unassigned items."""

import pytest

from nippo.models import ReportState, UnassignedItem
from nippo.reassign import (
    assign_all_to_default,
    reassign,
    reassign_to_course,
    shift_date,
)


def _state(*counts: int) -> ReportState:
    state = ReportState(date="2025-01-06")
    state.unassigned = [
        UnassignedItem(name=f"謎のラーメン{i}", count=c) for i, c in enumerate(counts)
    ]
    return state


class TestReassign:
    def test_partial(self):
        state = _state(3)
        new = reassign(state, 0, "花", as_set=False, amount=1)
        assert new.unassigned == [UnassignedItem(name="謎のラーメン0", count=2)]
        assert new.ramen["花"].plain == 1

    def test_input_not_mutated(self):
        state = _state(3)
        reassign(state, 0, "花", amount=1)
        assert state.unassigned[0].count == 3
        assert state.ramen["花"].plain == 0

    def test_default_moves_everything(self):
        new = reassign(_state(3, 2), 0, "月花", as_set=True)
        assert new.ramen["月花"].set == 3
        assert [item.count for item in new.unassigned] == [2]

    def test_amount_clamped_to_remaining(self):
        new = reassign(_state(3), 0, "花", amount=10)
        assert new.ramen["花"].plain == 3
        assert new.unassigned == []

    def test_amount_floored(self):
        new = reassign(_state(3), 0, "花", amount=1.7)
        assert new.ramen["花"].plain == 1
        assert new.unassigned[0].count == 2

    def test_non_finite_amount_moves_everything(self):
        new = reassign(_state(3), 0, "花", amount=float("nan"))
        assert new.ramen["花"].plain == 3

    @pytest.mark.parametrize("amount", [0, -1, 0.5])
    def test_noop_amounts(self, amount):
        state = _state(3)
        assert reassign(state, 0, "花", amount=amount) is state

    def test_bad_index(self):
        state = _state(3)
        assert reassign(state, 5, "花") is state
        assert reassign(state, -1, "花") is state

    def test_unknown_variant(self):
        with pytest.raises(ValueError, match="不明なラーメン銘柄"):
            reassign(_state(3), 0, "星")

    def test_to_course(self):
        new = reassign_to_course(_state(2), 0, "雪月", amount=1)
        assert new.ramen["雪月"].course == 1
        assert new.ramen["雪月"].plain == 0
        assert new.unassigned[0].count == 1


class TestAssignAll:
    def test_moves_sum_to_set(self):
        state = _state(3, 2, 1)
        state.ramen["花"].set = 4
        new = assign_all_to_default(state)
        assert new.ramen["花"].set == 10
        assert new.unassigned == []

    def test_other_variant(self):
        new = assign_all_to_default(_state(2), "月花")
        assert new.ramen["月花"].set == 2

    def test_empty_is_noop(self):
        state = _state()
        assert assign_all_to_default(state) is state


class TestShiftDate:
    def test_previous_day(self):
        assert shift_date(_state(), -1).date == "2025-01-05"

    def test_across_month(self):
        state = ReportState(date="2025-01-31")
        assert shift_date(state, 1).date == "2025-02-01"

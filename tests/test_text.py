"""Tests for header normalization and field resolution."""

from nippo.text import normalize, resolve_numeric, resolve_text, to_number


class TestNormalize:
    def test_case_and_whitespace(self):
        assert normalize("  PayPay ") == "paypay"

    def test_non_breaking_space(self):
        assert normalize("\u00a0Cash\u00a0") == "cash"

    def test_none(self):
        assert normalize(None) == ""


class TestToNumber:
    def test_yen_with_separators(self):
        assert to_number("¥1,234") == 1234

    def test_passthrough_number(self):
        assert to_number(500) == 500
        assert to_number(2.5) == 2.5

    def test_integral_float_becomes_int(self):
        result = to_number(3.0)
        assert result == 3
        assert isinstance(result, int)

    def test_negative(self):
        assert to_number("-300円") == -300

    def test_decimal(self):
        assert to_number(" 12.5 ") == 12.5

    def test_unparseable(self):
        assert to_number("なし") == 0
        assert to_number("") == 0
        assert to_number(None) == 0

    def test_nan(self):
        assert to_number(float("nan")) == 0


class TestResolve:
    def test_candidate_order_wins_over_column_order(self):
        row = {"数量": 5, "商品販売数": 2}
        assert resolve_numeric(row, ["商品販売数", "数量"]) == 2

    def test_normalized_header_match(self):
        row = {" Qty ": "3"}
        assert resolve_numeric(row, ["qty"]) == 3

    def test_missing_column(self):
        assert resolve_numeric({"foo": 1}, ["bar"]) == 0
        assert resolve_text({"foo": "x"}, ["bar"]) == ""

    def test_text_value(self):
        row = {"商品名": "豆乳ラーメン「花」"}
        assert resolve_text(row, ["品名", "商品名"]) == "豆乳ラーメン「花」"

    def test_text_of_none_cell(self):
        assert resolve_text({"商品名": None}, ["商品名"]) == ""

    def test_unparseable_cell_is_zero(self):
        assert resolve_numeric({"数量": "-"}, ["数量"]) == 0

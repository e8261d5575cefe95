"""Tests for product line classification."""

import pytest

from nippo.models import CoursePeopleEntry, UnassignedItem
from nippo.products import (
    ProductClassifier,
    ProductLine,
    ProductTally,
    guess_variant,
    is_set,
    parse_course_entry,
)


@pytest.fixture
def classifier():
    return ProductClassifier()


def _line(name: str, quantity: int = 1, category: str = "") -> ProductLine:
    return ProductLine(name=name, category=category, quantity=quantity)


class TestGuessVariant:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("豆乳ラーメン「花」", "花"),
            ("雪月花セット", "雪月花"),
            ("雪月ラーメン", "雪月"),
            ("月花", "月花"),
            ("氷花（夏季限定）", "氷花"),
            ("花こふれ", "花こふれ"),
            ("Hana Coffret", "花こふれ"),
            ("カレーラーメン", "カレーラーメン"),
            ("ラーメン「月」", "月"),
            ("ランチ 雪", "雪"),
            ("Hana Ramen", "花"),
            ("setsugekka", "雪月花"),
        ],
    )
    def test_known_names(self, name, expected):
        assert guess_variant(name) == expected

    def test_compound_before_component(self):
        # 雪月花 contains 雪月, 月花, 月 and 花
        assert guess_variant("雪月花") == "雪月花"

    def test_romaji_needs_word_boundary(self):
        assert guess_variant("shanahan") is None

    def test_unknown(self):
        assert guess_variant("謎のラーメン") is None
        assert guess_variant("生ビール") is None


class TestIsSet:
    def test_name_marker(self):
        assert is_set("花セット")
        assert is_set("Hana set")

    def test_category_marker(self):
        assert is_set("雪月", "セットメニュー")

    def test_set_inside_word(self):
        assert not is_set("sunset")

    def test_plain(self):
        assert not is_set("豆乳ラーメン「花」", "ラーメン")


class TestParseCourseEntry:
    def test_dinner_with_price_and_people(self):
        entry = parse_course_entry("ディナーコース 5500円（2名様）", 1)
        assert entry == CoursePeopleEntry(label="ディナー", price=5500, count=2)

    def test_crowdfunding(self):
        entry = parse_course_entry("クラファン限定コース 10000", 3)
        assert entry == CoursePeopleEntry(label="クラファンコース", price=10000, count=3)

    def test_generic_without_price(self):
        entry = parse_course_entry("おまかせコース", 4)
        assert entry == CoursePeopleEntry(label="コース", price=0, count=4)


class TestClassifyLine:
    def test_skip_zero_quantity(self, classifier):
        tally = ProductTally()
        assert classifier.classify_line(_line("豆乳ラーメン「花」", 0), tally) is None
        assert tally.ramen["花"].plain == 0

    def test_skip_negative_quantity(self, classifier):
        tally = ProductTally()
        assert classifier.classify_line(_line("豆乳ラーメン「花」", -2), tally) is None
        assert tally.ramen["花"].plain == 0

    def test_hard_exclusion(self, classifier):
        tally = ProductTally()
        rule = classifier.classify_line(_line("月花コース（2名様）"), tally)
        assert rule == "excluded"
        assert tally.course_people == []
        assert tally.unassigned == []
        assert sum(c.total for c in tally.ramen.values()) == 0

    def test_forced_ambiguity(self, classifier):
        tally = ProductTally()
        name = "ラーメン「花」or「月花」セット"
        assert classifier.classify_line(_line(name, 2), tally) == "forced_ambiguous"
        assert tally.unassigned == [UnassignedItem(name=name, count=2)]
        assert tally.ramen["月花"].set == 0

    def test_sides(self, classifier):
        tally = ProductTally()
        classifier.classify_line(_line("よくばりカレー", 3), tally)
        classifier.classify_line(_line("ﾊﾟﾃｨｶﾚｰ", 1), tally)
        classifier.classify_line(_line("パティカレー", 2), tally)
        assert tally.sides == {"yokubari_curry": 3, "patty_curry": 3}

    def test_side_before_course(self, classifier):
        tally = ProductTally()
        assert classifier.classify_line(_line("よくばりカレーコース"), tally) == "yokubari_curry"
        assert tally.course_people == []

    def test_course_never_counts_as_ramen(self, classifier):
        tally = ProductTally()
        assert classifier.classify_line(_line("花コース 3名", 1), tally) == "course"
        assert tally.course_people == [CoursePeopleEntry(label="コース", price=0, count=3)]
        assert tally.ramen["花"].total == 0

    def test_course_by_category(self, classifier):
        tally = ProductTally()
        line = _line("雪月", 2, category="予約メニュー")
        assert classifier.classify_line(line, tally) == "course"
        assert tally.course_people[0].count == 2
        assert tally.ramen["雪月"].total == 0

    def test_ramen_plain_and_set(self, classifier):
        tally = ProductTally()
        classifier.classify_line(_line("豆乳ラーメン「花」", 2), tally)
        classifier.classify_line(_line("雪月", 1, category="セット"), tally)
        assert tally.ramen["花"].plain == 2
        assert tally.ramen["雪月"].set == 1

    def test_ramenish_fallback_not_merged(self, classifier):
        tally = ProductTally()
        classifier.classify_line(_line("謎のラーメン", 3), tally)
        classifier.classify_line(_line("謎のラーメン", 1), tally)
        assert tally.unassigned == [
            UnassignedItem(name="謎のラーメン", count=3),
            UnassignedItem(name="謎のラーメン", count=1),
        ]

    def test_unrelated_dropped(self, classifier):
        tally = ProductTally()
        assert classifier.classify_line(_line("生ビール", 4), tally) is None
        assert tally.unassigned == []

    def test_extra_excluded_pattern(self):
        classifier = ProductClassifier(excluded_patterns=["試食"])
        tally = ProductTally()
        assert classifier.classify_line(_line("試食ラーメン"), tally) == "excluded"

    def test_invalid_excluded_pattern(self):
        with pytest.raises(ValueError):
            ProductClassifier(excluded_patterns=["("])

    def test_rule_order(self, classifier):
        assert [rule.name for rule in classifier.rules] == [
            "excluded",
            "forced_ambiguous",
            "yokubari_curry",
            "patty_curry",
            "course",
            "ramen",
            "ramenish",
        ]


class TestClassifyRows:
    def test_scenario(self, classifier):
        rows = [
            {"name": "豆乳ラーメン「花」", "qty": 2},
            {"name": "雪月花セット", "qty": 1},
            {"name": "よくばりカレー", "qty": 3},
        ]
        tally = classifier.classify(rows)
        assert tally.ramen["花"].plain == 2
        assert tally.ramen["雪月花"].set == 1
        assert tally.sides["yokubari_curry"] == 3
        assert tally.unassigned == []

    def test_pos_headers(self, classifier):
        rows = [
            {"商品名": "カレーラーメン", "カテゴリ": "ラーメン", "商品販売数": "4"},
            {"商品名": "月花コース（2名様）", "カテゴリ": "予約メニュー", "商品販売数": "1"},
            {"商品名": "ディナーコース 6000円（4名様）", "カテゴリ": "予約メニュー", "商品販売数": "1"},
        ]
        tally = classifier.classify(rows)
        assert tally.ramen["カレーラーメン"].plain == 4
        assert tally.course_people == [CoursePeopleEntry(label="ディナー", price=6000, count=4)]

    def test_missing_quantity_column(self, classifier):
        tally = classifier.classify([{"商品名": "豆乳ラーメン「花」"}])
        assert tally.ramen["花"].total == 0

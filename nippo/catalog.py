"""Closed vocabularies of the report: ramen variants, payment channels, headers."""

from __future__ import annotations

# Ramen variants (dictionary order is the canonical key order)
RAMEN_LABELS: dict[str, str] = {
    "花": "花",
    "月": "月（ランチ）",
    "雪": "雪（ランチ）",
    "月花": "月花",
    "雪月": "雪月",
    "雪月花": "雪月花",
    "花こふれ": "花こふれ",
    "カレーラーメン": "カレーラーメン",
    "氷花": "氷花",
}
RAMEN_KEYS: tuple[str, ...] = tuple(RAMEN_LABELS)
RAMEN_DISPLAY_ORDER: tuple[str, ...] = (
    "雪", "月", "花", "月花", "雪月", "雪月花", "花こふれ", "カレーラーメン", "氷花",
)
# Variants offered for set/course routing at the operator surface
SET_ALLOWED_KEYS: tuple[str, ...] = ("花", "月花", "雪月")
DEFAULT_BULK_VARIANT = "花"

# Side dishes tracked outside the ramen totals
SIDE_LABELS: dict[str, str] = {
    "yokubari_curry": "よくばりカレー",
    "patty_curry": "パティカレー",
}

# Payment channels
PAYMENT_KEY_ORDER: tuple[str, ...] = (
    "total", "card", "tablecheck", "paypay", "cash", "funfo",
)
PAYMENT_LABELS: dict[str, str] = {
    "total": "売上",
    "card": "クレジット・IC（Square）",
    "tablecheck": "Table check",
    "paypay": "PayPay",
    "cash": "現金",
    "funfo": "Funfo",
}
# total: tax-included only, in priority order
PAYMENT_ALIASES: dict[str, list[str]] = {
    "total": ["売上高（税込み）", "売上高 (税込み)", "売上高 (税込)", "税込み売上高", "税込売上"],
    "card": ["Square", "square", "クレジット・IC", "クレジット・IC（Square）", "クレジット･IC"],
    "tablecheck": ["Table check", "TableCheck", "テーブルチェック"],
    "paypay": ["PayPay", "paypay", "Pay Pay"],
    "cash": ["現金", "cash", "Cash", "CASH"],
    "funfo": ["Funfo", "fnfo", "FNFO", "Fnfo"],
}

# Numeric stats columns that are not payments
PAYMENT_IGNORE_COLUMNS: list[str] = [
    "会計数", "組数", "groups", "group count",
    "客数", "来客数", "人数", "customers",
    "集計期間",
    "割引前 売上高",
    "売上高（税抜き）",
    "売上高（非課税）",
    "内消費税（合計）",
    "内消費税（10%標準）",
    "内消費税（8%軽減）",
    "売上高（10%標準）",
    "売上高（8%軽減）",
    "会計単価",
    "客単価",
    "商品販売数",
    "割引合計_1",
    "会計割引",
    "割引合計",
    "割引",
]

# Header candidates, most specific first
PRODUCT_NAME_CANDS: list[str] = ["商品名", "品名", "メニュー", "商品", "Item Name", "item", "name"]
PRODUCT_QTY_CANDS: list[str] = ["商品販売数", "販売数", "数量", "個数", "Quantity", "Qty"]
PRODUCT_CATEGORY_CANDS: list[str] = ["カテゴリ", "カテゴリー", "category", "Category"]
GROUP_CANDS: list[str] = ["会計数", "組数", "groups", "group count"]
PEOPLE_CANDS: list[str] = ["客数", "来客数", "人数", "customers"]
PERIOD_COLUMN = "集計期間"

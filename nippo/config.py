"""TOML configuration loader for the report generator."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .catalog import DEFAULT_BULK_VARIANT, PAYMENT_KEY_ORDER, RAMEN_KEYS

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


@dataclass
class InputConfig:
    # Tried in order when decoding CSV exports
    encodings: list[str] = field(default_factory=lambda: ["utf-8-sig", "cp932"])


@dataclass
class PaymentConfig:
    aliases: dict[str, list[str]] = field(default_factory=dict)
    ignore_columns: list[str] = field(default_factory=list)


@dataclass
class ProductConfig:
    excluded_patterns: list[str] = field(default_factory=list)


@dataclass
class ReportConfig:
    timezone: str = "Asia/Tokyo"
    bulk_variant: str = DEFAULT_BULK_VARIANT
    output_dir: str = "."


@dataclass
class NippoConfig:
    input: InputConfig = field(default_factory=InputConfig)
    payments: PaymentConfig = field(default_factory=PaymentConfig)
    products: ProductConfig = field(default_factory=ProductConfig)
    report: ReportConfig = field(default_factory=ReportConfig)


def load_config(path: str | Path | None = None) -> NippoConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    Timezone and output directory can be supplied via environment variables
    when the file leaves them unset.

    Raises:
        ValueError: On an unknown payment channel, ramen variant or timezone.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path)
        if p.exists():
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    inp = raw.get("input", {})
    pay = raw.get("payments", {})
    prd = raw.get("products", {})
    rpt = raw.get("report", {})

    aliases = pay.get("aliases", {})
    unknown = [key for key in aliases if key not in PAYMENT_KEY_ORDER]
    if unknown:
        raise ValueError(
            f"不明な支払チャネル: {', '.join(unknown)}  "
            f"({' / '.join(PAYMENT_KEY_ORDER)} から選択してください)"
        )

    bulk_variant = rpt.get("bulk_variant", DEFAULT_BULK_VARIANT)
    if bulk_variant not in RAMEN_KEYS:
        raise ValueError(f"不明なラーメン銘柄: {bulk_variant!r}")

    # Resolve: config file → environment variable → default
    timezone = rpt.get("timezone", "") or os.environ.get("NIPPO_TIMEZONE", "") or "Asia/Tokyo"
    output_dir = rpt.get("output_dir", "") or os.environ.get("NIPPO_OUTPUT_DIR", "") or "."
    try:
        ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"不明なタイムゾーン: {timezone!r}")

    return NippoConfig(
        input=InputConfig(
            encodings=inp.get("encodings", ["utf-8-sig", "cp932"]),
        ),
        payments=PaymentConfig(
            aliases={key: list(names) for key, names in aliases.items()},
            ignore_columns=pay.get("ignore_columns", []),
        ),
        products=ProductConfig(
            excluded_patterns=prd.get("excluded_patterns", []),
        ),
        report=ReportConfig(
            timezone=timezone,
            bulk_variant=bulk_variant,
            output_dir=output_dir,
        ),
    )

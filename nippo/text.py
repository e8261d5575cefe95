"""Header normalization and cell lookup helpers shared by the classifiers."""

from __future__ import annotations

import math
import re
from collections.abc import Mapping, Sequence
from typing import Any

_NUMBER_PATTERN = re.compile(r"-?\d+(?:\.\d+)?")
_SEPARATORS = re.compile(r"[,\s]")


def normalize(s: Any) -> str:
    """Canonical form used for every header/alias comparison."""
    if s is None:
        return ""
    return str(s).replace("\u00a0", " ").strip().lower()


def to_number(value: Any) -> int | float:
    """Coerce a cell value to a number.

    Text like "¥1,234" or " 12 杯" yields its first numeric substring.
    Integral results come back as int. Anything unparseable is 0.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        if isinstance(value, float):
            if math.isnan(value) or math.isinf(value):
                return 0
            return int(value) if value.is_integer() else value
        return value

    m = _NUMBER_PATTERN.search(_SEPARATORS.sub("", str(value)))
    if not m:
        return 0
    number = float(m.group(0))
    return int(number) if number.is_integer() else number


def _find_column(row: Mapping[str, Any], candidates: Sequence[str]) -> str | None:
    # Candidate order decides priority, not column order.
    keys = list(row.keys())
    normalized = [normalize(k) for k in keys]
    for cand in candidates:
        target = normalize(cand)
        for key, norm_key in zip(keys, normalized):
            if norm_key == target:
                return key
    return None


def resolve_numeric(row: Mapping[str, Any], candidates: Sequence[str]) -> int | float:
    """Numeric value of the first candidate header present in the row."""
    key = _find_column(row, candidates)
    if key is None:
        return 0
    return to_number(row[key])


def resolve_text(row: Mapping[str, Any], candidates: Sequence[str]) -> str:
    """Raw text of the first candidate header present in the row."""
    key = _find_column(row, candidates)
    if key is None:
        return ""
    value = row[key]
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)

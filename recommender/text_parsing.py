"""
Local Text Parsing

Deterministic helpers that read shopping intent straight from the user's text.
They back up (and for prices, cross-check) the LLM extraction.
"""

from __future__ import annotations

import math
import re
from typing import Any, NamedTuple, Optional, Union

from recommender.lookups import LookupTables

_CURRENCY_RE = re.compile(r"[,₹$€£]")
_GROUPING_COMMA_RE = re.compile(r"(\d),(\d)")

# Ordered: first match wins.
_RANGE_RE = re.compile(r"(?:between|from)\s+(\d{1,6})\s+(?:and|to|-)\s+(\d{1,6})")
_BARE_RANGE_RE = re.compile(r"(\d{1,6})\s*(?:to|-)\s*(\d{1,6})")
_MIN_RE = re.compile(r"(?:above|over|greater than|more than|>)\s*(\d{1,6})")
_MAX_RE = re.compile(r"(?:below|under|less than|up to|upto|<)\s*(\d{1,6})")


class PriceRange(NamedTuple):
    price_min: Optional[Union[int, float]]
    price_max: Optional[Union[int, float]]


def to_number(value: Any) -> Optional[Union[int, float]]:
    """
    Parse a loosely formatted number ("₹1,299", " 45.5 ", 300).

    Returns None for empty, non-numeric or non-finite input.
    Integral values come back as int.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        raw = value
    else:
        raw = _CURRENCY_RE.sub("", str(value)).strip()
        if not raw:
            return None
    try:
        number = float(raw)
    except (OverflowError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def parse_price_range(text: Optional[str]) -> PriceRange:
    """Extract (price_min, price_max) from phrases like "under 500" or "between 200 and 500"."""
    if not text or not isinstance(text, str):
        return PriceRange(None, None)

    t = _GROUPING_COMMA_RE.sub(r"\1\2", text.lower())

    m = _RANGE_RE.search(t) or _BARE_RANGE_RE.search(t)
    if m:
        return PriceRange(int(m.group(1)), int(m.group(2)))

    m = _MIN_RE.search(t)
    if m:
        return PriceRange(int(m.group(1)), None)

    m = _MAX_RE.search(t)
    if m:
        return PriceRange(None, int(m.group(1)))

    return PriceRange(None, None)


def detect_brand(text: Optional[str], tables: LookupTables) -> Optional[str]:
    # Substring match: "lg" also hits "bulge".
    if not text:
        return None
    t = text.lower()
    for brand in tables.brands:
        if brand in t:
            return brand
    return None


def detect_category(text: Optional[str], tables: LookupTables) -> Optional[str]:
    if not text:
        return None
    t = text.lower()
    for category, pattern in tables.category_patterns:
        if pattern.search(t):
            return category
    return None


def normalize_category(word: Optional[str], tables: LookupTables) -> Optional[str]:
    """Map a free-form category word to the catalog's category id, or None."""
    if not word or not isinstance(word, str):
        return None
    return tables.category_aliases.get(word.strip().lower())


def derive_features(text: Optional[str], tables: LookupTables) -> list[str]:
    """Build a feature list from trigger words in the text, each feature once."""
    if not text:
        return []
    t = text.lower()
    return [
        feature
        for feature, triggers in tables.feature_triggers
        if any(trigger in t for trigger in triggers)
    ]

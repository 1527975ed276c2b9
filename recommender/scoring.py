"""
Keyword Scoring

Scores a product against the effective keywords and features:

    whole-word keyword   +6
    substring keyword    +2
    substring feature    +4
    rating (capped at 5) +rating * 0.5
    in stock             +0.5
"""

import re
from typing import Iterable

from recommender.catalog import ProductRecord
from recommender.text_parsing import to_number

KEYWORD_EXACT_SCORE = 6
KEYWORD_PARTIAL_SCORE = 2
FEATURE_SCORE = 4
RATING_WEIGHT = 0.5
MAX_RATING = 5
IN_STOCK_BONUS = 0.5


def build_haystack(product: ProductRecord) -> str:
    return " ".join(
        str(product.get(field) or "") for field in ("title", "description", "brand")
    ).lower()


def _as_term(value) -> str:
    return str(value or "").lower().strip()


def score_product(
    product: ProductRecord,
    keywords: Iterable[str] = (),
    features: Iterable[str] = (),
) -> float:
    score = 0.0
    hay = build_haystack(product)

    for kw in keywords:
        k = _as_term(kw)
        if not k:
            continue
        if re.search(rf"\b{re.escape(k)}\b", hay, re.IGNORECASE):
            score += KEYWORD_EXACT_SCORE
        elif k in hay:
            score += KEYWORD_PARTIAL_SCORE

    for feature in features:
        f = _as_term(feature)
        if f and f in hay:
            score += FEATURE_SCORE

    rating = to_number(product.get("rating"))
    if rating:
        score += min(MAX_RATING, rating) * RATING_WEIGHT

    stock = to_number(product.get("stock"))
    if stock and stock > 0:
        score += IN_STOCK_BONUS

    return score

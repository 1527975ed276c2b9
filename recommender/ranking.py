"""
Ranking Pipeline

Filters the catalog by the resolved intent, scores the survivors and returns
the top results. Pure: the catalog records are never modified.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Sequence

from recommender.catalog import ProductRecord
from recommender.intent import IntentSpec
from recommender.logging_config import get_logger
from recommender.lookups import LookupTables, load_lookup_tables
from recommender.scoring import score_product
from recommender.text_parsing import derive_features, to_number

logger = get_logger(__name__)

DEFAULT_RESULT_LIMIT = 20
MAX_DERIVED_KEYWORDS = 5

_TOKEN_SPLIT_RE = re.compile(r"[\s,]+")


@dataclass(frozen=True)
class ScoredCandidate:
    product: ProductRecord
    score: float


@dataclass(frozen=True)
class RankingResult:
    products: list[ProductRecord]
    effective_keywords: list[str]
    features: list[str]
    candidate_count: int


def filter_candidates(
    catalog: Sequence[ProductRecord],
    intent: IntentSpec,
) -> list[ProductRecord]:
    candidates = list(catalog)

    if intent.category:
        candidates = [p for p in candidates if p.get("category") == intent.category]

    if intent.brand:
        brand = intent.brand.lower()
        candidates = [p for p in candidates if brand in str(p.get("brand") or "").lower()]

    # Products without a usable price fail any price bound.
    if intent.price_min is not None:
        candidates = [
            p for p in candidates
            if (price := to_number(p.get("price"))) is not None and price >= intent.price_min
        ]
    if intent.price_max is not None:
        candidates = [
            p for p in candidates
            if (price := to_number(p.get("price"))) is not None and price <= intent.price_max
        ]

    return candidates


def derive_keywords(text: str, limit: int = MAX_DERIVED_KEYWORDS) -> list[str]:
    """Split raw text on whitespace/commas, keep tokens longer than 2 chars."""
    tokens = _TOKEN_SPLIT_RE.split((text or "").lower())
    return [t for t in tokens if len(t) > 2][:limit]


def build_effective_keywords(
    intent: IntentSpec,
    features: Sequence[str],
    text: str,
) -> list[str]:
    keywords = []
    if intent.intent:
        keywords.append(intent.intent)
    keywords.extend(features)
    if intent.brand:
        keywords.append(intent.brand)
    return keywords or derive_keywords(text)


def _sort_key(candidate: ScoredCandidate):
    return (-candidate.score, to_number(candidate.product.get("price")) or 0)


def rank_products(
    catalog: Sequence[ProductRecord],
    intent: IntentSpec,
    text: str,
    tables: Optional[LookupTables] = None,
    limit: int = DEFAULT_RESULT_LIMIT,
) -> RankingResult:
    """
    Filter, score and order the catalog for one request.

    Features come from the intent; when it has none they are derived
    from trigger words in the raw text.
    """
    tables = tables or load_lookup_tables()

    candidates = filter_candidates(catalog, intent)
    logger.info("Candidates after category/brand/price filter", count=len(candidates))

    features = list(intent.features) or derive_features(text, tables)
    keywords = build_effective_keywords(intent, features, text)

    scored = [ScoredCandidate(p, score_product(p, keywords, features)) for p in candidates]
    scored.sort(key=_sort_key)

    top = [c.product for c in scored[:limit]]
    logger.info("Final returned products", count=len(top))

    return RankingResult(
        products=top,
        effective_keywords=keywords,
        features=features,
        candidate_count=len(candidates),
    )

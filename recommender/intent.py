"""
Shopping Intent Extraction

Asks the LLM for structured intent, treats whatever comes back as untrusted
text, and fills the gaps with the local detectors from text_parsing.

Flow:
    raw text → LLM JSON (best effort) → local fallbacks → reconcile_intent
"""

from __future__ import annotations

import json
from typing import Any, Optional, Union

from pydantic import BaseModel, Field

from recommender.llm_client import build_intent_messages
from recommender.logging_config import get_logger
from recommender.lookups import LookupTables, load_lookup_tables
from recommender.text_parsing import (
    PriceRange,
    detect_brand,
    detect_category,
    normalize_category,
    parse_price_range,
    to_number,
)

logger = get_logger(__name__)


class IntentSpec(BaseModel):
    """Resolved shopper intent for one request."""

    category: Optional[str] = None
    brand: Optional[str] = None
    price_min: Optional[Union[int, float]] = None
    price_max: Optional[Union[int, float]] = None
    features: list[str] = Field(default_factory=list)
    intent: Optional[str] = None


def extract_json_block(text: Any) -> Optional[str]:
    """Return the substring from the first '{' to the last '}', if any."""
    if not text or not isinstance(text, str):
        return None
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    return text[start : end + 1]


def _clean_str(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def parse_intent_payload(raw: Any) -> Optional[IntentSpec]:
    """
    Parse the LLM's reply into an IntentSpec.

    Returns None when no JSON object can be found or decoded.
    Individual fields with the wrong type are dropped, not rejected.
    """
    block = extract_json_block(raw)
    if block is None:
        logger.warning("LLM returned no JSON object, falling back")
        return None

    try:
        data = json.loads(block)
    except ValueError as e:
        logger.warning("Failed to parse LLM JSON, ignoring LLM output", error_message=str(e))
        return None

    if not isinstance(data, dict):
        logger.warning("LLM JSON is not an object, ignoring LLM output")
        return None

    features = data.get("features")
    if not isinstance(features, list):
        features = []

    return IntentSpec(
        category=_clean_str(data.get("category")),
        brand=_clean_str(data.get("brand")),
        price_min=to_number(data.get("price_min")),
        price_max=to_number(data.get("price_max")),
        features=[f for f in features if isinstance(f, str) and f.strip()],
        intent=_clean_str(data.get("intent")),
    )


def reconcile_intent(
    intent: IntentSpec,
    local_price: PriceRange,
    tables: LookupTables,
) -> IntentSpec:
    """
    Merge LLM prices with the local parse and normalize the category.

    - LLM gave no bound at all: take the local bounds as they are.
    - LLM gave at least one: keep it, fill only the missing side locally.
    - Inverted bounds are swapped.
    """
    price_min, price_max = intent.price_min, intent.price_max

    if price_min is None and price_max is None:
        price_min, price_max = local_price.price_min, local_price.price_max
    else:
        if price_min is None:
            price_min = local_price.price_min
        if price_max is None:
            price_max = local_price.price_max

    if price_min is not None and price_max is not None and price_min > price_max:
        price_min, price_max = price_max, price_min
        logger.info("Swapped price_min/price_max because min > max")

    category = normalize_category(intent.category, tables)
    logger.info("Mapped category", raw_category=intent.category, category=category)

    return intent.model_copy(
        update={"category": category, "price_min": price_min, "price_max": price_max}
    )


class IntentExtractor:
    """
    Best-effort intent extraction.

    ``llm`` is any object with an async ``ainvoke(messages)`` returning a
    message with ``.content`` (a LangChain chat model in production).
    Without one, only the local detectors are used.
    """

    def __init__(
        self,
        llm: Any = None,
        tables: Optional[LookupTables] = None,
        model_name: str = "",
    ):
        self.llm = llm
        self.tables = tables or load_lookup_tables()
        self.model_name = model_name or getattr(llm, "model_name", "") or "unknown"

    async def ask_llm(self, text: str) -> Optional[IntentSpec]:
        """Call the LLM and parse its reply. Never raises."""
        if self.llm is None:
            logger.warning("No LLM configured, using local intent detection only")
            return None

        try:
            with logger.llm_span(self.model_name, prompt_preview=text):
                response = await self.llm.ainvoke(build_intent_messages(text))
        except Exception as e:
            logger.warning("LLM call failed, falling back to local detection", error_message=str(e))
            return None

        raw = getattr(response, "content", response)
        logger.debug("Raw LLM output", raw=str(raw)[:500])
        return parse_intent_payload(raw)

    async def extract(self, text: str) -> IntentSpec:
        """Resolve the full IntentSpec for ``text``."""
        local_price = parse_price_range(text)
        logger.info("Local price parse", price_min=local_price.price_min, price_max=local_price.price_max)

        intent = await self.ask_llm(text) or IntentSpec()

        updates = {}
        if not intent.category:
            updates["category"] = detect_category(text, self.tables)
        if not intent.brand:
            updates["brand"] = detect_brand(text, self.tables)
        if updates:
            intent = intent.model_copy(update=updates)

        resolved = reconcile_intent(intent, local_price, self.tables)
        logger.info("Final parsed intent", intent=resolved.model_dump())
        return resolved

"""
Recommend Service

Per-request orchestration for the recommend endpoint:
fetch the catalog and extract intent concurrently, then rank.
"""

import asyncio
from time import perf_counter
from typing import Optional

from backend.core.config import settings
from recommender.catalog import CatalogClient
from recommender.intent import IntentExtractor
from recommender.llm_client import build_chat_model
from recommender.logging_config import get_logger
from recommender.lookups import LookupTables, load_lookup_tables
from recommender.ranking import rank_products

logger = get_logger(__name__)


class RecommendService:
    """
    Service wrapper around the catalog client, intent extractor and ranker.

    Holds only read-only collaborators; every request builds its own
    intent and candidate lists.
    """

    def __init__(
        self,
        catalog_client: Optional[CatalogClient] = None,
        extractor: Optional[IntentExtractor] = None,
        tables: Optional[LookupTables] = None,
        result_limit: Optional[int] = None,
    ):
        self._catalog_client = catalog_client
        self._extractor = extractor
        self._tables = tables
        self._result_limit = result_limit
        self._initialized = False

    async def initialize(self) -> None:
        """Build missing collaborators from settings (lazy loading)."""
        if self._initialized:
            return

        if self._tables is None:
            self._tables = load_lookup_tables(settings.lookup_tables_path or None)

        if self._catalog_client is None:
            self._catalog_client = CatalogClient(
                settings.catalog_url,
                timeout=settings.catalog_timeout,
            )

        if self._extractor is None:
            try:
                llm = build_chat_model(
                    api_key=settings.groq_api_key,
                    model=settings.groq_model,
                    base_url=settings.groq_base_url,
                )
            except Exception as e:
                logger.warning("LLM client init failed, using local detection only", error_message=str(e))
                llm = None
            self._extractor = IntentExtractor(
                llm=llm,
                tables=self._tables,
                model_name=settings.groq_model,
            )

        if self._result_limit is None:
            self._result_limit = settings.result_limit

        self._initialized = True

    async def recommend(self, prompt: str) -> dict:
        """
        Rank catalog products for a free-text request.

        Args:
            prompt: User's shopping request

        Returns:
            Dictionary with ranked products and debug info

        Raises:
            CatalogError: if the catalog cannot be fetched
        """
        await self.initialize()
        start = perf_counter()
        text = (prompt or "").strip()
        logger.info("Recommend request", prompt=text)

        products, intent = await asyncio.gather(
            self._catalog_client.fetch_products(),
            self._extractor.extract(text),
        )

        result = rank_products(
            products,
            intent,
            text,
            tables=self._tables,
            limit=self._result_limit,
        )

        logger.success(
            "Recommend completed",
            took_ms=int((perf_counter() - start) * 1000),
            catalog_size=len(products),
            candidates=result.candidate_count,
            returned=len(result.products),
        )

        return {
            "products": result.products,
            "debug": {
                "parsed": intent.model_dump(),
                "effectiveKeywords": result.effective_keywords,
                "features": result.features,
            },
        }

    async def health_check(self) -> dict:
        await self.initialize()
        return {
            "status": "ok",
            "app": settings.app_name,
            "version": settings.app_version,
            "llm_configured": self._extractor.llm is not None,
        }


# Global service instance
_recommend_service: Optional[RecommendService] = None


def get_recommend_service() -> RecommendService:
    """Get or create the recommend service instance."""
    global _recommend_service
    if _recommend_service is None:
        _recommend_service = RecommendService()
    return _recommend_service

import asyncio
import json
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from backend.services.recommend_service import RecommendService
from recommender.catalog import CatalogError
from recommender.intent import IntentExtractor


def _run(coro):
    return asyncio.run(coro)


class FakeLLM:
    def __init__(self, content: str = "", error: Exception | None = None):
        self.content = content
        self.error = error

    async def ainvoke(self, messages):
        if self.error is not None:
            raise self.error
        return SimpleNamespace(content=self.content)


def _service(tables, products, llm=None):
    catalog = AsyncMock()
    if isinstance(products, Exception):
        catalog.fetch_products = AsyncMock(side_effect=products)
    else:
        catalog.fetch_products = AsyncMock(return_value=products)
    return RecommendService(
        catalog_client=catalog,
        extractor=IntentExtractor(llm=llm, tables=tables),
        tables=tables,
        result_limit=20,
    )


def _products(make_product):
    return [
        make_product(id=1, title="Galaxy S21", brand="Samsung", price=450, rating=4.5, stock=3),
        make_product(id=2, title="Galaxy A5", brand="Samsung", price=300, rating=4.5, stock=3),
        make_product(id=3, title="iPhone 9", brand="Apple", price=480),
        make_product(id=4, title="Galaxy S30", brand="Samsung", price=900),
        make_product(id=5, title="Galaxy Book", brand="Samsung", category="laptops", price=400),
    ]


def test_recommend_with_unreachable_llm_uses_local_intent(make_product, tables):
    service = _service(tables, _products(make_product), llm=FakeLLM(error=TimeoutError("quota")))

    result = _run(service.recommend("samsung phone under 500"))

    parsed = result["debug"]["parsed"]
    assert parsed["category"] == "smartphones"
    assert parsed["brand"] == "samsung"
    assert parsed["price_max"] == 500
    assert [p["id"] for p in result["products"]] == [2, 1]
    assert result["debug"]["effectiveKeywords"] == ["samsung"]
    assert result["debug"]["features"] == []


def test_recommend_uses_llm_intent(make_product, tables):
    reply = 'OK: {"category": "phones", "brand": "apple", "price_min": null, "price_max": "1,000", "features": ["iphone"]}'
    service = _service(tables, _products(make_product), llm=FakeLLM(content=reply))

    result = _run(service.recommend("  an apple phone below 1000  "))

    assert [p["id"] for p in result["products"]] == [3]
    assert result["debug"]["effectiveKeywords"] == ["iphone", "apple"]
    assert result["debug"]["parsed"]["price_max"] == 1000


def test_recommend_empty_result_is_not_an_error(make_product, tables):
    service = _service(tables, _products(make_product))
    result = _run(service.recommend("nokia phone under 50"))
    assert result["products"] == []


def test_recommend_catalog_failure_propagates(tables):
    service = _service(tables, CatalogError("down"))
    with pytest.raises(CatalogError):
        _run(service.recommend("samsung phone"))


def test_recommend_is_deterministic(make_product, tables):
    reply = '{"category": "smartphones", "brand": null, "price_min": null, "price_max": null, "features": ["galaxy"]}'
    service = _service(tables, _products(make_product), llm=FakeLLM(content=reply))

    first = _run(service.recommend("galaxy phone"))
    second = _run(service.recommend("galaxy phone"))

    assert json.dumps(first, sort_keys=True) == json.dumps(second, sort_keys=True)


def test_health_check_reports_llm_configuration(tables):
    service = _service(tables, [])
    health = _run(service.health_check())
    assert health["status"] == "ok"
    assert health["llm_configured"] is False


def test_recommend_debug_prices_stay_integers(make_product, tables):
    reply = '{"category": "phone", "brand": null, "price_min": 200, "price_max": "500", "features": []}'
    service = _service(tables, _products(make_product), llm=FakeLLM(content=reply))

    parsed = _run(service.recommend("phone between 200 and 500"))["debug"]["parsed"]

    assert (parsed["price_min"], parsed["price_max"]) == (200, 500)
    assert isinstance(parsed["price_min"], int)
    assert isinstance(parsed["price_max"], int)
    assert '"price_max": 500,' in json.dumps(parsed)

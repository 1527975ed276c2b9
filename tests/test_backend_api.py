import asyncio
import json

from fastapi import FastAPI
from fastapi.testclient import TestClient

from backend.api.routes import recommend, router
from backend.api.schemas import RecommendRequest
from backend.services.recommend_service import get_recommend_service
from recommender.catalog import CatalogError


class FakeRecommendService:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.prompts = []

    async def recommend(self, prompt: str):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return {
            "products": [
                {"id": 7, "title": "Galaxy S21", "brand": "Samsung", "category": "smartphones", "price": 450, "thumbnail": "x.png"}
            ],
            "debug": {
                "parsed": {
                    "category": "smartphones",
                    "brand": "samsung",
                    "price_min": None,
                    "price_max": 500,
                    "features": [],
                    "intent": None,
                },
                "effectiveKeywords": ["samsung"],
                "features": [],
            },
        }

    async def health_check(self):
        return {"status": "ok", "app": "Product Recommender", "version": "1.0.0", "llm_configured": True}


def _client(service):
    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_recommend_service] = lambda: service
    return TestClient(app)


def test_recommend_route_direct_call_returns_typed_response():
    request = RecommendRequest(prompt="samsung phone under 500")
    response = asyncio.run(recommend(request=request, service=FakeRecommendService()))

    assert response.products[0]["title"] == "Galaxy S21"
    assert response.debug.parsed.category == "smartphones"
    assert response.debug.effective_keywords == ["samsung"]


def test_recommend_route_direct_call_catalog_failure_returns_500():
    request = RecommendRequest(prompt="phone")
    response = asyncio.run(recommend(request=request, service=FakeRecommendService(CatalogError("down"))))

    assert response.status_code == 500
    assert json.loads(response.body) == {"products": []}


def test_recommend_http_contract():
    service = FakeRecommendService()
    res = _client(service).post("/recommend", json={"prompt": "samsung phone under 500"})

    assert res.status_code == 200
    body = res.json()
    assert set(body) == {"products", "debug"}
    assert body["products"][0]["thumbnail"] == "x.png"
    assert body["debug"]["effectiveKeywords"] == ["samsung"]
    assert body["debug"]["features"] == []
    assert body["debug"]["parsed"]["price_max"] == 500
    assert service.prompts == ["samsung phone under 500"]


def test_recommend_http_missing_prompt_defaults_to_empty_text():
    service = FakeRecommendService()
    res = _client(service).post("/recommend", json={})

    assert res.status_code == 200
    assert service.prompts == [""]


def test_recommend_http_long_prompt_is_passed_through():
    service = FakeRecommendService()
    prompt = "cheap phone with good camera " * 50
    res = _client(service).post("/recommend", json={"prompt": prompt})

    assert res.status_code == 200
    assert service.prompts == [prompt]


def test_recommend_http_null_or_numeric_prompt_is_read_as_text():
    service = FakeRecommendService()
    client = _client(service)

    assert client.post("/recommend", json={"prompt": None}).status_code == 200
    assert client.post("/recommend", json={"prompt": 42}).status_code == 200
    assert service.prompts == ["", "42"]


def test_recommend_http_failure_shape():
    res = _client(FakeRecommendService(CatalogError("down"))).post("/recommend", json={"prompt": "phone"})

    assert res.status_code == 500
    assert res.json() == {"products": []}


def test_health_endpoint():
    res = _client(FakeRecommendService()).get("/health")
    assert res.status_code == 200
    assert res.json()["llm_configured"] is True

"""
Pydantic Schemas for API Request/Response

Defines the data models used in API endpoints.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from recommender.intent import IntentSpec


# =============================================================================
# Request Schemas
# =============================================================================


class RecommendRequest(BaseModel):
    """Request body for the recommend endpoint."""

    prompt: str = Field(
        default="",
        description="Free-text shopping request",
        examples=["a phone under 500 with good camera", "samsung phone between 200 and 500"],
    )

    @field_validator("prompt", mode="before")
    @classmethod
    def coerce_prompt(cls, value: Any) -> str:
        # null means no prompt; other JSON scalars are read as text
        return "" if value is None else str(value)


# =============================================================================
# Response Schemas
# =============================================================================


class RecommendDebug(BaseModel):
    """How the request was interpreted."""

    model_config = ConfigDict(populate_by_name=True)

    parsed: IntentSpec = Field(..., description="Resolved shopping intent")
    effective_keywords: list[str] = Field(
        default_factory=list,
        alias="effectiveKeywords",
        description="Keywords used for scoring",
    )
    features: list[str] = Field(
        default_factory=list, description="Features used for scoring"
    )


class RecommendResponse(BaseModel):
    """Response body for the recommend endpoint."""

    products: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Catalog records, best match first (at most 20)",
    )
    debug: RecommendDebug = Field(..., description="Interpretation details")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "products": [
                    {
                        "id": 121,
                        "title": "iPhone 5s",
                        "description": "The iPhone 5s is a smartphone ...",
                        "brand": "Apple",
                        "category": "smartphones",
                        "price": 199.99,
                        "rating": 2.83,
                        "stock": 25,
                    }
                ],
                "debug": {
                    "parsed": {
                        "category": "smartphones",
                        "brand": None,
                        "price_min": None,
                        "price_max": 500,
                        "features": ["good camera"],
                        "intent": None,
                    },
                    "effectiveKeywords": ["good camera"],
                    "features": ["good camera"],
                },
            }
        }
    )


class ErrorResponse(BaseModel):
    """Error response schema."""

    products: list[dict[str, Any]] = Field(default_factory=list)


# =============================================================================
# Health Check Schemas
# =============================================================================


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str = Field(..., description="Overall status")
    app: str = Field(..., description="Application name")
    version: str = Field(..., description="Application version")
    llm_configured: bool = Field(..., description="Whether an LLM API key is set")

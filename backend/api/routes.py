"""
API Routes

Defines all HTTP endpoints for the Product Recommender.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from backend.api.schemas import (
    ErrorResponse,
    HealthResponse,
    RecommendDebug,
    RecommendRequest,
    RecommendResponse,
)
from backend.services.recommend_service import RecommendService, get_recommend_service
from recommender.logging_config import get_logger

logger = get_logger(__name__)


# =============================================================================
# Router Setup
# =============================================================================

router = APIRouter()


# =============================================================================
# Recommend Endpoint
# =============================================================================


@router.post(
    "/recommend",
    response_model=RecommendResponse,
    responses={
        200: {"description": "Ranked products"},
        500: {"model": ErrorResponse, "description": "Catalog unavailable or internal error"},
    },
    summary="Recommend products",
    description="Turn a free-text shopping request into a ranked list of catalog products.",
)
async def recommend(
    request: RecommendRequest,
    service: Annotated[RecommendService, Depends(get_recommend_service)],
):
    """
    Rank catalog products for a shopping request.

    Intent extraction never fails the request; only a catalog
    failure (or an unexpected error) produces the 500 shape.
    """
    try:
        result = await service.recommend(request.prompt)
    except Exception as e:
        logger.error("Recommend failed", error=e)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse().model_dump(),
        )

    return RecommendResponse(
        products=result["products"],
        debug=RecommendDebug(**result["debug"]),
    )


# =============================================================================
# Health Check Endpoint
# =============================================================================


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Report service status and whether the LLM is configured.",
)
async def health_check(
    service: Annotated[RecommendService, Depends(get_recommend_service)],
) -> HealthResponse:
    return HealthResponse(**await service.health_check())

"""
Product Recommender - FastAPI Backend

Main entry point for the backend API server.
Exposes POST /recommend for free-text product recommendations.
"""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from backend.core.config import settings
from backend.api.routes import router
from backend.services.recommend_service import get_recommend_service
from recommender.logging_config import configure_logging, get_logger

configure_logging(service_name=os.environ.get("LOGFIRE_SERVICE_NAME", "product-recommender-backend"))
logger = get_logger(__name__)

USE_LOGFIRE = os.environ.get("USE_LOGFIRE", "false").lower() in ("true", "1", "yes")


# =============================================================================
# Lifespan Manager
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    - Startup: Initialize recommend service
    - Shutdown: Log only, nothing is held open between requests
    """
    logger.info("Starting Product Recommender Backend")
    logger.info("Settings loaded", debug=settings.debug, model=settings.groq_model, catalog_url=settings.catalog_url)

    service = get_recommend_service()
    try:
        await service.initialize()
        logger.info("Recommend service initialized")
    except Exception as e:
        logger.warning("Recommend service initialization failed", error_message=str(e))
        logger.info("Service will be initialized on first request")

    yield

    logger.info("Shutting down backend")


# =============================================================================
# FastAPI App
# =============================================================================


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="""
## 🛒 Product Recommender API

Turns a free-text shopping request into a ranked product list.

### Endpoints:
- `POST /recommend` - Send a prompt and get ranked products
- `GET /health` - Check service health
        """,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router, tags=["API"])

    @app.get("/", include_in_schema=False)
    async def root_redirect():
        """Redirect root to API docs."""
        return RedirectResponse(url="/docs")

    if USE_LOGFIRE:
        try:
            import logfire

            logfire.instrument_fastapi(app)
            logfire.instrument_httpx()
            logger.info("Logfire: FastAPI + HTTPX instrumented")
        except Exception as e:
            logger.warning("Logfire instrumentation failed", error_message=str(e))

    return app


app = create_app()


# =============================================================================
# Main Entry Point
# =============================================================================


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "backend.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )

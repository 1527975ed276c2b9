"""
Backend Configuration Module

Centralized settings management using Pydantic.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App Info
    app_name: str = Field(default="Product Recommender", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")

    # Server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3001, alias="PORT")

    # CORS (for frontend)
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")

    # Groq API (structured intent extraction)
    groq_api_key: str = Field(default="", alias="GROQ_API_KEY")
    groq_model: str = Field(default="llama-3.1-8b-instant", alias="GROQ_MODEL")
    groq_base_url: str = Field(
        default="https://api.groq.com/openai/v1", alias="GROQ_BASE_URL"
    )

    # Catalog source
    catalog_url: str = Field(
        default="https://dummyjson.com/products?limit=200&skip=0", alias="CATALOG_URL"
    )
    catalog_timeout: float = Field(default=30.0, alias="CATALOG_TIMEOUT")

    # Ranking
    result_limit: int = Field(default=20, alias="RESULT_LIMIT")
    lookup_tables_path: str = Field(default="", alias="LOOKUP_TABLES_PATH")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()

"""Configuration management for the application."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = Field(default="sqlite:///./budget_recipes.db")

    # Offer catalog
    offer_feed_url: str | None = Field(default=None)
    offer_cache_ttl_seconds: int = Field(default=3600, ge=0)  # 1 hour

    # Matching engine
    # Values mirror the enums in budget_recipes.models.enums
    synonym_table: Literal["basic", "extended"] = Field(default="extended")
    fallback_pricing: Literal["flat", "category"] = Field(default="category")
    flat_fallback_price: float = Field(default=2.50, ge=0)
    best_offer_strategy: Literal["highest_discount", "lowest_price", "highest_savings"] = Field(
        default="highest_discount"
    )
    shopping_list_pricing: Literal["per_recipe", "single_purchase"] = Field(default="per_recipe")
    staple_matching: Literal["substring", "word_aware"] = Field(default="substring")

    # Ranking limits
    top_matches_limit: int = Field(default=10, ge=1)
    best_deals_limit: int = Field(default=5, ge=1)
    cheapest_limit: int = Field(default=10, ge=1)

    # API
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has a real database."""
        if self.environment == "production" and self.database_url.startswith("sqlite"):
            raise ValueError("DATABASE_URL should not use SQLite in production")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

"""FastAPI dependencies for catalogs, offers and engine services."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from budget_recipes.config import Settings, get_settings
from budget_recipes.database import SessionLocal, get_db
from budget_recipes.schemas.offer import Offer
from budget_recipes.services.catalog import OfferCache, OfferCatalog, RecipeCatalog
from budget_recipes.services.recipe_matcher import RecipeMatchService
from budget_recipes.services.shopping_list import ShoppingListService

_offer_cache: OfferCache | None = None


def _load_active_offers() -> list[Offer]:
    """Read today's active offers with a short-lived session of its own."""
    db = SessionLocal()
    try:
        return OfferCatalog(db).active_offers()
    finally:
        db.close()


def get_offer_cache() -> OfferCache:
    """Get the process-wide offer cache, creating it on first use."""
    global _offer_cache
    if _offer_cache is None:
        _offer_cache = OfferCache(
            _load_active_offers,
            ttl_seconds=get_settings().offer_cache_ttl_seconds,
        )
    return _offer_cache


def get_current_offers(
    cache: Annotated[OfferCache, Depends(get_offer_cache)],
) -> list[Offer]:
    """Snapshot of the currently active offers."""
    return cache.get()


def get_recipe_catalog(
    db: Annotated[Session, Depends(get_db)],
) -> RecipeCatalog:
    """Get recipe catalog with dependencies."""
    return RecipeCatalog(db)


def get_offer_catalog(
    db: Annotated[Session, Depends(get_db)],
) -> OfferCatalog:
    """Get offer catalog with dependencies."""
    return OfferCatalog(db)


def get_recipe_match_service(
    settings: Annotated[Settings, Depends(get_settings)],
) -> RecipeMatchService:
    """Get recipe match service configured from settings."""
    return RecipeMatchService.from_settings(settings)


def get_shopping_list_service(
    settings: Annotated[Settings, Depends(get_settings)],
) -> ShoppingListService:
    """Get shopping list service configured from settings."""
    return ShoppingListService.from_settings(settings)

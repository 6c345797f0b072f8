"""Offer API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from budget_recipes.api.dependencies import get_offer_catalog
from budget_recipes.models.enums import Store
from budget_recipes.schemas.offer import Offer, OfferStats
from budget_recipes.services.catalog import OfferCatalog

router = APIRouter(prefix="/api/v1/offers", tags=["offers"])

Catalog = Annotated[OfferCatalog, Depends(get_offer_catalog)]


@router.get("", response_model=list[Offer])
def list_offers(catalog: Catalog, store: Store | None = None):
    """List active offers, optionally for one store."""
    return catalog.active_offers(store=store)


@router.get("/search", response_model=list[Offer])
def search_offers(catalog: Catalog, q: str = Query(..., min_length=1)):
    """Search active offers by product name."""
    return catalog.search_offers(q)


@router.get("/stats", response_model=OfferStats)
def offer_stats(catalog: Catalog):
    """Counts of active offers per store and category."""
    return catalog.stats()


@router.get("/category/{category}", response_model=list[Offer])
def offers_by_category(category: str, catalog: Catalog):
    """Active offers in one category."""
    return catalog.offers_by_category(category)

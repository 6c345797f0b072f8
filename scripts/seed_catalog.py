#!/usr/bin/env python3
"""Load recipes and offers into the catalog database.

Reads a JSON catalog file ({"recipes": [...], "offers": [...]}) and, when a
feed URL is configured, this week's published offers. Expired offers are
cleared first.

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py data/sample_catalog.json --feed-url https://example.org/offers.json
    DATABASE_URL=sqlite:///./budget_recipes.db python scripts/seed_catalog.py
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from budget_recipes.config import get_settings
from budget_recipes.database import SessionLocal, init_db
from budget_recipes.schemas.offer import Offer
from budget_recipes.schemas.recipe import Recipe
from budget_recipes.services.catalog import (
    CatalogError,
    OfferCatalog,
    RecipeCatalog,
    fetch_offer_feed,
)

logger = logging.getLogger("seed_catalog")

DEFAULT_CATALOG = Path(__file__).resolve().parent.parent / "data" / "sample_catalog.json"


def seed_catalog(catalog_path: Path, feed_url: str | None) -> None:
    """Seed the catalog database from a file and an optional feed."""
    init_db()
    db = SessionLocal()

    try:
        offer_catalog = OfferCatalog(db)
        recipe_catalog = RecipeCatalog(db)

        offer_catalog.clear_expired()

        data = json.loads(catalog_path.read_text(encoding="utf-8"))
        recipes = [Recipe.model_validate(item) for item in data.get("recipes", [])]
        for recipe in recipes:
            recipe_catalog.save_recipe(recipe)
        logger.info(f"Saved {len(recipes)} recipes from {catalog_path}")

        offers = [Offer.model_validate(item) for item in data.get("offers", [])]
        offer_catalog.save_offers(offers)

        if feed_url:
            try:
                offer_catalog.save_offers(fetch_offer_feed(feed_url))
            except CatalogError as e:
                logger.error(f"Skipping offer feed: {e}")
    finally:
        db.close()


def main() -> None:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper(), format="%(levelname)s %(message)s")

    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("catalog", nargs="?", type=Path, default=DEFAULT_CATALOG)
    parser.add_argument("--feed-url", default=settings.offer_feed_url)
    args = parser.parse_args()

    seed_catalog(args.catalog, args.feed_url)


if __name__ == "__main__":
    main()

"""Recipe and offer catalogs: the data sources the matching engine is fed from.

Nothing in here is part of the matching engine. The engine only ever sees the
plain lists of schemas these classes return.
"""

import logging
import threading
import time
from collections.abc import Callable, Iterable
from datetime import date, timedelta

import httpx
from pydantic import ValidationError
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from budget_recipes.models.offer import Offer as OfferModel
from budget_recipes.models.recipe import Recipe as RecipeModel
from budget_recipes.models.recipe import RecipeIngredient
from budget_recipes.schemas.offer import Offer, OfferStats
from budget_recipes.schemas.recipe import Recipe
from budget_recipes.services.discount import (
    derive_discount_percentage,
    parse_discount_percentage,
)

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Catalog data could not be fetched or decoded."""


def current_week(today: date | None = None) -> tuple[date, date]:
    """Monday and Sunday of the week containing today; offers run per week."""
    today = today or date.today()
    monday = today - timedelta(days=today.weekday())
    return monday, monday + timedelta(days=6)


class RecipeCatalog:
    """Recipe lookups backed by the database."""

    def __init__(self, db: Session):
        self.db = db

    def list_recipes(self, tag: str | None = None, query: str | None = None) -> list[Recipe]:
        """All recipes, optionally filtered by tag and by a name/description search."""
        q = self.db.query(RecipeModel)
        if query:
            pattern = f"%{query.lower()}%"
            q = q.filter(
                or_(
                    func.lower(RecipeModel.name).like(pattern),
                    func.lower(RecipeModel.description).like(pattern),
                )
            )
        recipes = [Recipe.model_validate(row) for row in q.order_by(RecipeModel.name).all()]

        if tag:
            wanted = tag.lower()
            recipes = [r for r in recipes if wanted in (t.lower() for t in r.tags)]
        return recipes

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        row = self.db.get(RecipeModel, recipe_id)
        return Recipe.model_validate(row) if row else None

    def get_recipes(self, recipe_ids: Iterable[str]) -> dict[str, Recipe]:
        """Recipes by id; unknown ids are simply absent from the result."""
        ids = list(set(recipe_ids))
        if not ids:
            return {}
        rows = self.db.query(RecipeModel).filter(RecipeModel.id.in_(ids)).all()
        return {row.id: Recipe.model_validate(row) for row in rows}

    def batch_friendly(self, min_score: int = 4) -> list[Recipe]:
        rows = (
            self.db.query(RecipeModel)
            .filter(RecipeModel.batch_cooking_score >= min_score)
            .order_by(RecipeModel.batch_cooking_score.desc(), RecipeModel.name)
            .all()
        )
        return [Recipe.model_validate(row) for row in rows]

    def freezer_friendly(self) -> list[Recipe]:
        rows = (
            self.db.query(RecipeModel)
            .filter(RecipeModel.freezer_friendly.is_(True))
            .order_by(RecipeModel.name)
            .all()
        )
        return [Recipe.model_validate(row) for row in rows]

    def list_tags(self) -> list[str]:
        tags: set[str] = set()
        for (row_tags,) in self.db.query(RecipeModel.tags).all():
            tags.update(row_tags or [])
        return sorted(tags)

    def save_recipe(self, recipe: Recipe) -> None:
        """Insert or replace a recipe together with its ingredients."""
        existing = self.db.get(RecipeModel, recipe.id)
        if existing:
            self.db.delete(existing)
            self.db.flush()

        row = RecipeModel(
            id=recipe.id,
            name=recipe.name,
            description=recipe.description,
            servings=recipe.servings,
            prep_time=recipe.prep_time,
            cook_time=recipe.cook_time,
            batch_cooking_score=recipe.batch_cooking_score,
            freezer_friendly=recipe.freezer_friendly,
            fridge_life_days=recipe.fridge_life_days,
            freezer_life_months=recipe.freezer_life_months,
            image_url=recipe.image_url,
            instructions=list(recipe.instructions),
            variation_tips=[tip.model_dump() for tip in recipe.variation_tips],
            tags=list(recipe.tags),
            ingredients=[
                RecipeIngredient(
                    position=position,
                    name=ingredient.name,
                    amount=ingredient.amount,
                    unit=ingredient.unit,
                    category=ingredient.category.value,
                    is_pantry_staple=ingredient.is_pantry_staple,
                )
                for position, ingredient in enumerate(recipe.ingredients)
            ],
        )
        self.db.add(row)
        self.db.commit()


class OfferCatalog:
    """Offer lookups backed by the database."""

    def __init__(self, db: Session):
        self.db = db

    def _active_query(self, today: date | None):
        today = today or date.today()
        return self.db.query(OfferModel).filter(
            OfferModel.valid_from <= today,
            OfferModel.valid_until >= today,
        )

    def active_offers(self, today: date | None = None, store: str | None = None) -> list[Offer]:
        """Offers valid today (inclusive window), biggest discount first."""
        q = self._active_query(today)
        if store:
            q = q.filter(OfferModel.store == getattr(store, "value", store))
        rows = q.order_by(OfferModel.discount_percentage.desc(), OfferModel.id).all()
        return [Offer.model_validate(row) for row in rows]

    def offers_by_category(self, category: str, today: date | None = None) -> list[Offer]:
        rows = (
            self._active_query(today)
            .filter(OfferModel.category == category)
            .order_by(OfferModel.discount_percentage.desc(), OfferModel.id)
            .all()
        )
        return [Offer.model_validate(row) for row in rows]

    def search_offers(self, query: str, today: date | None = None) -> list[Offer]:
        rows = (
            self._active_query(today)
            .filter(func.lower(OfferModel.product_name).like(f"%{query.lower()}%"))
            .order_by(OfferModel.discount_percentage.desc(), OfferModel.id)
            .all()
        )
        return [Offer.model_validate(row) for row in rows]

    def stats(self, today: date | None = None) -> OfferStats:
        """Number of active offers in total, per store and per category."""
        today = today or date.today()
        active = (OfferModel.valid_from <= today, OfferModel.valid_until >= today)

        total = self.db.query(func.count(OfferModel.id)).filter(*active).scalar() or 0
        by_store = (
            self.db.query(OfferModel.store, func.count(OfferModel.id))
            .filter(*active)
            .group_by(OfferModel.store)
            .all()
        )
        by_category = (
            self.db.query(OfferModel.category, func.count(OfferModel.id))
            .filter(*active)
            .group_by(OfferModel.category)
            .all()
        )
        return OfferStats(
            total_offers=total,
            by_store={store: count for store, count in by_store},
            by_category={category: count for category, count in by_category},
        )

    def save_offers(self, offers: Iterable[Offer], today: date | None = None) -> int:
        """Insert or update offers; fills in missing validity windows and discounts."""
        week_start, week_end = current_week(today)
        saved = 0
        for offer in offers:
            if offer.discount_percentage is None:
                discount = derive_discount_percentage(offer.original_price, offer.offer_price)
            else:
                discount = parse_discount_percentage(offer.discount_percentage)

            description = offer.description
            if description is None and isinstance(offer.discount_percentage, str):
                description = offer.discount_percentage

            self.db.merge(
                OfferModel(
                    id=offer.id,
                    store=offer.store.value,
                    product_name=offer.product_name,
                    original_price=offer.original_price,
                    offer_price=offer.offer_price,
                    discount_percentage=discount,
                    category=offer.category,
                    unit=offer.unit,
                    valid_from=offer.valid_from or week_start,
                    valid_until=offer.valid_until or week_end,
                    image_url=offer.image_url,
                    description=description,
                )
            )
            saved += 1

        self.db.commit()
        logger.info(f"Saved {saved} offers")
        return saved

    def clear_expired(self, today: date | None = None) -> int:
        """Delete offers whose validity ended before today."""
        today = today or date.today()
        deleted = (
            self.db.query(OfferModel)
            .filter(OfferModel.valid_until < today)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        logger.info(f"Cleared {deleted} expired offers")
        return deleted


def fetch_offer_feed(
    url: str,
    client: httpx.Client | None = None,
    timeout: float = 30.0,
) -> list[Offer]:
    """Download a published offers document: {"offers": [...]} or a bare list."""
    owns_client = client is None
    client = client or httpx.Client(timeout=timeout)
    try:
        response = client.get(url)
        response.raise_for_status()
        payload = response.json()
    except httpx.HTTPError as e:
        logger.error(f"Failed to download offer feed {url}: {e}")
        raise CatalogError(f"Offer feed download failed: {e}") from e
    except ValueError as e:
        logger.error(f"Offer feed {url} is not valid JSON: {e}")
        raise CatalogError("Offer feed is not valid JSON") from e
    finally:
        if owns_client:
            client.close()

    raw_offers = payload.get("offers", []) if isinstance(payload, dict) else payload
    if not isinstance(raw_offers, list):
        raise CatalogError("Offer feed has no offer list")

    try:
        offers = [Offer.model_validate(item) for item in raw_offers]
    except ValidationError as e:
        raise CatalogError(f"Offer feed contains an invalid offer: {e}") from e

    logger.info(f"Downloaded {len(offers)} offers from {url}")
    return offers


class OfferCache:
    """Time-boxed snapshot of the active offers.

    Freshness contract: `get()` returns a snapshot at most `ttl_seconds` old.
    When a refresh fails the previous snapshot is served, however old, and the
    failure is logged; with no previous snapshot the error propagates. Callers
    get their own list and must treat the offers in it as read-only.
    """

    def __init__(
        self,
        loader: Callable[[], list[Offer]],
        ttl_seconds: float = 3600,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.loader = loader
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._offers: list[Offer] | None = None
        self._loaded_at = 0.0
        self._lock = threading.Lock()

    def get(self) -> list[Offer]:
        with self._lock:
            now = self.clock()
            if self._offers is not None and now - self._loaded_at < self.ttl_seconds:
                return list(self._offers)

            try:
                offers = list(self.loader())
            except Exception as e:
                if self._offers is None:
                    raise
                logger.warning(f"Offer refresh failed, serving stale snapshot: {e}")
                return list(self._offers)

            self._offers = offers
            self._loaded_at = now
            logger.info(f"Refreshed offer snapshot: {len(offers)} active offers")
            return list(offers)

    def invalidate(self) -> None:
        """Drop the snapshot so the next `get()` reloads."""
        with self._lock:
            self._offers = None
            self._loaded_at = 0.0

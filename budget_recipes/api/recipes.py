"""Recipe API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from budget_recipes.api.dependencies import (
    get_current_offers,
    get_recipe_catalog,
    get_recipe_match_service,
    get_shopping_list_service,
)
from budget_recipes.config import Settings, get_settings
from budget_recipes.schemas.match import RecipeMatch
from budget_recipes.schemas.offer import Offer
from budget_recipes.schemas.shopping_list import ShoppingList, ShoppingListRequest
from budget_recipes.services import ranking
from budget_recipes.services.catalog import RecipeCatalog
from budget_recipes.services.recipe_matcher import RecipeMatchService
from budget_recipes.services.shopping_list import ShoppingListService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/recipes", tags=["recipes"])

Catalog = Annotated[RecipeCatalog, Depends(get_recipe_catalog)]
CurrentOffers = Annotated[list[Offer], Depends(get_current_offers)]
Matcher = Annotated[RecipeMatchService, Depends(get_recipe_match_service)]


# --- Static routes first (before /{recipe_id}) ---


@router.get("", response_model=list[RecipeMatch])
def list_recipes(
    catalog: Catalog,
    offers: CurrentOffers,
    matcher: Matcher,
    tag: str | None = None,
    q: str | None = Query(None, min_length=1),
):
    """List recipes with their offer matches, best matching first."""
    recipes = catalog.list_recipes(tag=tag, query=q)
    return ranking.rank_by_match(matcher.match_recipes(recipes, offers))


@router.get("/top-matches", response_model=list[RecipeMatch])
def top_matches(
    catalog: Catalog,
    offers: CurrentOffers,
    matcher: Matcher,
    settings: Annotated[Settings, Depends(get_settings)],
    limit: int | None = Query(None, ge=1, le=100),
):
    """Recipes with the most ingredients currently on offer."""
    matches = matcher.match_recipes(catalog.list_recipes(), offers)
    return ranking.top_matches(matches, limit or settings.top_matches_limit)


@router.get("/best-deals", response_model=list[RecipeMatch])
def best_deals(
    catalog: Catalog,
    offers: CurrentOffers,
    matcher: Matcher,
    settings: Annotated[Settings, Depends(get_settings)],
    limit: int | None = Query(None, ge=1, le=100),
):
    """Recipes with the highest total savings."""
    matches = matcher.match_recipes(catalog.list_recipes(), offers)
    return ranking.best_deals(matches, limit or settings.best_deals_limit)


@router.get("/cheapest", response_model=list[RecipeMatch])
def cheapest(
    catalog: Catalog,
    offers: CurrentOffers,
    matcher: Matcher,
    settings: Annotated[Settings, Depends(get_settings)],
    limit: int | None = Query(None, ge=1, le=100),
):
    """Recipes with the lowest estimated cost per serving."""
    matches = matcher.match_recipes(catalog.list_recipes(), offers)
    return ranking.cheapest(matches, limit or settings.cheapest_limit)


@router.get("/batch-friendly", response_model=list[RecipeMatch])
def batch_friendly(
    catalog: Catalog,
    offers: CurrentOffers,
    matcher: Matcher,
    min_score: int = Query(4, ge=1, le=5),
):
    """Recipes suited to cooking in bulk."""
    recipes = catalog.batch_friendly(min_score)
    return ranking.rank_by_match(matcher.match_recipes(recipes, offers))


@router.get("/freezer-friendly", response_model=list[RecipeMatch])
def freezer_friendly(catalog: Catalog, offers: CurrentOffers, matcher: Matcher):
    """Recipes that can be frozen."""
    recipes = catalog.freezer_friendly()
    return ranking.rank_by_match(matcher.match_recipes(recipes, offers))


@router.get("/tags", response_model=list[str])
def list_tags(catalog: Catalog):
    """All tags used by recipes."""
    return catalog.list_tags()


@router.post("/shopping-list", response_model=ShoppingList)
def generate_shopping_list(
    request: ShoppingListRequest,
    catalog: Catalog,
    offers: CurrentOffers,
    service: Annotated[ShoppingListService, Depends(get_shopping_list_service)],
):
    """Merge the requested recipes into one shopping list."""
    recipes = catalog.get_recipes(entry.recipe_id for entry in request.recipes)

    selections = []
    for entry in request.recipes:
        recipe = recipes.get(entry.recipe_id)
        if recipe is None:
            logger.warning(f"Skipping unknown recipe '{entry.recipe_id}' in shopping list")
            continue
        selections.append((recipe, entry.servings or recipe.servings))

    if not selections:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No valid recipes found",
        )

    return service.build_shopping_list(selections, offers)


# --- Dynamic routes ---


@router.get("/{recipe_id}", response_model=RecipeMatch)
def get_recipe(recipe_id: str, catalog: Catalog, offers: CurrentOffers, matcher: Matcher):
    """Get a single recipe with its offer matches."""
    recipe = catalog.get_recipe(recipe_id)
    if not recipe:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")
    return matcher.match_recipe(recipe, offers)

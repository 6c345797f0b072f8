"""Pydantic schemas for the matching engine and API."""

from budget_recipes.schemas.match import IngredientMatch, RecipeMatch
from budget_recipes.schemas.offer import Offer, OfferStats
from budget_recipes.schemas.recipe import Ingredient, Recipe, VariationTip
from budget_recipes.schemas.shopping_list import (
    ShoppingList,
    ShoppingListEntry,
    ShoppingListItem,
    ShoppingListRequest,
    StoreSection,
)

__all__ = [
    "Ingredient",
    "IngredientMatch",
    "Offer",
    "OfferStats",
    "Recipe",
    "RecipeMatch",
    "ShoppingList",
    "ShoppingListEntry",
    "ShoppingListItem",
    "ShoppingListRequest",
    "StoreSection",
    "VariationTip",
]

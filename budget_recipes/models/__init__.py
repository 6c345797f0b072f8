"""SQLAlchemy models."""

from budget_recipes.models.offer import Offer
from budget_recipes.models.recipe import Recipe, RecipeIngredient

__all__ = [
    "Offer",
    "Recipe",
    "RecipeIngredient",
]

"""Schemas for recipe-to-offer match results."""

from pydantic import BaseModel, computed_field

from budget_recipes.schemas.offer import Offer
from budget_recipes.schemas.recipe import Ingredient, Recipe


class IngredientMatch(BaseModel):
    """One ingredient paired with the offers that could cover it."""

    ingredient: Ingredient
    matching_offers: list[Offer] = []
    best_offer: Offer | None = None
    savings: float = 0.0
    is_pantry_staple: bool = False
    estimated_price: float = 0.0

    @computed_field
    @property
    def is_on_offer(self) -> bool:
        return self.best_offer is not None


class RecipeMatch(BaseModel):
    """A recipe with its per-ingredient matches and economics."""

    recipe: Recipe
    ingredient_matches: list[IngredientMatch]
    matched_count: int
    eligible_count: int
    match_percentage: int
    estimated_cost: float
    total_savings: float

    @computed_field
    @property
    def cost_per_serving(self) -> float:
        if self.recipe.servings <= 0:
            return 0.0
        return round(self.estimated_cost / self.recipe.servings, 2)

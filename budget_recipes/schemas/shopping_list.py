"""Shopping list schemas."""

from pydantic import BaseModel, Field

from budget_recipes.models.enums import Store
from budget_recipes.schemas.offer import Offer
from budget_recipes.schemas.recipe import Ingredient


class ShoppingListEntry(BaseModel):
    """A recipe requested for the shopping list."""

    recipe_id: str = Field(..., min_length=1)
    servings: int | None = Field(None, gt=0)  # Defaults to the recipe's base servings


class ShoppingListRequest(BaseModel):
    """Recipes to merge into one shopping list."""

    recipes: list[ShoppingListEntry] = Field(..., min_length=1)


class ShoppingListItem(BaseModel):
    """One merged ingredient line."""

    ingredient: Ingredient
    recipe: str  # First recipe that asked for this ingredient
    recipe_names: list[str] = []
    offer: Offer | None = None
    estimated_price: float
    is_on_offer: bool


class StoreSection(BaseModel):
    """Items whose matched offer is sold by one store."""

    store: Store
    items: list[ShoppingListItem]
    subtotal: float


class ShoppingList(BaseModel):
    """Merged, store-partitioned shopping list."""

    items: list[ShoppingListItem]
    total_estimated_cost: float
    total_savings: float
    stores: list[StoreSection]

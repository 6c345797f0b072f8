"""Recipe schemas."""

from pydantic import BaseModel, ConfigDict, Field

from budget_recipes.models.enums import IngredientCategory

# --- Ingredient ---


class Ingredient(BaseModel):
    """Ingredient line of a recipe, written for the recipe's base servings."""

    model_config = ConfigDict(from_attributes=True)

    name: str = Field(..., min_length=1, max_length=255)
    amount: float = Field(..., gt=0)
    unit: str = Field("", max_length=50)  # e.g. "g", "ml", "stuks", "el"
    category: IngredientCategory = IngredientCategory.OVERIG
    is_pantry_staple: bool = False  # Author-asserted, checked next to the name classifier


class VariationTip(BaseModel):
    """Suggestion for changing up leftovers on a later day."""

    day: int = Field(..., ge=1)
    suggestion: str
    extra_ingredients: list[str] = []


# --- Recipe ---


class Recipe(BaseModel):
    """Catalog recipe, immutable while a request is being served."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    servings: int = Field(..., gt=0)
    prep_time: int = Field(0, ge=0)
    cook_time: int = Field(0, ge=0)
    batch_cooking_score: int = Field(3, ge=1, le=5)
    freezer_friendly: bool = False
    fridge_life_days: int = Field(0, ge=0)
    freezer_life_months: int = Field(0, ge=0)
    ingredients: list[Ingredient] = []
    instructions: list[str] = []
    variation_tips: list[VariationTip] = []
    tags: list[str] = []
    image_url: str | None = None

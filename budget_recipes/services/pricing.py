"""Fallback pricing for ingredients that are not on offer, and money rounding."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol

from budget_recipes.config import Settings
from budget_recipes.models.enums import FallbackPricingMode, IngredientCategory
from budget_recipes.schemas.recipe import Ingredient

DEFAULT_FLAT_PRICE = 2.50
DEFAULT_CATEGORY_PRICE = 2.00

# Average shelf prices per category, in euros
AVERAGE_PRICES: dict[str, float] = {
    IngredientCategory.VLEES.value: 8.00,
    IngredientCategory.VIS.value: 6.00,
    IngredientCategory.ZUIVEL.value: 2.50,
    IngredientCategory.GROENTEN.value: 1.50,
    IngredientCategory.FRUIT.value: 2.00,
    IngredientCategory.BROOD.value: 2.50,
    IngredientCategory.PASTA_RIJST.value: 1.50,
    IngredientCategory.CONSERVEN.value: 1.20,
    IngredientCategory.DIEPVRIES.value: 3.00,
    IngredientCategory.SAUZEN.value: 2.00,
    IngredientCategory.KRUIDEN.value: 1.50,
    IngredientCategory.OVERIG.value: 2.00,
}


def round_half_up(value: float, places: int = 2) -> float:
    """Round like a till does: 0.125 -> 0.13, not banker's rounding."""
    exponent = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP))


class FallbackPricing(Protocol):
    """Estimated price of an ingredient no offer covers."""

    def price_for(self, ingredient: Ingredient) -> float: ...


class FlatFallbackPricing:
    """Every unmatched ingredient costs the same."""

    def __init__(self, price: float = DEFAULT_FLAT_PRICE):
        self.price = price

    def price_for(self, ingredient: Ingredient) -> float:
        return self.price


class CategoryFallbackPricing:
    """Unmatched ingredients cost their category's average price."""

    def __init__(
        self,
        prices: dict[str, float] | None = None,
        default: float = DEFAULT_CATEGORY_PRICE,
    ):
        self.prices = dict(AVERAGE_PRICES if prices is None else prices)
        self.default = default

    def price_for(self, ingredient: Ingredient) -> float:
        category = getattr(ingredient.category, "value", ingredient.category)
        return self.prices.get(category, self.default)


def build_fallback_pricing(settings: Settings) -> FallbackPricing:
    """Pick the fallback pricing policy named in settings."""
    if FallbackPricingMode(settings.fallback_pricing) == FallbackPricingMode.FLAT:
        return FlatFallbackPricing(settings.flat_fallback_price)
    return CategoryFallbackPricing()

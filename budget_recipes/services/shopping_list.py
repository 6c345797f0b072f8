"""Shopping list aggregation across several recipes."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from budget_recipes.config import Settings
from budget_recipes.models.enums import ShoppingListPricing, Store
from budget_recipes.schemas.offer import Offer
from budget_recipes.schemas.recipe import Ingredient, Recipe
from budget_recipes.schemas.shopping_list import ShoppingList, ShoppingListItem, StoreSection
from budget_recipes.services.offer_matcher import (
    OfferIndex,
    OfferMatcher,
    build_offer_matcher,
    offer_savings,
)
from budget_recipes.services.pantry import PantryStapleClassifier, build_staple_classifier
from budget_recipes.services.pricing import (
    CategoryFallbackPricing,
    FallbackPricing,
    build_fallback_pricing,
    round_half_up,
)
from budget_recipes.services.text import normalize_text

logger = logging.getLogger(__name__)


@dataclass
class _MergedLine:
    ingredient: Ingredient
    amount: float
    price: float
    offer: Offer | None
    recipe_names: list[str] = field(default_factory=list)


def scale_factor(requested_servings: float, base_servings: int) -> float:
    """How much to multiply a recipe's amounts by, 0 for a recipe without servings."""
    if base_servings <= 0:
        return 0.0
    return requested_servings / base_servings


class ShoppingListService:
    """Merges the ingredients of selected recipes into one priced list.

    With the per-recipe policy every recipe's share of an ingredient is priced
    on its own and the prices are summed, so two recipes using the same
    discounted product pay for it twice. The single-purchase policy prices a
    merged ingredient once.
    """

    def __init__(
        self,
        matcher: OfferMatcher | None = None,
        pricing: FallbackPricing | None = None,
        classifier: PantryStapleClassifier | None = None,
        policy: ShoppingListPricing | str = ShoppingListPricing.PER_RECIPE,
    ):
        self.matcher = matcher or OfferMatcher()
        self.pricing = pricing or CategoryFallbackPricing()
        self.classifier = classifier or PantryStapleClassifier()
        self.policy = ShoppingListPricing(policy)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ShoppingListService":
        return cls(
            matcher=build_offer_matcher(settings),
            pricing=build_fallback_pricing(settings),
            classifier=build_staple_classifier(settings),
            policy=settings.shopping_list_pricing,
        )

    def build_shopping_list(
        self,
        selections: Iterable[tuple[Recipe, float]],
        offers: Iterable[Offer] | OfferIndex,
    ) -> ShoppingList:
        """Build a shopping list from (recipe, requested servings) pairs."""
        index = offers if isinstance(offers, OfferIndex) else OfferIndex(offers)

        # Key: normalized ingredient name -> merged line
        lines: dict[str, _MergedLine] = {}
        skipped_count = 0

        for recipe, servings in selections:
            factor = scale_factor(servings, recipe.servings)

            for ingredient in recipe.ingredients:
                # Staples are assumed to be at home already
                if self.classifier.is_excluded(ingredient):
                    skipped_count += 1
                    continue

                key = normalize_text(ingredient.name) or ingredient.name.strip().lower()
                scaled_amount = ingredient.amount * factor
                existing = lines.get(key)

                if existing and self.policy == ShoppingListPricing.SINGLE_PURCHASE:
                    existing.amount += scaled_amount
                    self._add_recipe_name(existing, recipe.name)
                    continue

                _, offer = self.matcher.match(ingredient, index)
                price = offer.offer_price if offer else self.pricing.price_for(ingredient)

                if existing:
                    # Merge: add quantity and this recipe's share of the price
                    existing.amount += scaled_amount
                    existing.price += price
                    self._add_recipe_name(existing, recipe.name)
                else:
                    lines[key] = _MergedLine(
                        ingredient=ingredient,
                        amount=scaled_amount,
                        price=price,
                        offer=offer,
                        recipe_names=[recipe.name],
                    )

        logger.info(
            f"Built shopping list with {len(lines)} items ({skipped_count} pantry staples skipped)"
        )
        return self._assemble(list(lines.values()))

    def _add_recipe_name(self, line: _MergedLine, recipe_name: str) -> None:
        if recipe_name not in line.recipe_names:
            line.recipe_names.append(recipe_name)

    def _assemble(self, lines: list[_MergedLine]) -> ShoppingList:
        items = [
            ShoppingListItem(
                ingredient=line.ingredient.model_copy(update={"amount": line.amount}),
                recipe=line.recipe_names[0],
                recipe_names=line.recipe_names,
                offer=line.offer,
                estimated_price=round_half_up(line.price),
                is_on_offer=line.offer is not None,
            )
            for line in lines
        ]

        stores = []
        for store in Store:
            store_lines = [
                (line, item)
                for line, item in zip(lines, items, strict=True)
                if line.offer is not None and Store(line.offer.store) == store
            ]
            if not store_lines:
                continue
            stores.append(
                StoreSection(
                    store=store,
                    items=[item for _, item in store_lines],
                    subtotal=round_half_up(sum(line.price for line, _ in store_lines)),
                )
            )

        return ShoppingList(
            items=items,
            total_estimated_cost=round_half_up(sum(line.price for line in lines)),
            total_savings=round_half_up(
                sum(offer_savings(line.offer) for line in lines if line.offer is not None)
            ),
            stores=stores,
        )

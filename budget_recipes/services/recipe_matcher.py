"""Recipe economics: which ingredients are on offer, what the recipe costs."""

import logging
from collections.abc import Iterable

from budget_recipes.config import Settings
from budget_recipes.schemas.match import IngredientMatch, RecipeMatch
from budget_recipes.schemas.offer import Offer
from budget_recipes.schemas.recipe import Recipe
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

logger = logging.getLogger(__name__)


class RecipeMatchService:
    """Matches recipes against a snapshot of active offers.

    Stateless between calls: every call works on the recipe and offer lists
    it is given and keeps nothing afterwards.
    """

    def __init__(
        self,
        matcher: OfferMatcher | None = None,
        pricing: FallbackPricing | None = None,
        classifier: PantryStapleClassifier | None = None,
    ):
        self.matcher = matcher or OfferMatcher()
        self.pricing = pricing or CategoryFallbackPricing()
        self.classifier = classifier or PantryStapleClassifier()

    @classmethod
    def from_settings(cls, settings: Settings) -> "RecipeMatchService":
        return cls(
            matcher=build_offer_matcher(settings),
            pricing=build_fallback_pricing(settings),
            classifier=build_staple_classifier(settings),
        )

    def match_recipe(self, recipe: Recipe, offers: Iterable[Offer] | OfferIndex) -> RecipeMatch:
        """Match every ingredient of one recipe and total up cost and savings."""
        index = offers if isinstance(offers, OfferIndex) else OfferIndex(offers)

        ingredient_matches: list[IngredientMatch] = []
        matched_count = 0
        eligible_count = 0
        total_cost = 0.0
        total_savings = 0.0

        for ingredient in recipe.ingredients:
            if self.classifier.is_excluded(ingredient):
                ingredient_matches.append(
                    IngredientMatch(ingredient=ingredient, is_pantry_staple=True)
                )
                continue

            eligible_count += 1
            candidates, best = self.matcher.match(ingredient, index)

            if best is not None:
                matched_count += 1
                savings = offer_savings(best)
                price = best.offer_price
                total_savings += savings
            else:
                savings = 0.0
                price = self.pricing.price_for(ingredient)

            total_cost += price
            ingredient_matches.append(
                IngredientMatch(
                    ingredient=ingredient,
                    matching_offers=candidates,
                    best_offer=best,
                    savings=savings,
                    estimated_price=price,
                )
            )

        return RecipeMatch(
            recipe=recipe,
            ingredient_matches=ingredient_matches,
            matched_count=matched_count,
            eligible_count=eligible_count,
            match_percentage=match_percentage(matched_count, eligible_count),
            estimated_cost=round_half_up(total_cost),
            total_savings=round_half_up(total_savings),
        )

    def match_recipes(
        self, recipes: Iterable[Recipe], offers: Iterable[Offer] | OfferIndex
    ) -> list[RecipeMatch]:
        """Match a batch of recipes, in input order, sharing one offer index."""
        index = offers if isinstance(offers, OfferIndex) else OfferIndex(offers)
        matches = [self.match_recipe(recipe, index) for recipe in recipes]
        logger.info(f"Matched {len(matches)} recipes against {len(index)} offers")
        return matches


def match_percentage(matched_count: int, eligible_count: int) -> int:
    """Share of eligible ingredients that are on offer, 0 when none are eligible."""
    if eligible_count <= 0:
        return 0
    return int(round_half_up(matched_count / eligible_count * 100, 0))

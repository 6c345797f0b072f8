"""Ranking pipelines over already computed recipe matches.

All sorts rely on Python's stable sort, so recipes with equal keys keep
their input order.
"""

from collections.abc import Iterable

from budget_recipes.schemas.match import RecipeMatch

DEFAULT_TOP_MATCHES_LIMIT = 10
DEFAULT_CHEAPEST_LIMIT = 10
DEFAULT_BEST_DEALS_LIMIT = 5


def top_matches(
    matches: Iterable[RecipeMatch], limit: int = DEFAULT_TOP_MATCHES_LIMIT
) -> list[RecipeMatch]:
    """Recipes with the most ingredients on offer, then the biggest savings."""
    with_matches = [m for m in matches if m.matched_count > 0]
    ranked = sorted(with_matches, key=lambda m: (-m.matched_count, -m.total_savings))
    return ranked[: max(limit, 0)]


def cheapest(
    matches: Iterable[RecipeMatch], limit: int = DEFAULT_CHEAPEST_LIMIT
) -> list[RecipeMatch]:
    """Recipes with the lowest estimated cost per serving, matched or not."""
    ranked = sorted(matches, key=_cost_per_serving)
    return ranked[: max(limit, 0)]


def best_deals(
    matches: Iterable[RecipeMatch], limit: int = DEFAULT_BEST_DEALS_LIMIT
) -> list[RecipeMatch]:
    """Recipes that save money, biggest saving first."""
    saving = [m for m in matches if m.total_savings > 0]
    ranked = sorted(saving, key=lambda m: -m.total_savings)
    return ranked[: max(limit, 0)]


def _cost_per_serving(match: RecipeMatch) -> float:
    if match.recipe.servings <= 0:
        return 0.0
    return match.estimated_cost / match.recipe.servings


def rank_by_match(matches: Iterable[RecipeMatch]) -> list[RecipeMatch]:
    """Default listing order: highest match percentage, then biggest saving."""
    return sorted(matches, key=lambda m: (-m.match_percentage, -m.total_savings))

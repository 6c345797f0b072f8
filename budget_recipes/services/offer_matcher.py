"""Ingredient-to-offer matching.

An offer is a candidate for an ingredient when either of two independent
rules holds:

1. Word overlap: a word of the ingredient name (3+ characters) occurs inside
   a word of the product name (3+ characters), or the other way around.
   "paprika" matches "Puntpaprika mix".
2. Synonyms: ingredient and product name both mention a term of the same
   synonym group. "gehakt" matches "Rundergehakt", "pasta" matches
   "Spaghetti".

Among the candidates one best offer is picked by a swappable strategy; the
default prefers the highest discount percentage and keeps the first offer on
ties.
"""

import logging
from collections.abc import Callable, Iterable
from typing import NamedTuple

from budget_recipes.config import Settings
from budget_recipes.models.enums import BestOfferStrategy
from budget_recipes.schemas.offer import Offer
from budget_recipes.schemas.recipe import Ingredient
from budget_recipes.services.discount import parse_discount_percentage
from budget_recipes.services.synonyms import SynonymTable, get_synonym_table
from budget_recipes.services.text import normalize_text, tokenize

logger = logging.getLogger(__name__)

MIN_WORD_LENGTH = 3


class IndexedOffer(NamedTuple):
    offer: Offer
    normalized: str
    words: tuple[str, ...]


class OfferIndex:
    """Offers with their product names normalized once per call."""

    def __init__(self, offers: Iterable[Offer]):
        self.entries: list[IndexedOffer] = []
        for offer in offers:
            normalized = normalize_text(offer.product_name)
            self.entries.append(IndexedOffer(offer, normalized, tuple(tokenize(normalized))))

    def __len__(self) -> int:
        return len(self.entries)


def offer_savings(offer: Offer) -> float:
    """Money saved by buying on offer; never negative, even for swapped prices."""
    return max(0.0, offer.original_price - offer.offer_price)


def words_overlap(ingredient_words: Iterable[str], offer_words: Iterable[str]) -> bool:
    """Word overlap rule, ignoring words shorter than three characters."""
    significant_offer_words = [w for w in offer_words if len(w) >= MIN_WORD_LENGTH]
    for word in ingredient_words:
        if len(word) < MIN_WORD_LENGTH:
            continue
        for offer_word in significant_offer_words:
            if word in offer_word or offer_word in word:
                return True
    return False


# Higher score wins; ties keep the earlier offer
_STRATEGY_SCORES: dict[BestOfferStrategy, Callable[[Offer], float]] = {
    BestOfferStrategy.HIGHEST_DISCOUNT: lambda offer: parse_discount_percentage(
        offer.discount_percentage
    ),
    BestOfferStrategy.LOWEST_PRICE: lambda offer: -offer.offer_price,
    BestOfferStrategy.HIGHEST_SAVINGS: offer_savings,
}


def select_best_offer(
    candidates: Iterable[Offer],
    strategy: BestOfferStrategy | str = BestOfferStrategy.HIGHEST_DISCOUNT,
) -> Offer | None:
    """Pick one offer among candidates, or None when there are none."""
    score = _STRATEGY_SCORES[BestOfferStrategy(strategy)]
    best: Offer | None = None
    best_score = 0.0
    for offer in candidates:
        offer_score = score(offer)
        if best is None or offer_score > best_score:
            best, best_score = offer, offer_score
    return best


class OfferMatcher:
    """Finds candidate offers for an ingredient and picks the best one."""

    def __init__(
        self,
        synonyms: SynonymTable | None = None,
        strategy: BestOfferStrategy | str = BestOfferStrategy.HIGHEST_DISCOUNT,
    ):
        self.synonyms = synonyms if synonyms is not None else get_synonym_table()
        self.strategy = BestOfferStrategy(strategy)

    def is_candidate(self, ingredient_name: str, product_name: str) -> bool:
        """Apply both matching rules to a pair of raw names."""
        ingredient = normalize_text(ingredient_name)
        product = normalize_text(product_name)
        return self._is_candidate(ingredient, tokenize(ingredient), product, tokenize(product))

    def find_candidate_offers(
        self,
        ingredient: Ingredient | str,
        offers: Iterable[Offer] | OfferIndex,
    ) -> list[Offer]:
        """All offers that match the ingredient, in input order."""
        index = offers if isinstance(offers, OfferIndex) else OfferIndex(offers)
        name = ingredient if isinstance(ingredient, str) else ingredient.name
        normalized = normalize_text(name)
        if not normalized:
            return []
        words = tokenize(normalized)
        return [
            entry.offer
            for entry in index.entries
            if self._is_candidate(normalized, words, entry.normalized, entry.words)
        ]

    def select_best_offer(self, candidates: Iterable[Offer]) -> Offer | None:
        return select_best_offer(candidates, self.strategy)

    def match(
        self,
        ingredient: Ingredient | str,
        offers: Iterable[Offer] | OfferIndex,
    ) -> tuple[list[Offer], Offer | None]:
        """Candidates and the selected best offer for one ingredient."""
        candidates = self.find_candidate_offers(ingredient, offers)
        best = self.select_best_offer(candidates)
        if best is not None:
            name = ingredient if isinstance(ingredient, str) else ingredient.name
            logger.debug(
                f"Best offer for '{name}': '{best.product_name}' ({best.store.value}) "
                f"out of {len(candidates)} candidates"
            )
        return candidates, best

    def _is_candidate(
        self,
        ingredient: str,
        ingredient_words: list[str],
        product: str,
        product_words: Iterable[str],
    ) -> bool:
        if words_overlap(ingredient_words, product_words):
            return True
        return self.synonyms.matches(ingredient, product)


def build_offer_matcher(settings: Settings) -> OfferMatcher:
    """Matcher configured with the settings' synonym table and strategy."""
    return OfferMatcher(
        synonyms=get_synonym_table(settings.synonym_table),
        strategy=settings.best_offer_strategy,
    )

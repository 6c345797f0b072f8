"""Pantry staple classification.

Staples are ingredients every household is assumed to own. They are never
searched for offers, never priced and never counted towards the match
percentage.
"""

from collections.abc import Iterable

from budget_recipes.config import Settings
from budget_recipes.models.enums import StapleMatching
from budget_recipes.schemas.recipe import Ingredient
from budget_recipes.services.text import normalize_text, tokenize

PANTRY_STAPLES = (
    # Salt and pepper
    "zout",
    "zeezout",
    "peper",
    "zwarte peper",
    # Oils and fats
    "olie",
    "olijfolie",
    "zonnebloemolie",
    "plantaardige olie",
    "boter",
    "roomboter",
    "margarine",
    # Baking
    "bloem",
    "tarwebloem",
    "suiker",
    "kristalsuiker",
    "basterdsuiker",
    "bakpoeder",
    # Stock
    "bouillon",
    "bouillonblokje",
    "groentebouillon",
    "kippenbouillon",
    "runderbouillon",
    # Condiments
    "azijn",
    "witte wijnazijn",
    "balsamico azijn",
    "tomatenpuree",
    "mosterd",
    "sojasaus",
    # Alliums
    "ui",
    "uien",
    "knoflook",
    # Herbs and spices
    "kruiden",
    "specerijen",
    "paprikapoeder",
    "knoflookpoeder",
    "uienpoeder",
    "oregano",
    "basilicum",
    "tijm",
    "komijn",
    "kerrie",
    "kurkuma",
    "kaneel",
    "nootmuskaat",
    "laurier",
    "laurierblad",
)

# Word-aware mode: terms that only count as a whole word ("bloem" must not catch "bloemkool")
WORD_ONLY_STAPLES = frozenset({"bloem", "suiker"})

# Word-aware mode: shorter strings only match as whole words ("ui" must not catch "fruit")
MIN_SUBSTRING_LENGTH = 3


class PantryStapleClassifier:
    """Name-based staple check, combined with the ingredient's own flag.

    In substring mode a name is a staple when it contains a staple term or
    is contained by one, so "tomaten" is a staple through "tomatenpuree".
    Word-aware mode keeps short and word-only terms to whole words and only
    accepts whole-word containment the other way round ("peper" in
    "zwarte peper"), which leaves "fruit", "bloemkool" and "tomaten" eligible.
    """

    def __init__(
        self,
        terms: Iterable[str] = PANTRY_STAPLES,
        word_only: Iterable[str] = WORD_ONLY_STAPLES,
        mode: StapleMatching | str = StapleMatching.SUBSTRING,
    ):
        self.terms = tuple(normalize_text(term) for term in terms if normalize_text(term))
        self.word_only = frozenset(normalize_text(term) for term in word_only)
        self.mode = StapleMatching(mode)

    def is_staple_name(self, name: str) -> bool:
        """Check whether a free-text ingredient name is a pantry staple."""
        normalized = normalize_text(name)
        if not normalized:
            return False

        if self.mode == StapleMatching.SUBSTRING:
            return any(term in normalized or normalized in term for term in self.terms)

        words = set(tokenize(normalized))
        for term in self.terms:
            if self._contains(normalized, words, term):
                return True
            if f" {normalized} " in f" {term} ":
                return True
        return False

    def is_excluded(self, ingredient: Ingredient) -> bool:
        """An ingredient is a staple if it is flagged OR its name says so."""
        return ingredient.is_pantry_staple or self.is_staple_name(ingredient.name)

    def _contains(self, name: str, name_words: set[str], term: str) -> bool:
        if term in name_words:
            return True
        if term in self.word_only or len(term) < MIN_SUBSTRING_LENGTH:
            return False
        if " " in term:
            return term in name
        return any(term in word for word in name_words)


def build_staple_classifier(settings: Settings) -> PantryStapleClassifier:
    """Classifier using the staple matching mode named in settings."""
    return PantryStapleClassifier(mode=settings.staple_matching)


_default_classifier = PantryStapleClassifier()


def is_pantry_staple(ingredient_name: str) -> bool:
    """Check a name against the default staple list."""
    return _default_classifier.is_staple_name(ingredient_name)

"""Tests for text normalization and pantry staple classification."""

import pytest

from budget_recipes.config import Settings
from budget_recipes.models.enums import StapleMatching
from budget_recipes.schemas.recipe import Ingredient
from budget_recipes.services.pantry import (
    PantryStapleClassifier,
    build_staple_classifier,
    is_pantry_staple,
)
from budget_recipes.services.text import normalize_text, tokenize


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("  Crème  Fraîche! ", "creme fraiche"),
        ("Half-om-half Gehakt", "halfomhalf gehakt"),
        ("AH Rundergehakt 500g", "ah rundergehakt 500g"),
        ("€ 2,50 / kg", "250 kg"),
        ("", ""),
        (None, ""),
    ],
)
def test_normalize_text(raw, expected):
    """Normalization lowercases, folds accents and drops punctuation."""
    assert normalize_text(raw) == expected


def test_normalize_text_is_idempotent():
    """Normalizing twice changes nothing."""
    once = normalize_text("Jumbo Kipfilet (2 stuks) – à la minute")
    assert normalize_text(once) == once


def test_tokenize_splits_on_whitespace():
    assert tokenize("zwarte peper") == ["zwarte", "peper"]
    assert tokenize("") == []


@pytest.mark.parametrize("mode", list(StapleMatching))
@pytest.mark.parametrize(
    "name",
    [
        "zout",
        "Zout",
        "Zwarte peper",
        "peper",
        "olijfolie extra vierge",
        "rode ui",
        "Uien",
        "kippenbouillon",
        "groentebouillon",
        "verse knoflook",
        "Komijn (gemalen)",
        "paprikapoeder",
        "Gerookt paprikapoeder",
        "laurierblad",
    ],
)
def test_pantry_staples_detected(name, mode):
    """Staple terms are found as words or inside words in either mode."""
    assert PantryStapleClassifier(mode=mode).is_staple_name(name) is True


@pytest.mark.parametrize("mode", list(StapleMatching))
@pytest.mark.parametrize("name", ["gehakt", "kidneybonen", "kipfilet", "broccoli", ""])
def test_non_staples_not_detected(name, mode):
    assert PantryStapleClassifier(mode=mode).is_staple_name(name) is False


@pytest.mark.parametrize("name", ["fruit", "bloemkool", "suikermais", "tomaten", "paprika"])
def test_substring_mode_matches_inside_and_within_terms(name):
    """Default mode: containing a term, or being contained by one, is enough.

    "fruit" contains "ui", "bloemkool" contains "bloem", "tomaten" sits inside
    "tomatenpuree" and "paprika" inside "paprikapoeder".
    """
    assert is_pantry_staple(name) is True
    assert PantryStapleClassifier(mode=StapleMatching.SUBSTRING).is_staple_name(name) is True


@pytest.mark.parametrize("name", ["fruit", "bloemkool", "suikermais", "tomaten", "paprika"])
def test_word_aware_mode_keeps_short_and_word_only_terms_to_words(name):
    """Word-aware mode does not let short or word-only terms leak into other names."""
    classifier = PantryStapleClassifier(mode=StapleMatching.WORD_AWARE)

    assert classifier.is_staple_name(name) is False


def test_word_aware_mode_accepts_whole_word_containment():
    """'peper' is a whole word of the staple 'zwarte peper'."""
    classifier = PantryStapleClassifier(mode="word_aware")

    assert classifier.is_staple_name("peper") is True


def test_build_staple_classifier_from_settings():
    assert build_staple_classifier(Settings()).mode == StapleMatching.SUBSTRING
    classifier = build_staple_classifier(Settings(staple_matching="word_aware"))

    assert classifier.mode == StapleMatching.WORD_AWARE
    assert classifier.is_staple_name("bloemkool") is False


def test_flagged_ingredient_is_excluded_regardless_of_name():
    """The ingredient flag alone is enough to exclude it."""
    classifier = PantryStapleClassifier()
    ingredient = Ingredient(name="gehakt", amount=500, unit="g", is_pantry_staple=True)

    assert classifier.is_excluded(ingredient) is True


def test_staple_name_is_excluded_without_flag():
    """A staple by name is excluded even when the flag is not set."""
    classifier = PantryStapleClassifier()
    ingredient = Ingredient(name="zout", amount=1, unit="tl")

    assert ingredient.is_pantry_staple is False
    assert classifier.is_excluded(ingredient) is True


def test_regular_ingredient_is_not_excluded():
    classifier = PantryStapleClassifier()
    ingredient = Ingredient(name="kidneybonen", amount=400, unit="g")

    assert classifier.is_excluded(ingredient) is False


def test_custom_staple_terms():
    """A classifier can be built from its own list of terms."""
    classifier = PantryStapleClassifier(terms=["rijst"], word_only=[])

    assert classifier.is_staple_name("basmatirijst") is True
    assert classifier.is_staple_name("zout") is False

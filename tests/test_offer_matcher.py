"""Tests for ingredient-to-offer matching, discounts and synonyms."""

import pytest

from budget_recipes.config import Settings
from budget_recipes.models.enums import BestOfferStrategy
from budget_recipes.services.discount import (
    derive_discount_percentage,
    parse_discount_percentage,
)
from budget_recipes.services.offer_matcher import (
    OfferIndex,
    OfferMatcher,
    build_offer_matcher,
    offer_savings,
    select_best_offer,
    words_overlap,
)
from budget_recipes.services.synonyms import SynonymTable, get_synonym_table


class TestDiscountParsing:
    """Tests for discount percentage parsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (31, 31),
            (31.9, 31),
            ("31%", 31),
            ("25% korting", 25),
            ("12,5%", 12),
            ("40", 40),
            ("2e halve prijs", 25),
            ("1+1 gratis", 50),
            ("2+1 GRATIS", 33),
            ("op=op", 0),
            ("", 0),
            (None, 0),
            (True, 0),
            (150, 100),
            (-5, 0),
            (float("nan"), 0),
        ],
    )
    def test_parse_discount_percentage(self, value, expected):
        assert parse_discount_percentage(value) == expected

    def test_derive_discount_from_prices(self):
        """Discount is derived from the price difference, rounded half up."""
        assert derive_discount_percentage(6.49, 4.49) == 31
        assert derive_discount_percentage(2.00, 1.50) == 25
        assert derive_discount_percentage(1.00, 1.00) == 0
        assert derive_discount_percentage(1.00, 2.00) == 0
        assert derive_discount_percentage(0, 0) == 0


class TestSynonymTable:
    """Tests for synonym tables."""

    def test_groups_match_variants(self):
        table = get_synonym_table()

        assert table.matches("gehakt", "ah rundergehakt") is True
        assert table.matches("pasta", "jumbo spaghetti") is True
        assert table.matches("kaas", "ah kipfilet") is False

    def test_unknown_ingredient_has_no_bases(self):
        table = get_synonym_table()

        assert table.bases_for("broccoli") == set()
        assert table.matches("broccoli", "ah broccoli") is False

    def test_basic_table_is_smaller(self):
        basic = get_synonym_table("basic")
        extended = get_synonym_table("extended")

        assert len(basic) < len(extended)
        assert basic.bases_for("rode paprika") == set()
        assert "paprika" in extended.bases_for("rode paprika")

    def test_extended_merges_new_groups(self):
        """Extending a table adds groups without touching the original."""
        table = SynonymTable({"kip": ["kipfilet"]})
        bigger = table.extended({"vis": ["zalm", "kabeljauw"]})

        assert bigger.matches("vis", "verse zalmfilet") is True
        assert table.matches("vis", "verse zalmfilet") is False
        assert len(bigger) == 2


class TestWordOverlap:
    """Tests for the word overlap rule."""

    def test_ingredient_word_inside_product_word(self):
        assert words_overlap(["paprika"], ["puntpaprika", "mix"]) is True

    def test_product_word_inside_ingredient_word(self):
        assert words_overlap(["kipfilethaasjes"], ["kipfilet"]) is True

    def test_short_words_are_ignored(self):
        """Words under three characters never match, on either side."""
        assert words_overlap(["ui"], ["fruit"]) is False
        assert words_overlap(["fruit"], ["ui"]) is False
        assert words_overlap(["ah", "broccoli"], ["ah", "kipfilet"]) is False

    def test_no_overlap(self):
        assert words_overlap(["gehakt"], ["500g", "kidneybonen"]) is False


class TestOfferMatcher:
    """Tests for candidate search and best offer selection."""

    def test_word_overlap_candidate(self, make_offer):
        """'Paprika' matches 'Puntpaprika mix' through word overlap."""
        matcher = OfferMatcher(synonyms=SynonymTable({}))
        offer = make_offer("Puntpaprika mix")

        assert matcher.find_candidate_offers("Paprika", [offer]) == [offer]

    def test_synonym_candidate(self, make_offer):
        """'pasta' has no word in common with 'Spaghetti' but shares a group."""
        matcher = OfferMatcher()
        offer = make_offer("Jumbo Spaghetti")

        assert matcher.is_candidate("pasta", "Jumbo Spaghetti") is True
        assert matcher.find_candidate_offers("pasta", [offer]) == [offer]

    def test_synonym_rule_can_be_disabled_with_empty_table(self):
        matcher = OfferMatcher(synonyms=SynonymTable({}))

        assert matcher.is_candidate("pasta", "Jumbo Spaghetti") is False

    def test_no_candidates(self, make_offer):
        matcher = OfferMatcher()
        offers = [make_offer("AH Rundergehakt"), make_offer("Kidneybonen")]

        assert matcher.find_candidate_offers("broccoli", offers) == []

    def test_empty_ingredient_name(self, make_offer):
        matcher = OfferMatcher()

        assert matcher.find_candidate_offers("!!", [make_offer("Kipfilet")]) == []

    def test_candidates_keep_input_order(self, make_offer):
        matcher = OfferMatcher()
        first = make_offer("AH Kipfilet", store="albert-heijn")
        other = make_offer("Broccoli")
        second = make_offer("Jumbo Kipfilet", store="jumbo")

        candidates = matcher.find_candidate_offers("kipfilet", OfferIndex([first, other, second]))

        assert candidates == [first, second]

    def test_highest_discount_wins(self, make_offer):
        """A '2e halve prijs' promotion (25%) beats a 20% discount."""
        matcher = OfferMatcher()
        twenty = make_offer("AH Kipfilet", 7.99, 6.39, discount=20)
        promo = make_offer("Jumbo Kipfilet", 7.99, 7.99, discount="2e halve prijs")

        candidates, best = matcher.match("kipfilet", [twenty, promo])

        assert candidates == [twenty, promo]
        assert best == promo

    def test_best_offer_dominates_all_candidates(self, make_offer):
        offers = [
            make_offer("Kipfilet A", discount=10),
            make_offer("Kipfilet B", discount=35),
            make_offer("Kipfilet C", discount="31%"),
        ]

        best = select_best_offer(offers)

        assert all(
            parse_discount_percentage(best.discount_percentage)
            >= parse_discount_percentage(o.discount_percentage)
            for o in offers
        )
        assert best.product_name == "Kipfilet B"

    def test_ties_keep_first_offer(self, make_offer):
        first = make_offer("Kipfilet A", discount=25)
        second = make_offer("Kipfilet B", discount=25)

        assert select_best_offer([first, second]) == first

    def test_unreadable_discount_counts_as_zero(self, make_offer):
        unreadable = make_offer("Kipfilet A", discount="op=op")
        ten = make_offer("Kipfilet B", discount=10)

        assert select_best_offer([unreadable, ten]) == ten

    def test_no_candidates_means_no_best_offer(self):
        assert select_best_offer([]) is None

    def test_lowest_price_strategy(self, make_offer):
        cheap = make_offer("Kipfilet A", 5.00, 3.99, discount=20)
        deep = make_offer("Kipfilet B", 9.00, 4.50, discount=50)

        assert select_best_offer([deep, cheap], BestOfferStrategy.LOWEST_PRICE) == cheap

    def test_highest_savings_strategy(self, make_offer):
        small = make_offer("Kipfilet A", 2.00, 1.00, discount=50)
        large = make_offer("Kipfilet B", 10.00, 7.00, discount=30)

        assert select_best_offer([small, large], "highest_savings") == large

    def test_offer_savings_never_negative(self, make_offer):
        swapped = make_offer("Kipfilet", 1.00, 1.50, discount=0)

        assert offer_savings(swapped) == 0.0

    def test_build_from_settings(self):
        settings = Settings(synonym_table="basic", best_offer_strategy="lowest_price")

        matcher = build_offer_matcher(settings)

        assert matcher.strategy == BestOfferStrategy.LOWEST_PRICE
        assert len(matcher.synonyms) == len(get_synonym_table("basic"))

"""Enums for model fields and engine configuration."""

from enum import Enum


class Store(str, Enum):
    """Retailers whose offers are tracked."""

    ALBERT_HEIJN = "albert-heijn"
    JUMBO = "jumbo"
    LIDL = "lidl"
    ALDI = "aldi"
    PLUS = "plus"
    DIRK = "dirk"
    COOP = "coop"
    DEKAMARKT = "dekamarkt"
    VOMAR = "vomar"
    HOOGVLIET = "hoogvliet"
    SPAR = "spar"
    POIESZ = "poiesz"


class IngredientCategory(str, Enum):
    """Shelf categories shared by ingredients and offers."""

    VLEES = "vlees"
    VIS = "vis"
    ZUIVEL = "zuivel"
    GROENTEN = "groenten"
    FRUIT = "fruit"
    BROOD = "brood"
    PASTA_RIJST = "pasta-rijst"
    CONSERVEN = "conserven"
    DIEPVRIES = "diepvries"
    DRANKEN = "dranken"
    KRUIDEN = "kruiden"
    SAUZEN = "sauzen"
    OVERIG = "overig"


class SynonymTableName(str, Enum):
    """Built-in synonym tables."""

    BASIC = "basic"
    EXTENDED = "extended"


class FallbackPricingMode(str, Enum):
    """How unmatched, non-staple ingredients are priced."""

    FLAT = "flat"
    CATEGORY = "category"


class BestOfferStrategy(str, Enum):
    """Policy used to pick one offer among several candidates."""

    HIGHEST_DISCOUNT = "highest_discount"
    LOWEST_PRICE = "lowest_price"
    HIGHEST_SAVINGS = "highest_savings"


class ShoppingListPricing(str, Enum):
    """How repeated ingredients are priced when recipes are merged."""

    PER_RECIPE = "per_recipe"
    SINGLE_PURCHASE = "single_purchase"


class StapleMatching(str, Enum):
    """How ingredient names are compared against the staple list."""

    SUBSTRING = "substring"
    WORD_AWARE = "word_aware"

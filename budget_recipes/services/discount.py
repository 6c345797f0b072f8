"""Discount percentage parsing.

Offers arrive with a numeric percentage, a "31%" style string or a Dutch
promotion text. Anything unreadable counts as no discount.
"""

import re

from budget_recipes.services.pricing import round_half_up

_ONE_PLUS_ONE = re.compile(r"1\s*\+\s*1")
_TWO_PLUS_ONE = re.compile(r"2\s*\+\s*1")
_SECOND_HALF_PRICE = re.compile(r"2e\s*(voor\s*)?halve\s*prijs|tweede\s*halve\s*prijs")
_PERCENT = re.compile(r"(\d+(?:[.,]\d+)?)\s*%")
_NUMBER = re.compile(r"^\s*(\d+(?:[.,]\d+)?)\s*$")

# Fixed equivalents for multi-buy promotions
PROMOTION_PERCENTAGES = {
    "1+1 gratis": 50,
    "2+1 gratis": 33,
    "2e halve prijs": 25,
}


def _clamp(value: float) -> int:
    return max(0, min(100, int(value)))


def parse_discount_percentage(value: int | float | str | None) -> int:
    """Convert any discount representation to an integer percentage 0-100."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int | float):
        if value != value:  # NaN
            return 0
        return _clamp(value)
    if not isinstance(value, str):
        return 0

    text = value.lower()
    if _ONE_PLUS_ONE.search(text):
        return PROMOTION_PERCENTAGES["1+1 gratis"]
    if _TWO_PLUS_ONE.search(text):
        return PROMOTION_PERCENTAGES["2+1 gratis"]
    if _SECOND_HALF_PRICE.search(text):
        return PROMOTION_PERCENTAGES["2e halve prijs"]

    match = _PERCENT.search(text) or _NUMBER.match(text)
    if match:
        return _clamp(float(match.group(1).replace(",", ".")))
    return 0


def derive_discount_percentage(original_price: float, offer_price: float) -> int:
    """Percentage saved on the original price, 0 when there is no saving."""
    if original_price <= 0 or offer_price >= original_price:
        return 0
    return _clamp(round_half_up((original_price - offer_price) / original_price * 100, 0))

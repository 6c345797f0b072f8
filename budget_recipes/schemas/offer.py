"""Offer schemas."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from budget_recipes.models.enums import Store


class Offer(BaseModel):
    """A currently active discount as handed to the matching engine."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., min_length=1, max_length=100)
    store: Store
    product_name: str = Field(..., min_length=1, max_length=255)
    original_price: float = Field(..., ge=0)
    offer_price: float = Field(..., ge=0)
    # Number, "31%" or a promotion text such as "2e halve prijs"
    discount_percentage: int | float | str | None = None
    category: str = "overig"
    unit: str = ""  # e.g. "per kg", "per stuk", "per 500g"
    valid_from: date | None = None
    valid_until: date | None = None
    image_url: str | None = None
    description: str | None = None


class OfferStats(BaseModel):
    """Counts of active offers."""

    total_offers: int
    by_store: dict[str, int]
    by_category: dict[str, int]

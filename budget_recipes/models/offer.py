"""Offer model."""

from sqlalchemy import Column, Date, Float, String, Text

from budget_recipes.database import Base
from budget_recipes.models.mixins import TimestampMixin


class Offer(Base, TimestampMixin):
    """A retailer's time-boxed discount on a product."""

    __tablename__ = "offers"

    id = Column(String(100), primary_key=True)
    store = Column(String(50), nullable=False, index=True)
    product_name = Column(String(255), nullable=False)
    original_price = Column(Float, nullable=False)
    offer_price = Column(Float, nullable=False)
    discount_percentage = Column(Float, nullable=False, default=0)
    category = Column(String(50), nullable=False, default="overig", index=True)
    unit = Column(String(100), nullable=False, default="")
    valid_from = Column(Date, nullable=False)
    valid_until = Column(Date, nullable=False, index=True)
    image_url = Column(String(500), nullable=True)
    description = Column(Text, nullable=True)  # Promotion text, e.g. "2e HALVE PRIJS"

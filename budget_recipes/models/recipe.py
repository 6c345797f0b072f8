"""Recipe and RecipeIngredient models."""

from sqlalchemy import JSON, Boolean, Column, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from budget_recipes.database import Base
from budget_recipes.models.mixins import TimestampMixin


class Recipe(Base, TimestampMixin):
    """Catalog recipe written for a base number of servings."""

    __tablename__ = "recipes"

    id = Column(String(100), primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    servings = Column(Integer, nullable=False)
    prep_time = Column(Integer, nullable=False, default=0)  # minutes
    cook_time = Column(Integer, nullable=False, default=0)  # minutes
    batch_cooking_score = Column(Integer, nullable=False, default=3)  # 1-5
    freezer_friendly = Column(Boolean, nullable=False, default=False)
    fridge_life_days = Column(Integer, nullable=False, default=0)
    freezer_life_months = Column(Integer, nullable=False, default=0)
    image_url = Column(String(500), nullable=True)

    instructions = Column(JSON, nullable=False, default=list)
    variation_tips = Column(JSON, nullable=False, default=list)
    tags = Column(JSON, nullable=False, default=list)

    # Relationships
    ingredients = relationship(
        "RecipeIngredient",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeIngredient.position",
    )


class RecipeIngredient(Base):
    """Ingredient within a recipe."""

    __tablename__ = "recipe_ingredients"

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(String(100), ForeignKey("recipes.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    name = Column(String(255), nullable=False)
    amount = Column(Float, nullable=False)
    unit = Column(String(50), nullable=False, default="")
    category = Column(String(50), nullable=False, default="overig")
    is_pantry_staple = Column(Boolean, nullable=False, default=False)

    # Relationships
    recipe = relationship("Recipe", back_populates="ingredients")

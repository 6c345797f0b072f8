"""Pytest configuration and fixtures."""

from itertools import count

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from budget_recipes import models  # noqa: F401
from budget_recipes.api.dependencies import get_current_offers
from budget_recipes.database import Base, get_db
from budget_recipes.main import app
from budget_recipes.schemas import Ingredient, Offer, Recipe
from budget_recipes.services.catalog import OfferCatalog
from budget_recipes.services.discount import derive_discount_percentage

# In-memory SQLite shared by every connection
engine = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def client(db):
    """Create a test client with database and offer overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    def override_get_current_offers():
        # Read straight from the test database, bypassing the process-wide cache
        return OfferCatalog(db).active_offers()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_offers] = override_get_current_offers
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_offer():
    """Factory for offers; the discount defaults to the one implied by the prices."""
    ids = count(1)

    def _make_offer(
        product_name: str,
        original_price: float = 2.00,
        offer_price: float = 1.50,
        discount=None,
        store: str = "albert-heijn",
        **kwargs,
    ) -> Offer:
        if discount is None:
            discount = derive_discount_percentage(original_price, offer_price)
        return Offer(
            id=kwargs.pop("id", f"offer-{next(ids)}"),
            store=store,
            product_name=product_name,
            original_price=original_price,
            offer_price=offer_price,
            discount_percentage=discount,
            **kwargs,
        )

    return _make_offer


@pytest.fixture
def make_recipe():
    """Factory for recipes; ingredients may be dicts or (name, amount) tuples."""
    ids = count(1)

    def _make_recipe(name: str, ingredients=(), servings: int = 4, **kwargs) -> Recipe:
        parsed = []
        for ingredient in ingredients:
            if isinstance(ingredient, tuple):
                ingredient = {"name": ingredient[0], "amount": ingredient[1], "unit": "g"}
            parsed.append(Ingredient(**ingredient) if isinstance(ingredient, dict) else ingredient)
        return Recipe(
            id=kwargs.pop("id", f"recipe-{next(ids)}"),
            name=name,
            servings=servings,
            ingredients=parsed,
            **kwargs,
        )

    return _make_recipe

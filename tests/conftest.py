"""
Pytest fixtures for the POS backend tests.

Provides an in-memory SQLite database per test, a session for
service-level tests and a FastAPI test client wired to the same database.
"""

import os

# Must be set before pos_api is imported: settings are read at import time
os.environ.setdefault("ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SALES_RATE_LIMIT", "10000/minute")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pos_api.database import Base, get_db
from pos_api.main import app
from pos_api.models.categories import Category
from pos_api.models.products import Product


def _enable_sqlite_fk(dbapi_connection, connection_record):
    """Enable foreign key constraints for SQLite."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture(scope="function")
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", _enable_sqlite_fk)

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session(session_factory):
    """Session for calling services directly."""
    session = session_factory()
    yield session
    session.rollback()
    session.close()


@pytest.fixture(scope="function")
def client(session_factory):
    """Test client whose requests each get their own session."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_category(db_session):
    def _make(name="Electronics", description=None):
        category = Category(name=name, description=description)
        db_session.add(category)
        db_session.commit()
        return category

    return _make


@pytest.fixture
def make_product(db_session):
    def _make(name="iPhone 15", price="999.99", stock=50, barcode=None, category=None):
        product = Product(
            name=name,
            price=Decimal(price),
            stock_quantity=stock,
            barcode=barcode,
            category_id=category.id if category is not None else None,
        )
        db_session.add(product)
        db_session.commit()
        return product

    return _make


@pytest.fixture
def api_product(client):
    """Create a product through the API and return its JSON."""

    def _make(name="iPhone 15", price="999.99", stock=50, **extra):
        response = client.post(
            "/api/v1/products",
            json={"name": name, "price": price, "stock_quantity": stock, **extra},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _make

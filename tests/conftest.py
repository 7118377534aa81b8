"""
Pytest configuration and fixtures for storefront tests.
"""

from datetime import date, datetime, timezone

import pytest
from fastapi.testclient import TestClient

from raffas_store.core import dependencies
from raffas_store.core.session import SessionManager
from raffas_store.database.catalog import SEED_CATEGORY_ROWS, SEED_MENU_ROWS, CatalogDatabase
from raffas_store.database.orders import OrderDatabase
from raffas_store.main import app
from raffas_store.models.catalog import CatalogItem
from raffas_store.services.cart_engine import CartEngine

# Wednesday; inside the seed menu's discount window
NOW = datetime(2026, 10, 21, 10, 0, tzinfo=timezone.utc)
# Monday; the next bookable day is Wednesday 2026-10-21
TODAY = date(2026, 10, 19)


def make_item(item_id: str = "item-1", **overrides) -> CatalogItem:
    """Build a catalog item with sensible defaults."""
    fields = {
        "id": item_id,
        "name": item_id.replace("-", " ").title(),
        "base_price": 100.0,
        "category": "stix",
    }
    fields.update(overrides)
    return CatalogItem(**fields)


@pytest.fixture
def catalog():
    """Fresh catalog built from the seed menu."""
    return CatalogDatabase.from_rows(SEED_MENU_ROWS, SEED_CATEGORY_ROWS)


@pytest.fixture
def engine(catalog):
    """Cart engine reading the test catalog at a fixed time."""
    return CartEngine(catalog.get_item, clock=lambda: NOW)


@pytest.fixture
def orders(catalog):
    return OrderDatabase(catalog)


@pytest.fixture
def sessions(catalog):
    return SessionManager(catalog.get_item, clock=lambda: NOW)


@pytest.fixture
def client(catalog, orders, sessions):
    """
    Test client wired to isolated catalog, order and session stores.
    """
    app.dependency_overrides[dependencies.get_catalog] = lambda: catalog
    app.dependency_overrides[dependencies.get_orders] = lambda: orders
    app.dependency_overrides[dependencies.get_session_manager] = lambda: sessions
    app.dependency_overrides[dependencies.get_today] = lambda: TODAY

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def checkout_details():
    """Complete delivery details for a Wednesday noon slot."""
    return {
        "branch_name": "Marikina",
        "owner_representative": "Liza Santos",
        "recipient_name": "Jun Reyes",
        "recipient_contact": "0917 555 0101",
        "service_type": "delivery",
        "address": "12 Bayan-Bayanan Ave",
        "landmark": "Near the chapel",
        "scheduled_date": "2026-10-21",
        "scheduled_time": "12:30",
        "payment_method": "gcash",
        "notes": "Ring twice",
    }

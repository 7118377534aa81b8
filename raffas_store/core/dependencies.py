"""FastAPI dependency providers"""

from datetime import date
from typing import Optional

from ..database.backend import BackendClient
from ..database.catalog import CatalogDatabase, catalog_db
from ..database.orders import OrderDatabase, order_db
from ..database.payments import PaymentMethodDatabase, payment_db
from .config import settings
from .session import SessionManager

# Shared for the process lifetime; overridden in tests
session_manager = SessionManager(catalog_db.get_item)
backend_client: Optional[BackendClient] = None


def get_catalog() -> CatalogDatabase:
    return catalog_db


def get_orders() -> OrderDatabase:
    return order_db


def get_payments() -> PaymentMethodDatabase:
    return payment_db


def get_session_manager() -> SessionManager:
    return session_manager


def get_backend_client() -> Optional[BackendClient]:
    """Get or create the backend client, None when no backend is configured"""
    global backend_client
    if backend_client is None and settings.backend_configured:
        backend_client = BackendClient(
            base_url=settings.backend_url,
            anon_key=settings.backend_anon_key,
        )
    return backend_client


def get_today() -> date:
    """Local calendar date used for scheduling rules"""
    return date.today()

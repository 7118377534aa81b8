# Database modules

from .catalog import catalog_db, CatalogDatabase, normalize_category_row, normalize_menu_row
from .orders import order_db, OrderDatabase
from .payments import payment_db, PaymentMethodDatabase
from .backend import BackendClient

__all__ = [
    "catalog_db",
    "CatalogDatabase",
    "normalize_category_row",
    "normalize_menu_row",
    "order_db",
    "OrderDatabase",
    "payment_db",
    "PaymentMethodDatabase",
    "BackendClient",
]

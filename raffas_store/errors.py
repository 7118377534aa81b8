"""Store exceptions"""


class StoreError(Exception):
    """Base exception for storefront errors"""
    pass


class CatalogRowError(StoreError):
    """A raw menu row could not be normalized into a catalog item"""
    pass


class BackendError(StoreError):
    """Hosted backend request failed"""
    pass


class EmptyCartError(StoreError):
    """Order submitted from an empty cart"""
    pass


class InsufficientStockError(StoreError):
    """Order line exceeds the stock currently on hand"""

    def __init__(self, item_name: str, requested: int, available: int):
        self.item_name = item_name
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for {item_name}: requested {requested}, available {available}"
        )


class OrderNotFoundError(StoreError):
    """Order does not exist"""
    pass


class CatalogError(StoreError):
    """Menu or category change that conflicts with the current catalog"""
    pass

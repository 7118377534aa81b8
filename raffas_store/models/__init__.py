# Storefront Models

from .catalog import (
    AddOn,
    Category,
    CatalogItem,
    MenuItemView,
    MenuResponse,
    SelectedAddOn,
    StockStatus,
    Variation,
)
from .cart import (
    AddOnChoice,
    AddOnSummary,
    AddToCartRequest,
    CartLine,
    CartLineSummary,
    CartResponse,
    CartSnapshot,
    StockInfo,
    UpdateCartLineRequest,
)
from .checkout import (
    CheckoutDetails,
    CheckoutPreview,
    CheckoutRequest,
    CheckoutResponse,
    Order,
    OrderItem,
    OrderListResponse,
    OrderSortKey,
    OrderStatus,
    PaymentMethod,
    ScheduleResponse,
    ServiceType,
    UpdateOrderStatusRequest,
)
from .inventory import InventoryItem, InventoryUpdateRequest, StockAdjustRequest
from .admin import (
    AddOnInput,
    CategoryUpdate,
    CustomerListResponse,
    CustomerSortKey,
    CustomerSummary,
    MenuItemCreate,
    MenuItemUpdate,
    ReorderRequest,
    VariationInput,
)

__all__ = [
    "AddOn",
    "Category",
    "CatalogItem",
    "MenuItemView",
    "MenuResponse",
    "SelectedAddOn",
    "StockStatus",
    "Variation",
    "AddOnChoice",
    "AddOnSummary",
    "AddToCartRequest",
    "CartLine",
    "CartLineSummary",
    "CartResponse",
    "CartSnapshot",
    "StockInfo",
    "UpdateCartLineRequest",
    "CheckoutDetails",
    "CheckoutPreview",
    "CheckoutRequest",
    "CheckoutResponse",
    "Order",
    "OrderItem",
    "OrderListResponse",
    "OrderSortKey",
    "OrderStatus",
    "PaymentMethod",
    "ScheduleResponse",
    "ServiceType",
    "UpdateOrderStatusRequest",
    "InventoryItem",
    "InventoryUpdateRequest",
    "StockAdjustRequest",
    "AddOnInput",
    "CategoryUpdate",
    "CustomerListResponse",
    "CustomerSortKey",
    "CustomerSummary",
    "MenuItemCreate",
    "MenuItemUpdate",
    "ReorderRequest",
    "VariationInput",
]

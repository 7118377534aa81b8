"""Admin back-office API routes"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..core.dependencies import get_backend_client, get_catalog, get_orders
from ..database.backend import BackendClient
from ..database.catalog import CatalogDatabase
from ..database.orders import OrderDatabase
from ..errors import BackendError, CatalogError, CatalogRowError, OrderNotFoundError
from ..models.admin import (
    CategoryUpdate,
    CustomerListResponse,
    CustomerSortKey,
    MenuItemCreate,
    MenuItemUpdate,
    ReorderRequest,
)
from ..models.catalog import CatalogItem, Category
from ..models.checkout import (
    Order,
    OrderListResponse,
    OrderSortKey,
    OrderStatus,
    UpdateOrderStatusRequest,
)
from ..models.inventory import InventoryItem, InventoryUpdateRequest, StockAdjustRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"])


def inventory_row(item: CatalogItem) -> InventoryItem:
    return InventoryItem(
        id=item.id,
        name=item.name,
        category=item.category,
        track_inventory=item.track_inventory,
        stock_quantity=item.stock_quantity,
        low_stock_threshold=item.low_stock_threshold,
        available=item.available,
        stock_status=item.stock_status,
    )


# ==================== Orders ====================

@router.get("/orders", response_model=OrderListResponse)
async def list_orders(
    status: Optional[OrderStatus] = Query(None, description="Filter by status"),
    query: Optional[str] = Query(None, description="Search customer, contact, order ID or address"),
    date_from: Optional[date] = Query(None, description="First order date included"),
    date_to: Optional[date] = Query(None, description="Last order date included"),
    sort_by: OrderSortKey = Query(OrderSortKey.CREATED_AT),
    descending: Optional[bool] = Query(None, description="Defaults to newest first"),
    limit: int = Query(50, ge=1, le=500),
    orders: OrderDatabase = Depends(get_orders),
):
    """List orders, newest first unless sorted otherwise"""
    results = orders.list_orders(
        status=status,
        query=query,
        date_from=date_from,
        date_to=date_to,
        sort_by=sort_by,
        descending=descending,
        limit=limit,
    )
    return OrderListResponse(orders=results, total=len(results), limit=limit)


@router.get("/orders/{order_id}", response_model=Order)
async def get_order(order_id: str, orders: OrderDatabase = Depends(get_orders)):
    """Get order details"""
    order = orders.get_order(order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.patch("/orders/{order_id}/status", response_model=Order)
async def update_order_status(
    order_id: str,
    request: UpdateOrderStatusRequest,
    orders: OrderDatabase = Depends(get_orders),
):
    """Move an order to a new status"""
    try:
        return orders.update_status(order_id, request.status)
    except OrderNotFoundError:
        raise HTTPException(status_code=404, detail="Order not found")


@router.delete("/orders/{order_id}")
async def delete_order(order_id: str, orders: OrderDatabase = Depends(get_orders)):
    """Delete an order"""
    if orders.delete_order(order_id):
        return {"message": "Order deleted"}
    raise HTTPException(status_code=404, detail="Order not found")


@router.delete("/orders")
async def delete_all_orders(orders: OrderDatabase = Depends(get_orders)):
    """Delete every order"""
    count = orders.delete_all()
    return {"message": f"Deleted {count} orders", "deleted": count}


# ==================== Customers ====================

@router.get("/customers", response_model=CustomerListResponse)
async def list_customers(
    query: Optional[str] = Query(None, description="Search name, contact or address"),
    sort_by: CustomerSortKey = Query(CustomerSortKey.LAST_ORDER_DATE),
    descending: bool = Query(True),
    orders: OrderDatabase = Depends(get_orders),
):
    """Customers derived from order history"""
    customers = orders.customers(query=query, sort_by=sort_by, descending=descending)
    return CustomerListResponse(customers=customers, total=len(customers))


# ==================== Inventory ====================

@router.get("/inventory", response_model=list[InventoryItem])
async def list_inventory(
    query: Optional[str] = Query(None, description="Search name or category"),
    low_stock_only: bool = Query(False),
    catalog: CatalogDatabase = Depends(get_catalog),
):
    """Stock levels for every menu item"""
    items = catalog.low_stock_items() if low_stock_only else catalog.list_items(query=query)
    return [inventory_row(i) for i in items]


@router.post("/inventory/{item_id}/adjust", response_model=InventoryItem)
async def adjust_stock(
    item_id: str,
    request: StockAdjustRequest,
    catalog: CatalogDatabase = Depends(get_catalog),
):
    """Restock or remove stock; floors at zero"""
    item = catalog.adjust_stock(item_id, request.delta)
    if not item:
        raise HTTPException(status_code=404, detail="Menu item not found")
    return inventory_row(item)


@router.put("/inventory/{item_id}", response_model=InventoryItem)
async def update_inventory(
    item_id: str,
    request: InventoryUpdateRequest,
    catalog: CatalogDatabase = Depends(get_catalog),
):
    """Change tracking, stock on hand or low-stock threshold"""
    item = catalog.get_item(item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Menu item not found")

    if request.track_inventory is not None:
        catalog.set_tracking(item_id, request.track_inventory)
    if request.stock_quantity is not None:
        catalog.set_stock(item_id, request.stock_quantity)
    if request.low_stock_threshold is not None:
        catalog.set_threshold(item_id, request.low_stock_threshold)

    return inventory_row(item)


# ==================== Menu items ====================

@router.post("/menu", response_model=CatalogItem, status_code=201)
async def create_menu_item(
    request: MenuItemCreate,
    catalog: CatalogDatabase = Depends(get_catalog),
):
    """Add a menu item at the end of its category"""
    try:
        return catalog.add_menu_item(request.model_dump())
    except CatalogError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/menu/{item_id}", response_model=CatalogItem)
async def update_menu_item(
    item_id: str,
    request: MenuItemUpdate,
    catalog: CatalogDatabase = Depends(get_catalog),
):
    """Edit a menu item; omitted fields are left as they are"""
    try:
        item = catalog.update_menu_item(item_id, request.model_dump(exclude_none=True))
    except CatalogError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not item:
        raise HTTPException(status_code=404, detail="Menu item not found")
    return item


@router.delete("/menu/{item_id}")
async def delete_menu_item(item_id: str, catalog: CatalogDatabase = Depends(get_catalog)):
    """Delete a menu item"""
    if catalog.delete_menu_item(item_id):
        return {"message": "Menu item deleted"}
    raise HTTPException(status_code=404, detail="Menu item not found")


@router.post("/menu/reorder", response_model=list[CatalogItem])
async def reorder_menu_items(
    request: ReorderRequest,
    catalog: CatalogDatabase = Depends(get_catalog),
):
    """Set display order from the given item IDs"""
    try:
        return catalog.reorder_menu_items(request.ids)
    except CatalogError as e:
        raise HTTPException(status_code=400, detail=str(e))


# ==================== Categories ====================

@router.get("/categories", response_model=list[Category])
async def list_categories(catalog: CatalogDatabase = Depends(get_catalog)):
    """All categories, inactive ones included"""
    return catalog.categories(include_inactive=True)


@router.post("/categories", response_model=Category, status_code=201)
async def create_category(
    request: Category,
    catalog: CatalogDatabase = Depends(get_catalog),
):
    """Add a category"""
    try:
        return catalog.add_category(request)
    except CatalogError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.put("/categories/{category_id}", response_model=Category)
async def update_category(
    category_id: str,
    request: CategoryUpdate,
    catalog: CatalogDatabase = Depends(get_catalog),
):
    """Rename, re-icon, reorder or toggle a category"""
    category = catalog.update_category(category_id, request.model_dump(exclude_none=True))
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.delete("/categories/{category_id}")
async def delete_category(
    category_id: str,
    move_to: Optional[str] = Query(None, description="Move items here instead of deleting them"),
    catalog: CatalogDatabase = Depends(get_catalog),
):
    """Delete a category and its items, or move the items first"""
    try:
        count = catalog.delete_category(category_id, move_to=move_to)
    except CatalogError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if count is None:
        raise HTTPException(status_code=404, detail="Category not found")

    if move_to:
        return {"message": f"Category deleted, {count} items moved to {move_to}", "items": count}
    return {"message": f"Category deleted with {count} items", "items": count}


@router.post("/categories/reorder", response_model=list[Category])
async def reorder_categories(
    request: ReorderRequest,
    catalog: CatalogDatabase = Depends(get_catalog),
):
    """Set category display order from the given IDs"""
    try:
        return catalog.reorder_categories(request.ids)
    except CatalogError as e:
        raise HTTPException(status_code=400, detail=str(e))


# ==================== Catalog ====================

@router.post("/catalog/refresh")
async def refresh_catalog(
    catalog: CatalogDatabase = Depends(get_catalog),
    client: Optional[BackendClient] = Depends(get_backend_client),
):
    """Reload the menu and categories from the hosted backend"""
    if client is None:
        raise HTTPException(status_code=400, detail="Hosted backend is not configured")

    try:
        count = await catalog.refresh(client)
    except (BackendError, CatalogRowError) as e:
        logger.error(f"Catalog refresh failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))

    return {
        "message": "Catalog refreshed",
        "items": count,
        "categories": len(catalog.categories(include_inactive=True)),
    }

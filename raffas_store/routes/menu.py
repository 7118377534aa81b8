"""Menu API routes"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..core.dependencies import get_catalog
from ..database.catalog import CatalogDatabase
from ..models.catalog import CatalogItem, Category, MenuItemView, MenuResponse
from ..services.cart_engine import utc_now
from ..services.pricing import is_discount_active, resolve_effective_price

router = APIRouter(prefix="/api/menu", tags=["Menu"])


def menu_view(item: CatalogItem, now: datetime) -> MenuItemView:
    """Customer-facing view of an item priced at ``now``"""
    return MenuItemView(
        id=item.id,
        name=item.name,
        description=item.description,
        category=item.category,
        popular=item.popular,
        available=item.available,
        image_url=item.image_url,
        base_price=item.base_price,
        effective_price=resolve_effective_price(item, now),
        is_on_discount=is_discount_active(item, now),
        discount_price=item.discount_price,
        track_inventory=item.track_inventory,
        stock_quantity=item.stock_quantity,
        stock_status=item.stock_status,
        variations=item.variations,
        add_ons=item.add_ons,
    )


@router.get("", response_model=MenuResponse)
async def list_menu(
    category: Optional[str] = Query(None, description="Filter by category"),
    query: Optional[str] = Query(None, description="Search name or category"),
    available_only: bool = Query(False, description="Hide unavailable items"),
    catalog: CatalogDatabase = Depends(get_catalog),
):
    """List menu items in display order"""
    now = utc_now()
    items = catalog.list_items(category=category, query=query, available_only=available_only)
    return MenuResponse(items=[menu_view(i, now) for i in items], total=len(items))


@router.get("/categories", response_model=list[Category])
async def list_categories(catalog: CatalogDatabase = Depends(get_catalog)):
    """Active menu categories in display order"""
    return catalog.categories()


@router.get("/{item_id}", response_model=MenuItemView)
async def get_menu_item(item_id: str, catalog: CatalogDatabase = Depends(get_catalog)):
    """Get a menu item by ID"""
    item = catalog.get_item(item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Menu item not found")
    return menu_view(item, utc_now())

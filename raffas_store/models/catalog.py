"""Catalog models for the storefront"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class StockStatus(str, Enum):
    UNTRACKED = "untracked"
    IN_STOCK = "in_stock"
    LOW_STOCK = "low_stock"
    OUT_OF_STOCK = "out_of_stock"


class Variation(BaseModel):
    """Named price tier of a menu item; its price replaces the base price"""
    id: str
    name: str
    price: float = Field(ge=0)


class AddOn(BaseModel):
    """Optional extra attachable to a menu item; its price adds to the line"""
    id: str
    name: str
    price: float = Field(ge=0)
    category: str = ""


class SelectedAddOn(AddOn):
    """Add-on chosen for a cart line, with its own repeat count"""
    quantity: int = Field(default=1, ge=1)


class Category(BaseModel):
    """Menu section; ``id`` is the kebab-case key items refer to"""
    id: str = Field(pattern=r"^[a-z0-9]+(-[a-z0-9]+)*$")
    name: str = Field(min_length=1)
    icon: str = ""
    sort_order: int = 0
    active: bool = True


class CatalogItem(BaseModel):
    """Menu item as supplied by the catalog provider"""
    id: str
    name: str
    description: str = ""
    category: str = ""
    base_price: float = Field(ge=0)
    popular: bool = False
    available: bool = True
    image_url: Optional[str] = None
    sort_order: Optional[int] = None

    # Promotional pricing
    discount_price: Optional[float] = Field(default=None, ge=0)
    discount_start: Optional[datetime] = None
    discount_end: Optional[datetime] = None
    discount_active: bool = False

    # Inventory
    track_inventory: bool = False
    stock_quantity: Optional[int] = Field(default=None, ge=0)
    low_stock_threshold: int = Field(default=0, ge=0)

    variations: list[Variation] = []
    add_ons: list[AddOn] = []

    class Config:
        from_attributes = True

    @field_validator("discount_start", "discount_end")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def has_stock_limit(self) -> bool:
        """True when the item carries a stock ceiling"""
        return self.track_inventory and self.stock_quantity is not None

    @property
    def stock_status(self) -> StockStatus:
        if not self.has_stock_limit:
            return StockStatus.UNTRACKED
        if self.stock_quantity == 0:
            return StockStatus.OUT_OF_STOCK
        if self.stock_quantity <= self.low_stock_threshold:
            return StockStatus.LOW_STOCK
        return StockStatus.IN_STOCK

    @property
    def auto_disabled(self) -> bool:
        """Tracked item switched off because it ran low"""
        return self.track_inventory and not self.available

    def get_variation(self, variation_id: str) -> Optional[Variation]:
        return next((v for v in self.variations if v.id == variation_id), None)

    def get_add_on(self, add_on_id: str) -> Optional[AddOn]:
        return next((a for a in self.add_ons if a.id == add_on_id), None)


class MenuItemView(BaseModel):
    """Menu item as shown to customers, priced at request time"""
    id: str
    name: str
    description: str
    category: str
    popular: bool
    available: bool
    image_url: Optional[str] = None
    base_price: float
    effective_price: float
    is_on_discount: bool
    discount_price: Optional[float] = None
    track_inventory: bool
    stock_quantity: Optional[int] = None
    stock_status: StockStatus
    variations: list[Variation] = []
    add_ons: list[AddOn] = []


class MenuResponse(BaseModel):
    """Response from menu listing"""
    items: list[MenuItemView]
    total: int

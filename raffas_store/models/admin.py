"""Menu, category and customer models for the admin back-office"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .checkout import ServiceType


class VariationInput(BaseModel):
    name: str = Field(min_length=1)
    price: float = Field(ge=0)


class AddOnInput(BaseModel):
    name: str = Field(min_length=1)
    price: float = Field(ge=0)
    category: str = ""


class MenuItemCreate(BaseModel):
    """New menu item; it is placed last in its category"""
    name: str = Field(min_length=1)
    description: str = ""
    category: str
    base_price: float = Field(ge=0)
    popular: bool = False
    available: bool = True
    image_url: Optional[str] = None

    discount_price: Optional[float] = Field(default=None, ge=0)
    discount_start: Optional[datetime] = None
    discount_end: Optional[datetime] = None
    discount_active: bool = False

    track_inventory: bool = False
    stock_quantity: Optional[int] = Field(default=None, ge=0)
    low_stock_threshold: int = Field(default=0, ge=0)

    variations: list[VariationInput] = []
    add_ons: list[AddOnInput] = []


class MenuItemUpdate(BaseModel):
    """Partial menu item edit.

    Variations and add-ons, when given, replace the existing ones.
    """
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    base_price: Optional[float] = Field(default=None, ge=0)
    popular: Optional[bool] = None
    available: Optional[bool] = None
    image_url: Optional[str] = None
    sort_order: Optional[int] = None

    discount_price: Optional[float] = Field(default=None, ge=0)
    discount_start: Optional[datetime] = None
    discount_end: Optional[datetime] = None
    discount_active: Optional[bool] = None

    track_inventory: Optional[bool] = None
    stock_quantity: Optional[int] = Field(default=None, ge=0)
    low_stock_threshold: Optional[int] = Field(default=None, ge=0)

    variations: Optional[list[VariationInput]] = None
    add_ons: Optional[list[AddOnInput]] = None


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    icon: Optional[str] = None
    sort_order: Optional[int] = None
    active: Optional[bool] = None


class ReorderRequest(BaseModel):
    """IDs in their new display order"""
    ids: list[str] = Field(min_length=1)


class CustomerSortKey(str, Enum):
    NAME = "name"
    ORDER_COUNT = "order_count"
    TOTAL_SPENT = "total_spent"
    LAST_ORDER_DATE = "last_order_date"


class CustomerSummary(BaseModel):
    """Customer derived from their orders, keyed by name and contact number"""
    name: str
    contact_number: str
    addresses: list[str] = []
    order_count: int
    total_spent: float
    first_order_date: datetime
    last_order_date: datetime
    order_ids: list[str] = []
    service_types: list[ServiceType] = []


class CustomerListResponse(BaseModel):
    customers: list[CustomerSummary]
    total: int

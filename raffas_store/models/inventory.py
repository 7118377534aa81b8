"""Inventory models for the admin back-office"""

from typing import Optional

from pydantic import BaseModel, Field

from .catalog import StockStatus


class InventoryItem(BaseModel):
    """Stock row for one menu item"""
    id: str
    name: str
    category: str
    track_inventory: bool
    stock_quantity: Optional[int] = None
    low_stock_threshold: int
    available: bool
    stock_status: StockStatus


class StockAdjustRequest(BaseModel):
    """Relative stock change; positive restocks, negative removes"""
    delta: int


class InventoryUpdateRequest(BaseModel):
    """Absolute inventory settings for one item"""
    track_inventory: Optional[bool] = None
    stock_quantity: Optional[int] = None
    low_stock_threshold: Optional[int] = Field(default=None)

"""Cart models for the storefront"""

from typing import Optional

from pydantic import BaseModel, Field

from .catalog import SelectedAddOn, Variation


class CartLine(BaseModel):
    """One configured menu item in the cart.

    ``unit_total_price`` is resolved when the line is created and stays fixed
    for the life of the line.
    """
    line_id: str
    item_id: str
    name: str
    quantity: int = Field(gt=0)
    variation: Optional[Variation] = None
    add_ons: list[SelectedAddOn] = []
    unit_total_price: float

    @property
    def line_total(self) -> float:
        return self.unit_total_price * self.quantity


class AddOnSummary(BaseModel):
    name: str
    quantity: int


class CartLineSummary(BaseModel):
    """Line of a cart snapshot handed to checkout"""
    line_id: str
    item_id: str
    name: str
    variation_name: Optional[str] = None
    add_ons: list[AddOnSummary] = []
    unit_total_price: float
    quantity: int
    line_total: float


class CartSnapshot(BaseModel):
    """Read-only view of the cart at a point in time"""
    lines: list[CartLineSummary] = []
    total_items: int = 0
    total_price: float = 0.0
    currency: str = "PHP"


class StockInfo(BaseModel):
    """Stock indicator for a cart line"""
    has_stock_limit: bool
    stock_quantity: Optional[int] = None
    at_max_stock: bool = False


class AddOnChoice(BaseModel):
    add_on_id: str
    quantity: int = Field(default=1, ge=1)


class AddToCartRequest(BaseModel):
    """Request to add a configured item to the cart"""
    item_id: str
    variation_id: Optional[str] = None
    add_ons: list[AddOnChoice] = []
    quantity: int = Field(default=1, gt=0)


class UpdateCartLineRequest(BaseModel):
    """Request to set a line quantity; zero or less removes the line"""
    quantity: int


class CartResponse(BaseModel):
    """Cart API response"""
    session_id: str
    cart: CartSnapshot
    message: Optional[str] = None

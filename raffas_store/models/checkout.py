"""Checkout and order models for the storefront"""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .cart import AddOnSummary, CartSnapshot


class ServiceType(str, Enum):
    DELIVERY = "delivery"
    PICKUP = "pickup"


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class OrderSortKey(str, Enum):
    CREATED_AT = "created_at"
    TOTAL = "total"
    CUSTOMER_NAME = "customer_name"
    STATUS = "status"


class PaymentMethod(BaseModel):
    """Way of paying offered at checkout"""
    id: str
    name: str
    account_number: str = ""
    account_name: str = ""
    qr_code_url: Optional[str] = None
    active: bool = True
    sort_order: int = 0


class CheckoutDetails(BaseModel):
    """Customer and scheduling details collected at checkout"""
    branch_name: str = ""
    owner_representative: str = ""
    recipient_name: str = ""
    recipient_contact: str = ""
    service_type: ServiceType = ServiceType.DELIVERY
    address: Optional[str] = None
    landmark: Optional[str] = None
    scheduled_date: Optional[date] = None
    # "HH:MM", one of the half-hour slots
    scheduled_time: Optional[str] = None
    payment_method: str = "gcash"
    reference_number: Optional[str] = None
    notes: Optional[str] = None
    receipt_url: Optional[str] = None


class CheckoutRequest(BaseModel):
    """Request to place the order held in a session cart"""
    session_id: str
    details: CheckoutDetails


class OrderItem(BaseModel):
    """Item in an order"""
    item_id: str
    name: str
    variation_name: Optional[str] = None
    add_ons: list[AddOnSummary] = []
    unit_price: float
    quantity: int
    subtotal: float


class Order(BaseModel):
    """Submitted order"""
    order_id: str
    customer_name: str
    contact_number: str
    service_type: ServiceType
    address: Optional[str] = None
    pickup_time: Optional[str] = None
    payment_method: str
    reference_number: Optional[str] = None
    notes: Optional[str] = None
    receipt_url: Optional[str] = None
    items: list[OrderItem]
    total: float
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime
    updated_at: datetime


class CheckoutResponse(BaseModel):
    """Response from checkout"""
    success: bool
    order: Optional[Order] = None
    message_text: Optional[str] = None
    handoff_url: Optional[str] = None
    errors: list[str] = []
    error_message: Optional[str] = None


class CheckoutPreview(BaseModel):
    """Cart snapshot plus the validation outcome for the given details"""
    cart: CartSnapshot
    errors: list[str] = []


class ScheduleResponse(BaseModel):
    """Bookable dates and times for a service type"""
    service_type: ServiceType
    min_date: date
    allowed_days: list[str]
    slots: list[str]


class UpdateOrderStatusRequest(BaseModel):
    status: OrderStatus


class OrderListResponse(BaseModel):
    orders: list[Order]
    total: int
    limit: int = Field(default=50)

"""Checkout API routes"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from ..core.config import settings
from ..core.dependencies import get_orders, get_payments, get_session_manager, get_today
from ..core.session import SessionManager
from ..database.orders import OrderDatabase
from ..database.payments import PaymentMethodDatabase
from ..errors import EmptyCartError, InsufficientStockError
from ..models.checkout import (
    CheckoutDetails,
    CheckoutPreview,
    CheckoutRequest,
    CheckoutResponse,
    PaymentMethod,
    ScheduleResponse,
    ServiceType,
)
from ..services.order_message import compose_order_message, messenger_link
from ..services.schedule import (
    allowed_day_names,
    min_schedule_date,
    time_slots,
    validate_checkout_details,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/checkout", tags=["Checkout"])


@router.get("/schedule", response_model=ScheduleResponse)
async def get_schedule(
    service_type: ServiceType = Query(ServiceType.DELIVERY),
    today: date = Depends(get_today),
):
    """Earliest date, service days and time slots for a service type"""
    return ScheduleResponse(
        service_type=service_type,
        min_date=min_schedule_date(today),
        allowed_days=allowed_day_names(),
        slots=time_slots(service_type),
    )


@router.get("/payment-methods", response_model=list[PaymentMethod])
async def list_payment_methods(payments: PaymentMethodDatabase = Depends(get_payments)):
    """Active payment methods in display order"""
    return payments.list_methods()


def detail_errors(
    details: CheckoutDetails,
    today: date,
    payments: PaymentMethodDatabase,
) -> list[str]:
    errors = validate_checkout_details(details, today)
    method = payments.get_method(details.payment_method)
    if not method or not method.active:
        errors.append("Please choose a payment method")
    return errors


@router.post("/preview", response_model=CheckoutPreview)
async def preview_checkout(
    request: CheckoutRequest,
    sessions: SessionManager = Depends(get_session_manager),
    payments: PaymentMethodDatabase = Depends(get_payments),
    today: date = Depends(get_today),
):
    """Cart snapshot with any problems in the entered details"""
    session = sessions.get_session(request.session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")

    return CheckoutPreview(
        cart=session.cart.snapshot(),
        errors=detail_errors(request.details, today, payments),
    )


@router.post("", response_model=CheckoutResponse)
async def checkout(
    request: CheckoutRequest,
    sessions: SessionManager = Depends(get_session_manager),
    orders: OrderDatabase = Depends(get_orders),
    payments: PaymentMethodDatabase = Depends(get_payments),
    today: date = Depends(get_today),
):
    """
    Place the order held in a session cart.

    The order is recorded first; the cart is cleared only once that succeeds.
    The response carries the order summary and the Messenger link that hands
    it to the shop.
    """
    session = sessions.get_session(request.session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")

    errors = detail_errors(request.details, today, payments)
    if errors:
        return CheckoutResponse(
            success=False,
            errors=errors,
            error_message="Please complete your order details",
        )

    snapshot = session.cart.snapshot()
    try:
        order = orders.create_order(snapshot, request.details)
    except EmptyCartError:
        raise HTTPException(status_code=400, detail="Cart is empty")
    except InsufficientStockError as e:
        raise HTTPException(status_code=409, detail=str(e))

    message_text = compose_order_message(
        request.details,
        snapshot,
        payments.display_name(request.details.payment_method),
        symbol=settings.currency_symbol,
    )

    session.cart.clear()
    session.last_order_id = order.order_id
    session.touch()

    logger.info(f"Checkout complete for session {session.session_id}: {order.order_id}")

    return CheckoutResponse(
        success=True,
        order=order,
        message_text=message_text,
        handoff_url=messenger_link(settings.messenger_page_id, message_text),
    )

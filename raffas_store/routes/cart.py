"""Cart API routes"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from ..core.config import settings
from ..core.dependencies import get_catalog, get_session_manager
from ..core.session import CartSession, SessionManager
from ..database.catalog import CatalogDatabase
from ..models.cart import AddToCartRequest, CartResponse, StockInfo, UpdateCartLineRequest
from ..models.catalog import SelectedAddOn

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/cart", tags=["Cart"])


def get_cart_session(
    session_id: str,
    sessions: SessionManager = Depends(get_session_manager),
) -> CartSession:
    """Resolve the session named in the path"""
    session = sessions.get_session(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


def cart_response(session: CartSession, message: Optional[str] = None) -> CartResponse:
    return CartResponse(
        session_id=session.session_id,
        cart=session.cart.snapshot(),
        message=message,
    )


@router.post("", response_model=CartResponse)
async def create_cart(sessions: SessionManager = Depends(get_session_manager)):
    """Start a browsing session with an empty cart"""
    expired = sessions.cleanup_old_sessions(settings.session_max_age_hours)
    if expired:
        logger.info(f"Discarded {expired} idle cart sessions")
    session = sessions.create_session()
    return cart_response(session, "Cart created")


@router.get("/{session_id}", response_model=CartResponse)
async def get_cart(session: CartSession = Depends(get_cart_session)):
    """Get the session's cart"""
    return cart_response(session)


@router.post("/{session_id}/items", response_model=CartResponse)
async def add_to_cart(
    request: AddToCartRequest,
    session: CartSession = Depends(get_cart_session),
    catalog: CatalogDatabase = Depends(get_catalog),
):
    """Add a configured item; quantity beyond stock is dropped"""
    item = catalog.get_item(request.item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Menu item not found")
    if not item.available:
        raise HTTPException(status_code=400, detail=f"{item.name} is unavailable")

    variation = None
    if request.variation_id:
        variation = item.get_variation(request.variation_id)
        if not variation:
            raise HTTPException(status_code=400, detail=f"Unknown variation {request.variation_id}")

    # Repeated choices of one add-on count as a single add-on
    add_on_counts: dict[str, int] = {}
    for choice in request.add_ons:
        if not item.get_add_on(choice.add_on_id):
            raise HTTPException(status_code=400, detail=f"Unknown add-on {choice.add_on_id}")
        add_on_counts[choice.add_on_id] = add_on_counts.get(choice.add_on_id, 0) + choice.quantity
    add_ons = [
        SelectedAddOn(**item.get_add_on(add_on_id).model_dump(), quantity=count)
        for add_on_id, count in add_on_counts.items()
    ]

    line = session.cart.add_item(item, variation, add_ons, request.quantity)
    session.touch()

    if line is None:
        message = f"{item.name} is out of stock"
    else:
        message = f"{item.name}: {line.quantity} in cart"
    return cart_response(session, message)


@router.put("/{session_id}/items/{line_id}", response_model=CartResponse)
async def update_cart_line(
    line_id: str,
    request: UpdateCartLineRequest,
    session: CartSession = Depends(get_cart_session),
):
    """Set a line's quantity; zero removes it, unknown lines are ignored"""
    session.cart.update_quantity(line_id, request.quantity)
    session.touch()
    return cart_response(session, "Cart updated")


@router.post("/{session_id}/items/{line_id}/increment", response_model=CartResponse)
async def increment_cart_line(
    line_id: str,
    session: CartSession = Depends(get_cart_session),
):
    """Add one unit unless the line is at max stock"""
    session.cart.increment(line_id)
    session.touch()
    return cart_response(session)


@router.get("/{session_id}/items/{line_id}/stock", response_model=StockInfo)
async def get_line_stock(
    line_id: str,
    session: CartSession = Depends(get_cart_session),
):
    """Stock indicator for a cart line"""
    info = session.cart.stock_info(line_id)
    if info is None:
        raise HTTPException(status_code=404, detail="Item not in cart")
    return info


@router.delete("/{session_id}/items/{line_id}", response_model=CartResponse)
async def remove_from_cart(
    line_id: str,
    session: CartSession = Depends(get_cart_session),
):
    """Remove a line from the cart"""
    session.cart.remove_item(line_id)
    session.touch()
    return cart_response(session, "Item removed")


@router.delete("/{session_id}", response_model=CartResponse)
async def clear_cart(session: CartSession = Depends(get_cart_session)):
    """Clear all items from cart"""
    session.cart.clear()
    session.touch()
    return cart_response(session, "Cart cleared")

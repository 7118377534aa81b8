"""
Pricing resolution

Pure functions shared by the cart engine and the menu views. Every function
takes the evaluation time explicitly so results are reproducible.
"""

from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from ..models.catalog import CatalogItem, SelectedAddOn, Variation


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def is_discount_active(item: CatalogItem, now: datetime) -> bool:
    """Check whether the item's discount applies at ``now``.

    Both window bounds are inclusive; a missing bound is open-ended.
    """
    if not item.discount_active or item.discount_price is None:
        return False

    now = _as_utc(now)
    if item.discount_start is not None and now < item.discount_start:
        return False
    if item.discount_end is not None and now > item.discount_end:
        return False
    return True


def resolve_effective_price(item: CatalogItem, now: datetime) -> float:
    """Discount price while the discount window is open, else base price"""
    if is_discount_active(item, now):
        return item.discount_price
    return item.base_price


def resolve_unit_total_price(
    item: CatalogItem,
    variation: Optional[Variation] = None,
    add_ons: Optional[Iterable[SelectedAddOn]] = None,
    now: Optional[datetime] = None,
) -> float:
    """
    Price of a single unit of a configured item.

    A selected variation replaces the effective price outright, so discounts
    on the base item never apply to sized items. Add-ons add
    ``price * quantity`` each.

    Args:
        item: Catalog item being priced
        variation: Selected variation, if any
        add_ons: Selected add-ons with their repeat counts
        now: Evaluation time for the discount window (required unless a
            variation is selected)

    Returns:
        Unrounded unit price
    """
    if variation is not None:
        base = variation.price
    else:
        if now is None:
            raise ValueError("now is required to resolve a discounted price")
        base = resolve_effective_price(item, now)

    extras = sum(a.price * max(1, a.quantity) for a in (add_ons or []))
    return base + extras


def round_currency(amount: float) -> float:
    """Round half-up to two decimal places for presentation"""
    return float(Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def format_peso(amount: float, symbol: str = "₱") -> str:
    """Format an amount for display, e.g. ``₱1,234.50``"""
    return f"{symbol}{round_currency(amount):,.2f}"

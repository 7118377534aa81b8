# Storefront services

from .cart_engine import CartEngine, make_line_id, utc_now
from .pricing import (
    format_peso,
    is_discount_active,
    resolve_effective_price,
    resolve_unit_total_price,
    round_currency,
)

__all__ = [
    "CartEngine",
    "make_line_id",
    "utc_now",
    "format_peso",
    "is_discount_active",
    "resolve_effective_price",
    "resolve_unit_total_price",
    "round_currency",
]

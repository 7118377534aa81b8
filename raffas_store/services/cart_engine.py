"""
Cart engine

Holds the lines of one shopping session and enforces stock ceilings against
the catalog snapshot current at each call. Stock overflow is clamped, never
raised; operations on unknown lines are silent no-ops.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional

from ..models.cart import (
    AddOnSummary,
    CartLine,
    CartLineSummary,
    CartSnapshot,
    StockInfo,
)
from ..models.catalog import CatalogItem, SelectedAddOn, Variation
from .pricing import resolve_unit_total_price, round_currency

logger = logging.getLogger(__name__)

CatalogLookup = Callable[[str], Optional[CatalogItem]]
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def make_line_id(
    item_id: str,
    variation: Optional[Variation] = None,
    add_ons: Optional[Iterable[SelectedAddOn]] = None,
) -> str:
    """Identity of a configured item: ``item:variation:addon1,addon2``"""
    variation_part = variation.id if variation else "default"
    add_on_part = ",".join(sorted(a.id for a in (add_ons or [])))
    return f"{item_id}:{variation_part}:{add_on_part}"


class CartEngine:
    """Stock-aware cart for a single session"""

    def __init__(self, catalog_lookup: CatalogLookup, clock: Clock = utc_now):
        """
        Args:
            catalog_lookup: Returns the current catalog item for an id
            clock: Source of "now" when an operation is not given one
        """
        self._lookup = catalog_lookup
        self._clock = clock
        self._lines: dict[str, CartLine] = {}

    @property
    def lines(self) -> list[CartLine]:
        """Lines in the order they were first added"""
        return list(self._lines.values())

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def get_line(self, line_id: str) -> Optional[CartLine]:
        return self._lines.get(line_id)

    def _ceiling_for(self, item: Optional[CatalogItem]) -> Optional[int]:
        if item is None or not item.has_stock_limit:
            return None
        return item.stock_quantity

    def add_item(
        self,
        item: CatalogItem,
        variation: Optional[Variation] = None,
        add_ons: Optional[Iterable[SelectedAddOn]] = None,
        quantity: int = 1,
        now: Optional[datetime] = None,
    ) -> Optional[CartLine]:
        """
        Add a configured item, merging into an existing identical line.

        The resulting quantity is capped at the item's stock when it is
        tracked; the excess is dropped. An existing line already above the
        ceiling is left as it is.

        Returns:
            The affected line, or None when nothing could be added
        """
        selected = [a.model_copy(update={"quantity": max(1, a.quantity)}) for a in (add_ons or [])]
        line_id = make_line_id(item.id, variation, selected)
        existing = self._lines.get(line_id)

        if quantity < 1:
            return existing

        current = existing.quantity if existing else 0
        target = current + quantity
        ceiling = self._ceiling_for(item)
        if ceiling is not None and target > ceiling:
            logger.debug(
                f"Clamping {line_id} from {target} to stock ceiling {ceiling}"
            )
            target = max(current, ceiling)

        if existing:
            existing.quantity = target
            return existing

        if target < 1:
            logger.debug(f"{item.name} is out of stock, nothing added")
            return None

        line = CartLine(
            line_id=line_id,
            item_id=item.id,
            name=item.name,
            quantity=target,
            variation=variation,
            add_ons=selected,
            unit_total_price=resolve_unit_total_price(
                item, variation, selected, now or self._clock()
            ),
        )
        self._lines[line_id] = line
        return line

    def update_quantity(self, line_id: str, quantity: int) -> Optional[CartLine]:
        """
        Set a line's quantity.

        Zero or less removes the line. A tracked item caps the quantity at its
        stock; with no stock left the line can shrink but not grow.
        """
        line = self._lines.get(line_id)
        if line is None:
            return None

        if quantity <= 0:
            self.remove_item(line_id)
            return None

        ceiling = self._ceiling_for(self._lookup(line.item_id))
        if ceiling is not None and quantity > ceiling:
            if ceiling >= 1:
                quantity = ceiling
            else:
                quantity = min(quantity, line.quantity)

        line.quantity = quantity
        return line

    def increment(self, line_id: str) -> Optional[CartLine]:
        """Add one unit unless the line is already at its stock ceiling"""
        info = self.stock_info(line_id)
        if info is None:
            return None
        line = self._lines[line_id]
        if info.at_max_stock:
            return line
        return self.update_quantity(line_id, line.quantity + 1)

    def remove_item(self, line_id: str) -> None:
        self._lines.pop(line_id, None)

    def clear(self) -> None:
        self._lines.clear()

    def stock_info(self, line_id: str) -> Optional[StockInfo]:
        """Stock indicator for a line, or None for an unknown line"""
        line = self._lines.get(line_id)
        if line is None:
            return None

        item = self._lookup(line.item_id)
        ceiling = self._ceiling_for(item)
        if ceiling is None:
            return StockInfo(has_stock_limit=False)
        return StockInfo(
            has_stock_limit=True,
            stock_quantity=ceiling,
            at_max_stock=line.quantity >= ceiling,
        )

    def get_total_items(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def get_total_price(self) -> float:
        # Unrounded; round only for presentation
        return sum(line.unit_total_price * line.quantity for line in self._lines.values())

    def snapshot(self) -> CartSnapshot:
        """Ordered, presentation-rounded view of the cart for checkout"""
        lines = [
            CartLineSummary(
                line_id=line.line_id,
                item_id=line.item_id,
                name=line.name,
                variation_name=line.variation.name if line.variation else None,
                add_ons=[AddOnSummary(name=a.name, quantity=a.quantity) for a in line.add_ons],
                unit_total_price=round_currency(line.unit_total_price),
                quantity=line.quantity,
                line_total=round_currency(line.line_total),
            )
            for line in self._lines.values()
        ]
        return CartSnapshot(
            lines=lines,
            total_items=self.get_total_items(),
            total_price=round_currency(self.get_total_price()),
        )

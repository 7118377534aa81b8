"""Order storage for the storefront"""

import logging
import uuid
from collections import Counter
from datetime import date, datetime, timezone
from typing import Optional

from ..errors import EmptyCartError, InsufficientStockError, OrderNotFoundError
from ..models.admin import CustomerSortKey, CustomerSummary
from ..models.cart import CartSnapshot
from ..models.checkout import (
    CheckoutDetails,
    Order,
    OrderItem,
    OrderSortKey,
    OrderStatus,
    ServiceType,
)
from ..services.pricing import round_currency
from .catalog import CatalogDatabase, catalog_db

logger = logging.getLogger(__name__)


def customer_summary(details: CheckoutDetails) -> str:
    return (
        f"Branch: {details.branch_name} | Owner: {details.owner_representative} "
        f"| Recipient: {details.recipient_name}"
    )


def merged_notes(details: CheckoutDetails) -> Optional[str]:
    """Customer notes with the landmark appended"""
    if not details.landmark:
        return details.notes
    prefix = f"{details.notes} | " if details.notes else ""
    return f"{prefix}Landmark: {details.landmark}"


class OrderDatabase:
    """In-memory order storage; final authority on stock"""

    def __init__(self, catalog: CatalogDatabase):
        self.catalog = catalog
        self.orders: dict[str, Order] = {}

    def _check_stock(self, cart: CartSnapshot) -> None:
        requested = Counter()
        names = {}
        for line in cart.lines:
            requested[line.item_id] += line.quantity
            names[line.item_id] = line.name

        for item_id, quantity in requested.items():
            item = self.catalog.get_item(item_id)
            if item is None:
                raise InsufficientStockError(names[item_id], quantity, 0)
            if item.has_stock_limit and quantity > item.stock_quantity:
                raise InsufficientStockError(item.name, quantity, item.stock_quantity)

    def create_order(self, cart: CartSnapshot, details: CheckoutDetails) -> Order:
        """
        Create an order from a cart snapshot.

        Stock for tracked items is re-checked against the current catalog and
        then decremented.

        Raises:
            EmptyCartError: if the cart has no lines
            InsufficientStockError: if any item no longer has enough stock
        """
        if not cart.lines:
            raise EmptyCartError("Cart is empty")

        try:
            self._check_stock(cart)
        except InsufficientStockError as e:
            logger.warning(f"Order rejected: {e}")
            raise

        for line in cart.lines:
            self.catalog.adjust_stock(line.item_id, -line.quantity)

        pickup_time = None
        if details.scheduled_date and details.scheduled_time:
            pickup_time = f"{details.scheduled_date.isoformat()} {details.scheduled_time}"

        now = datetime.now(timezone.utc)
        order = Order(
            order_id=f"ORD-{uuid.uuid4().hex[:8].upper()}",
            customer_name=customer_summary(details),
            contact_number=details.recipient_contact,
            service_type=details.service_type,
            address=details.address if details.service_type == ServiceType.DELIVERY else None,
            pickup_time=pickup_time,
            payment_method=details.payment_method,
            reference_number=details.reference_number,
            notes=merged_notes(details),
            receipt_url=details.receipt_url,
            items=[
                OrderItem(
                    item_id=line.item_id,
                    name=line.name,
                    variation_name=line.variation_name,
                    add_ons=line.add_ons,
                    unit_price=line.unit_total_price,
                    quantity=line.quantity,
                    subtotal=line.line_total,
                )
                for line in cart.lines
            ],
            total=cart.total_price,
            status=OrderStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

        self.orders[order.order_id] = order
        logger.info(f"Order {order.order_id} created: {order.total:.2f} ({len(order.items)} lines)")
        return order

    def get_order(self, order_id: str) -> Optional[Order]:
        """Get an order by ID"""
        return self.orders.get(order_id)

    def update_status(self, order_id: str, status: OrderStatus) -> Order:
        order = self.get_order(order_id)
        if not order:
            raise OrderNotFoundError(order_id)

        order.status = status
        order.updated_at = datetime.now(timezone.utc)
        return order

    def list_orders(
        self,
        status: Optional[OrderStatus] = None,
        query: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        sort_by: OrderSortKey = OrderSortKey.CREATED_AT,
        descending: Optional[bool] = None,
        limit: int = 50,
    ) -> list[Order]:
        """
        List orders, newest first by default.

        Args:
            status: Only orders in this status
            query: Matches customer, contact number, order ID or address
            date_from: First day included, by order creation date
            date_to: Last day included, by order creation date
            sort_by: Sort key
            descending: Sort direction; defaults to newest first for
                ``created_at`` and ascending for the other keys
            limit: Maximum number of orders returned
        """
        orders = list(self.orders.values())

        if status:
            orders = [o for o in orders if o.status == status]

        if date_from:
            orders = [o for o in orders if o.created_at.date() >= date_from]
        if date_to:
            orders = [o for o in orders if o.created_at.date() <= date_to]

        if query:
            query_lower = query.lower()
            orders = [
                o for o in orders
                if query_lower in o.customer_name.lower()
                or query_lower in o.contact_number.lower()
                or query_lower in o.order_id.lower()
                or query_lower in (o.address or "").lower()
            ]

        if descending is None:
            descending = sort_by == OrderSortKey.CREATED_AT
        sort_keys = {
            OrderSortKey.CREATED_AT: lambda o: o.created_at,
            OrderSortKey.TOTAL: lambda o: o.total,
            OrderSortKey.CUSTOMER_NAME: lambda o: o.customer_name.lower(),
            OrderSortKey.STATUS: lambda o: o.status.value,
        }
        orders.sort(key=sort_keys[sort_by], reverse=descending)
        return orders[:limit]

    def customers(
        self,
        query: Optional[str] = None,
        sort_by: CustomerSortKey = CustomerSortKey.LAST_ORDER_DATE,
        descending: bool = True,
    ) -> list[CustomerSummary]:
        """
        Customers derived from orders, grouped by name and contact number.

        Args:
            query: Matches name, contact number or any delivery address
            sort_by: Sort key
            descending: Sort direction
        """
        grouped: dict[tuple[str, str], CustomerSummary] = {}
        for order in sorted(self.orders.values(), key=lambda o: o.created_at):
            key = (order.customer_name.lower(), order.contact_number.lower())
            customer = grouped.get(key)
            if customer is None:
                grouped[key] = CustomerSummary(
                    name=order.customer_name,
                    contact_number=order.contact_number,
                    addresses=[order.address] if order.address else [],
                    order_count=1,
                    total_spent=order.total,
                    first_order_date=order.created_at,
                    last_order_date=order.created_at,
                    order_ids=[order.order_id],
                    service_types=[order.service_type],
                )
                continue

            customer.order_count += 1
            customer.total_spent += order.total
            customer.order_ids.append(order.order_id)
            customer.last_order_date = order.created_at
            if order.address and order.address not in customer.addresses:
                customer.addresses.append(order.address)
            if order.service_type not in customer.service_types:
                customer.service_types.append(order.service_type)

        results = list(grouped.values())
        for customer in results:
            customer.total_spent = round_currency(customer.total_spent)

        if query:
            query_lower = query.lower()
            results = [
                c for c in results
                if query_lower in c.name.lower()
                or query_lower in c.contact_number.lower()
                or any(query_lower in a.lower() for a in c.addresses)
            ]

        sort_keys = {
            CustomerSortKey.NAME: lambda c: c.name.lower(),
            CustomerSortKey.ORDER_COUNT: lambda c: c.order_count,
            CustomerSortKey.TOTAL_SPENT: lambda c: c.total_spent,
            CustomerSortKey.LAST_ORDER_DATE: lambda c: c.last_order_date,
        }
        results.sort(key=sort_keys[sort_by], reverse=descending)
        return results

    def delete_order(self, order_id: str) -> bool:
        if order_id in self.orders:
            del self.orders[order_id]
            return True
        return False

    def delete_all(self) -> int:
        count = len(self.orders)
        self.orders.clear()
        return count


# Singleton instance
order_db = OrderDatabase(catalog_db)

"""
Order message composition

Builds the plain-text order summary a customer sends to the shop through
Messenger, and the m.me link that pre-fills it.
"""

from typing import Optional
from urllib.parse import quote

from ..models.cart import CartLineSummary, CartSnapshot
from ..models.checkout import CheckoutDetails, ServiceType
from .pricing import format_peso
from .schedule import schedule_label


def describe_line(line: CartLineSummary, symbol: str = "₱") -> str:
    """``• Name (Variation) + Extra x2, Other x<qty> - ₱<line total>``"""
    text = f"• {line.name}"
    if line.variation_name:
        text += f" ({line.variation_name})"
    if line.add_ons:
        extras = [
            f"{a.name} x{a.quantity}" if a.quantity > 1 else a.name
            for a in line.add_ons
        ]
        text += f" + {', '.join(extras)}"
    text += f" x{line.quantity} - {format_peso(line.line_total, symbol)}"
    return text


def compose_order_message(
    details: CheckoutDetails,
    cart: CartSnapshot,
    payment_method_name: Optional[str] = None,
    symbol: str = "₱",
) -> str:
    lines = [
        "🛒 Raffa's ORDER",
        "",
        f"🏢 Branch: {details.branch_name}",
        f"👤 Owner/Representative: {details.owner_representative}",
        f"📦 Recipient: {details.recipient_name}",
        f"📞 Recipient Contact: {details.recipient_contact}",
        f"📍 Service: {details.service_type.value.capitalize()}",
    ]

    if details.service_type == ServiceType.DELIVERY:
        lines.append(f"🏠 Address: {details.address or ''}")
        if details.landmark:
            lines.append(f"🗺️ Landmark: {details.landmark}")

    if details.scheduled_date and details.scheduled_time:
        lines.append(f"📅 Scheduled: {schedule_label(details.scheduled_date, details.scheduled_time)}")

    lines += ["", "📋 ORDER DETAILS:"]
    lines += [describe_line(line, symbol) for line in cart.lines]
    lines += ["", f"💰 TOTAL: {format_peso(cart.total_price, symbol)}"]
    if details.service_type == ServiceType.DELIVERY:
        lines.append("🛵 DELIVERY FEE:")

    lines += ["", f"💳 Payment: {payment_method_name or details.payment_method}"]
    if details.receipt_url:
        lines.append(f"📸 Payment Receipt: {details.receipt_url}")
    else:
        lines.append("📸 Payment Screenshot: Please attach your payment receipt screenshot")

    if details.notes:
        lines += ["", f"📝 Notes: {details.notes}"]

    lines += ["", "Please confirm this order to proceed. Thank you for choosing Raffa's! 🥟"]
    return "\n".join(lines)


def messenger_link(page_id: str, text: str) -> str:
    return f"https://m.me/{page_id}?text={quote(text, safe='')}"

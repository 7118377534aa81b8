"""Checkout scheduling rules"""

from datetime import date, datetime, timedelta

from ..models.checkout import CheckoutDetails, ServiceType

# Orders are fulfilled Wednesday through Saturday (Monday == 0)
ALLOWED_WEEKDAYS = (2, 3, 4, 5)
WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

FIRST_SLOT_HOUR = {
    ServiceType.DELIVERY: 12,
    ServiceType.PICKUP: 8,
}
LAST_SLOT_HOUR = 21


def is_allowed_day(day: date) -> bool:
    return day.weekday() in ALLOWED_WEEKDAYS


def allowed_day_names() -> list[str]:
    return [WEEKDAY_NAMES[d] for d in ALLOWED_WEEKDAYS]


def min_schedule_date(today: date) -> date:
    """Earliest bookable date: today if it is a service day, else next Wednesday"""
    candidate = today
    while not is_allowed_day(candidate):
        candidate += timedelta(days=1)
    return candidate


def time_slots(service_type: ServiceType) -> list[str]:
    """Half-hour slots from the service's opening hour up to 21:00 inclusive"""
    slots = []
    for hour in range(FIRST_SLOT_HOUR[service_type], LAST_SLOT_HOUR):
        slots.append(f"{hour:02d}:00")
        slots.append(f"{hour:02d}:30")
    slots.append(f"{LAST_SLOT_HOUR:02d}:00")
    return slots


def schedule_label(day: date, slot: str) -> str:
    """Human form of a booking, e.g. ``Wednesday, October 21, 2026 at 12:30 PM``"""
    moment = datetime.combine(day, datetime.strptime(slot, "%H:%M").time())
    hour = moment.strftime("%I").lstrip("0")
    return f"{moment.strftime('%A, %B')} {moment.day}, {moment.year} at {hour}:{moment.strftime('%M %p')}"


def validate_checkout_details(details: CheckoutDetails, today: date) -> list[str]:
    """
    Check customer details before an order is placed.

    Returns:
        Problems found, empty when the details can be submitted
    """
    errors = []

    required = {
        "branch_name": "Branch name is required",
        "owner_representative": "Owner or representative is required",
        "recipient_name": "Recipient name is required",
        "recipient_contact": "Recipient contact number is required",
    }
    for field_name, message in required.items():
        if not getattr(details, field_name).strip():
            errors.append(message)

    if details.scheduled_date is None:
        errors.append("Scheduled date is required")
    elif not is_allowed_day(details.scheduled_date):
        errors.append("Please select Wednesday, Thursday, Friday, or Saturday")
    elif details.scheduled_date < min_schedule_date(today):
        errors.append("Scheduled date cannot be in the past")

    if not details.scheduled_time:
        errors.append("Scheduled time is required")
    elif details.scheduled_time not in time_slots(details.service_type):
        errors.append(
            f"{details.scheduled_time} is not an available {details.service_type.value} time"
        )

    if details.service_type == ServiceType.DELIVERY and not (details.address or "").strip():
        errors.append("Delivery address is required")

    return errors

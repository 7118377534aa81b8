"""Payment methods offered at checkout"""

from typing import Iterable, Optional

from ..models.checkout import PaymentMethod

SEED_PAYMENT_METHODS = [
    PaymentMethod(
        id="gcash",
        name="GCash",
        account_number="0917 123 4567",
        account_name="Raffa's Treats on Stix",
        sort_order=1,
    ),
    PaymentMethod(
        id="maya",
        name="Maya",
        account_number="0917 123 4567",
        account_name="Raffa's Treats on Stix",
        sort_order=2,
    ),
    PaymentMethod(
        id="bank-transfer",
        name="BPI Bank Transfer",
        account_number="1234-5678-90",
        account_name="Raffa's Treats on Stix",
        sort_order=3,
    ),
]


class PaymentMethodDatabase:
    """In-memory payment method storage"""

    def __init__(self, methods: Optional[Iterable[PaymentMethod]] = None):
        self.methods: dict[str, PaymentMethod] = {m.id: m for m in methods or []}

    def get_method(self, method_id: str) -> Optional[PaymentMethod]:
        return self.methods.get(method_id)

    def list_methods(self, active_only: bool = True) -> list[PaymentMethod]:
        """Payment methods in display order"""
        methods = [m for m in self.methods.values() if m.active or not active_only]
        return sorted(methods, key=lambda m: m.sort_order)

    def display_name(self, method_id: str) -> str:
        """Name shown to the shop, falling back to the raw ID"""
        method = self.get_method(method_id)
        return method.name if method else method_id


# Singleton instance
payment_db = PaymentMethodDatabase(SEED_PAYMENT_METHODS)

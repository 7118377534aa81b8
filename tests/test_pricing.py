"""
Tests for pricing resolution.
"""

from datetime import datetime, timedelta, timezone

import pytest

from raffas_store.models.catalog import SelectedAddOn, Variation
from raffas_store.services.pricing import (
    format_peso,
    is_discount_active,
    resolve_effective_price,
    resolve_unit_total_price,
    round_currency,
)
from tests.conftest import NOW, make_item


class TestDiscountWindow:
    """Tests for is_discount_active() and resolve_effective_price()"""

    def test_no_discount_uses_base_price(self):
        """Items without a discount are priced at base."""
        item = make_item(base_price=100.0)
        assert not is_discount_active(item, NOW)
        assert resolve_effective_price(item, NOW) == 100.0

    def test_open_ended_window_applies(self):
        """Active discount with no bounds applies at any time."""
        item = make_item(discount_price=80.0, discount_active=True)
        assert is_discount_active(item, NOW)
        assert resolve_effective_price(item, NOW) == 80.0

    def test_inactive_flag_ignores_window(self):
        """A discount switched off never applies, even inside its window."""
        item = make_item(
            discount_price=80.0,
            discount_active=False,
            discount_start=NOW - timedelta(days=1),
            discount_end=NOW + timedelta(days=1),
        )
        assert resolve_effective_price(item, NOW) == 100.0

    def test_missing_discount_price_uses_base(self):
        """Active flag without a discount price falls back to base."""
        item = make_item(discount_active=True)
        assert not is_discount_active(item, NOW)
        assert resolve_effective_price(item, NOW) == 100.0

    def test_start_bound_is_inclusive(self):
        """Discount applies exactly at its start time."""
        item = make_item(discount_price=80.0, discount_active=True, discount_start=NOW)
        assert is_discount_active(item, NOW)
        assert not is_discount_active(item, NOW - timedelta(seconds=1))

    def test_end_bound_is_inclusive(self):
        """Discount applies exactly at its end time."""
        item = make_item(discount_price=80.0, discount_active=True, discount_end=NOW)
        assert is_discount_active(item, NOW)
        assert not is_discount_active(item, NOW + timedelta(seconds=1))

    def test_before_window_uses_base(self):
        item = make_item(
            discount_price=80.0,
            discount_active=True,
            discount_start=NOW + timedelta(days=1),
        )
        assert resolve_effective_price(item, NOW) == 100.0

    def test_naive_times_are_treated_as_utc(self):
        """Naive bounds and naive now compare as UTC."""
        item = make_item(
            discount_price=80.0,
            discount_active=True,
            discount_start=datetime(2026, 10, 1),
            discount_end=datetime(2026, 10, 31),
        )
        assert item.discount_start.tzinfo == timezone.utc
        assert is_discount_active(item, datetime(2026, 10, 21, 10, 0))


class TestUnitTotalPrice:
    """Tests for resolve_unit_total_price()"""

    def test_discounted_base_with_no_extras(self):
        item = make_item(discount_price=80.0, discount_active=True)
        assert resolve_unit_total_price(item, now=NOW) == 80.0

    def test_variation_replaces_discounted_price(self):
        """Selecting a variation ignores the base item's discount."""
        large = Variation(id="large", name="Large", price=120.0)
        item = make_item(
            base_price=90.0,
            discount_price=70.0,
            discount_active=True,
            variations=[large],
        )
        assert resolve_unit_total_price(item, large, now=NOW) == 120.0

    def test_add_ons_multiply_by_quantity(self):
        item = make_item(base_price=25.0)
        add_ons = [
            SelectedAddOn(id="choco", name="Chocolate Dip", price=15.0, quantity=2),
            SelectedAddOn(id="cheese", name="Extra Cheese", price=10.0),
        ]
        assert resolve_unit_total_price(item, add_ons=add_ons, now=NOW) == 25.0 + 30.0 + 10.0

    def test_add_ons_stack_on_variation(self):
        pack = Variation(id="pack-6", name="Pack of 6", price=140.0)
        item = make_item(variations=[pack])
        dip = SelectedAddOn(id="choco", name="Chocolate Dip", price=15.0)
        assert resolve_unit_total_price(item, pack, [dip]) == 155.0

    def test_now_required_without_variation(self):
        with pytest.raises(ValueError):
            resolve_unit_total_price(make_item())


class TestPresentation:
    """Tests for currency rounding and formatting"""

    def test_round_half_up(self):
        assert round_currency(2.675) == 2.68
        assert round_currency(0.1 + 0.2) == 0.3

    def test_format_peso(self):
        assert format_peso(1234.5) == "₱1,234.50"
        assert format_peso(160) == "₱160.00"
        assert format_peso(5, symbol="PHP ") == "PHP 5.00"

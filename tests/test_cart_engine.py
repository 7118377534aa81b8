"""
Tests for CartEngine - line identity, stock ceilings and totals.
"""

from datetime import timedelta

import pytest
from hypothesis import given, settings, strategies as st

from raffas_store.database.catalog import CatalogDatabase
from raffas_store.models.catalog import AddOn, SelectedAddOn, Variation
from raffas_store.services.cart_engine import CartEngine, make_line_id
from tests.conftest import NOW, make_item


def engine_for(*items):
    """Cart engine over a catalog holding exactly ``items``."""
    catalog = CatalogDatabase(items)
    return CartEngine(catalog.get_item, clock=lambda: NOW), catalog


class TestLineIdentity:
    """Tests for make_line_id()"""

    def test_plain_item(self):
        assert make_line_id("coffee-1") == "coffee-1:default:"

    def test_add_on_order_does_not_matter(self):
        a = SelectedAddOn(id="a", name="A", price=1.0)
        b = SelectedAddOn(id="b", name="B", price=1.0)
        assert make_line_id("x", None, [a, b]) == make_line_id("x", None, [b, a])

    def test_variation_distinguishes_lines(self):
        small = Variation(id="s", name="Small", price=1.0)
        large = Variation(id="l", name="Large", price=2.0)
        assert make_line_id("x", small) != make_line_id("x", large)
        assert make_line_id("x", small) != make_line_id("x")


class TestAddItem:
    """Tests for CartEngine.add_item()"""

    def test_discounted_item_total(self):
        """coffee-1 with an 80 discount ending tomorrow, two units cost 160."""
        coffee = make_item(
            "coffee-1",
            base_price=100.0,
            discount_price=80.0,
            discount_active=True,
            discount_end=NOW + timedelta(days=1),
        )
        engine, _ = engine_for(coffee)

        engine.add_item(coffee, quantity=2)

        assert round(engine.get_total_price(), 2) == 160.00
        assert engine.snapshot().total_price == 160.00

    def test_clamps_to_stock(self):
        """limited-1 with 3 in stock ends up at 3 when 5 are requested."""
        limited = make_item("limited-1", track_inventory=True, stock_quantity=3)
        engine, _ = engine_for(limited)

        line = engine.add_item(limited, quantity=5)

        assert line.quantity == 3
        assert engine.get_total_items() == 3

    def test_identical_configurations_merge(self):
        item = make_item()
        engine, _ = engine_for(item)
        dip = SelectedAddOn(id="dip", name="Dip", price=10.0)
        cheese = SelectedAddOn(id="cheese", name="Cheese", price=5.0)

        engine.add_item(item, add_ons=[dip, cheese], quantity=2)
        engine.add_item(item, add_ons=[cheese, dip], quantity=3)

        assert len(engine.lines) == 1
        assert engine.lines[0].quantity == 5

    def test_different_configurations_get_separate_lines(self):
        large = Variation(id="large", name="Large", price=120.0)
        item = make_item(variations=[large])
        engine, _ = engine_for(item)

        engine.add_item(item)
        engine.add_item(item, variation=large)

        assert len(engine.lines) == 2

    def test_merge_respects_ceiling(self):
        item = make_item(track_inventory=True, stock_quantity=4)
        engine, _ = engine_for(item)

        engine.add_item(item, quantity=3)
        line = engine.add_item(item, quantity=3)

        assert line.quantity == 4

    def test_untracked_item_has_no_ceiling(self):
        item = make_item(track_inventory=False, stock_quantity=1)
        engine, _ = engine_for(item)

        assert engine.add_item(item, quantity=50).quantity == 50

    def test_tracked_with_null_stock_has_no_ceiling(self):
        item = make_item(track_inventory=True, stock_quantity=None)
        engine, _ = engine_for(item)

        assert engine.add_item(item, quantity=50).quantity == 50

    def test_out_of_stock_adds_nothing(self):
        item = make_item(track_inventory=True, stock_quantity=0)
        engine, _ = engine_for(item)

        assert engine.add_item(item) is None
        assert engine.is_empty

    def test_stock_drop_does_not_shrink_existing_line(self):
        """A line above a newly lowered ceiling is kept, not reduced or removed."""
        item = make_item(track_inventory=True, stock_quantity=5)
        engine, catalog = engine_for(item)
        engine.add_item(item, quantity=5)

        catalog.items[item.id].stock_quantity = 0
        line = engine.add_item(catalog.get_item(item.id))

        assert line.quantity == 5

    def test_unit_price_fixed_at_add_time(self):
        """Catalog price changes do not touch lines already in the cart."""
        item = make_item(base_price=50.0)
        engine, catalog = engine_for(item)
        engine.add_item(item)

        catalog.items[item.id].base_price = 75.0
        line = engine.add_item(catalog.get_item(item.id))

        assert line.quantity == 2
        assert line.unit_total_price == 50.0

    def test_variation_ignores_discount(self):
        """Large at 120 stays 120 even with the base discounted to 70."""
        large = Variation(id="large", name="Large", price=120.0)
        item = make_item(
            base_price=90.0,
            discount_price=70.0,
            discount_active=True,
            variations=[large],
        )
        engine, _ = engine_for(item)

        line = engine.add_item(item, variation=large)

        assert line.unit_total_price == 120.0

    def test_add_on_quantity_in_unit_price(self):
        item = make_item(base_price=25.0)
        engine, _ = engine_for(item)
        dip = SelectedAddOn(id="dip", name="Dip", price=15.0, quantity=3)

        line = engine.add_item(item, add_ons=[dip], quantity=2)

        assert line.unit_total_price == 70.0
        assert engine.get_total_price() == 140.0

    def test_explicit_now_overrides_clock(self):
        item = make_item(
            discount_price=80.0,
            discount_active=True,
            discount_end=NOW - timedelta(days=1),
        )
        engine, _ = engine_for(item)

        line = engine.add_item(item, now=NOW - timedelta(days=2))

        assert line.unit_total_price == 80.0

    def test_non_positive_quantity_is_ignored(self):
        item = make_item()
        engine, _ = engine_for(item)

        assert engine.add_item(item, quantity=0) is None
        assert engine.is_empty


class TestUpdateQuantity:
    """Tests for update_quantity(), increment() and remove_item()"""

    @pytest.fixture
    def limited(self):
        return make_item("limited-1", track_inventory=True, stock_quantity=3)

    def test_sets_exact_quantity_when_untracked(self):
        item = make_item()
        engine, _ = engine_for(item)
        line = engine.add_item(item)

        engine.update_quantity(line.line_id, 7)

        assert engine.get_line(line.line_id).quantity == 7

    def test_clamps_to_stock(self, limited):
        engine, _ = engine_for(limited)
        line = engine.add_item(limited)

        engine.update_quantity(line.line_id, 10)

        assert engine.get_line(line.line_id).quantity == 3

    def test_uses_current_catalog_stock(self, limited):
        engine, catalog = engine_for(limited)
        line = engine.add_item(limited)

        catalog.items[limited.id].stock_quantity = 8
        engine.update_quantity(line.line_id, 6)

        assert engine.get_line(line.line_id).quantity == 6

    def test_zero_stock_allows_decrease_only(self, limited):
        engine, catalog = engine_for(limited)
        line = engine.add_item(limited, quantity=3)
        catalog.items[limited.id].stock_quantity = 0

        engine.update_quantity(line.line_id, 5)
        assert engine.get_line(line.line_id).quantity == 3

        engine.update_quantity(line.line_id, 2)
        assert engine.get_line(line.line_id).quantity == 2

    def test_zero_quantity_equals_remove(self):
        """update_quantity(id, 0) leaves the same cart as remove_item(id)."""
        item = make_item()
        other = make_item("other")
        first, _ = engine_for(item, other)
        second, _ = engine_for(item, other)
        for engine in (first, second):
            engine.add_item(item, quantity=2)
            engine.add_item(other)

        line_id = make_line_id(item.id)
        first.update_quantity(line_id, 0)
        second.remove_item(line_id)

        assert first.snapshot() == second.snapshot()
        assert first.get_line(line_id) is None

    def test_negative_quantity_removes(self):
        item = make_item()
        engine, _ = engine_for(item)
        line = engine.add_item(item)

        engine.update_quantity(line.line_id, -1)

        assert engine.is_empty

    def test_unknown_line_is_noop(self):
        item = make_item()
        engine, _ = engine_for(item)
        engine.add_item(item)
        before = engine.snapshot()

        assert engine.update_quantity("missing", 4) is None
        engine.remove_item("missing")

        assert engine.snapshot() == before

    def test_vanished_catalog_item_has_no_ceiling(self, limited):
        engine, catalog = engine_for(limited)
        line = engine.add_item(limited)
        del catalog.items[limited.id]

        engine.update_quantity(line.line_id, 9)

        assert engine.get_line(line.line_id).quantity == 9

    def test_increment_stops_at_max_stock(self, limited):
        engine, _ = engine_for(limited)
        line = engine.add_item(limited, quantity=2)

        engine.increment(line.line_id)
        engine.increment(line.line_id)

        assert engine.get_line(line.line_id).quantity == 3
        assert engine.stock_info(line.line_id).at_max_stock

    def test_clear_empties_cart(self):
        item = make_item()
        engine, _ = engine_for(item)
        engine.add_item(item, quantity=4)

        engine.clear()

        assert engine.is_empty
        assert engine.get_total_items() == 0
        assert engine.get_total_price() == 0


class TestStockInfo:
    """Tests for stock_info()"""

    def test_untracked(self):
        item = make_item()
        engine, _ = engine_for(item)
        line = engine.add_item(item)

        info = engine.stock_info(line.line_id)

        assert not info.has_stock_limit
        assert info.stock_quantity is None

    def test_tracked_below_ceiling(self):
        item = make_item(track_inventory=True, stock_quantity=10)
        engine, _ = engine_for(item)
        line = engine.add_item(item, quantity=4)

        info = engine.stock_info(line.line_id)

        assert info.has_stock_limit
        assert info.stock_quantity == 10
        assert not info.at_max_stock

    def test_unknown_line(self):
        engine, _ = engine_for(make_item())
        assert engine.stock_info("missing") is None


class TestTotals:
    """Tests for get_total_items(), get_total_price() and snapshot()"""

    def test_two_lines(self):
        """Line A at 50 x2 and line B at 30 x1 total 130 over 3 items."""
        a = make_item("a", base_price=50.0)
        b = make_item("b", base_price=30.0)
        engine, _ = engine_for(a, b)

        engine.add_item(a, quantity=2)
        engine.add_item(b)

        assert engine.get_total_price() == 130.0
        assert engine.get_total_items() == 3

    def test_total_price_not_rounded_internally(self):
        item = make_item(base_price=0.125)
        engine, _ = engine_for(item)

        engine.add_item(item, quantity=3)

        assert engine.get_total_price() == 0.375
        assert engine.snapshot().total_price == 0.38

    def test_snapshot_lines(self):
        large = Variation(id="large", name="Large", price=120.0)
        item = make_item(
            "coffee-1",
            variations=[large],
            add_ons=[AddOn(id="shot", name="Extra Shot", price=20.0)],
        )
        engine, _ = engine_for(item)
        shot = SelectedAddOn(id="shot", name="Extra Shot", price=20.0, quantity=2)

        engine.add_item(item, variation=large, add_ons=[shot], quantity=2)
        snapshot = engine.snapshot()

        assert snapshot.total_items == 2
        assert snapshot.total_price == 320.0
        line = snapshot.lines[0]
        assert line.name == "Coffee 1"
        assert line.variation_name == "Large"
        assert [(a.name, a.quantity) for a in line.add_ons] == [("Extra Shot", 2)]
        assert line.unit_total_price == 160.0
        assert line.line_total == 320.0


class TestCartProperties:
    """Property-based tests for cart invariants."""

    @given(
        quantities=st.lists(st.integers(min_value=1, max_value=20), min_size=1, max_size=10),
        stock=st.one_of(st.none(), st.integers(min_value=0, max_value=60)),
    )
    @settings(max_examples=100)
    def test_repeated_adds_merge_and_clamp(self, quantities, stock):
        """Identical adds collapse into one line holding min(sum, stock)."""
        item = make_item(track_inventory=stock is not None, stock_quantity=stock)
        engine, _ = engine_for(item)

        for quantity in quantities:
            engine.add_item(item, quantity=quantity)

        expected = sum(quantities) if stock is None else min(sum(quantities), stock)
        if expected == 0:
            assert engine.is_empty
        else:
            assert len(engine.lines) == 1
            assert engine.lines[0].quantity == expected

    @given(
        lines=st.lists(
            st.tuples(
                st.floats(min_value=0, max_value=1000, allow_nan=False),
                st.integers(min_value=1, max_value=50),
            ),
            min_size=0,
            max_size=8,
        )
    )
    @settings(max_examples=100)
    def test_total_price_matches_recomputation(self, lines):
        """get_total_price() equals the sum of unit price times quantity."""
        items = [make_item(f"item-{i}", base_price=price) for i, (price, _) in enumerate(lines)]
        engine, _ = engine_for(*items)

        for item, (_, quantity) in zip(items, lines):
            engine.add_item(item, quantity=quantity)

        recomputed = sum(l.unit_total_price * l.quantity for l in engine.lines)
        assert engine.get_total_price() == pytest.approx(recomputed)
        assert engine.get_total_price() == engine.get_total_price()
        assert engine.get_total_items() == sum(q for _, q in lines)

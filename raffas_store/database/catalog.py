"""Menu catalog for the storefront"""

import logging
import uuid
from typing import Any, Iterable, Optional

from pydantic import ValidationError

from ..errors import CatalogError, CatalogRowError
from ..models.catalog import AddOn, CatalogItem, Category, StockStatus, Variation

logger = logging.getLogger(__name__)


def normalize_menu_row(row: dict[str, Any]) -> CatalogItem:
    """
    Map a raw ``menu_items`` row, with nested ``variations`` and ``add_ons``,
    to a typed catalog item.

    Raises:
        CatalogRowError: if the row is missing required fields or has bad values
    """
    try:
        return CatalogItem(
            id=str(row["id"]),
            name=row["name"],
            description=row.get("description") or "",
            category=row.get("category") or "",
            base_price=row["base_price"],
            popular=bool(row.get("popular")),
            available=row.get("available") if row.get("available") is not None else True,
            image_url=row.get("image_url") or None,
            sort_order=row.get("sort_order"),
            # A zero discount price means no discount
            discount_price=row.get("discount_price") or None,
            discount_start=row.get("discount_start_date") or None,
            discount_end=row.get("discount_end_date") or None,
            discount_active=bool(row.get("discount_active")),
            track_inventory=bool(row.get("track_inventory")),
            stock_quantity=row.get("stock_quantity"),
            low_stock_threshold=row.get("low_stock_threshold") or 0,
            variations=[
                Variation(id=str(v["id"]), name=v["name"], price=v["price"])
                for v in row.get("variations") or []
            ],
            add_ons=[
                AddOn(
                    id=str(a["id"]),
                    name=a["name"],
                    price=a["price"],
                    category=a.get("category") or "",
                )
                for a in row.get("add_ons") or []
            ],
        )
    except (KeyError, TypeError, ValidationError) as e:
        raise CatalogRowError(f"Malformed menu row {row.get('id', '?')}: {e}") from e


def normalize_category_row(row: dict[str, Any]) -> Category:
    """Map a raw ``categories`` row to a category"""
    try:
        return Category(
            id=str(row["id"]),
            name=row["name"],
            icon=row.get("icon") or "",
            sort_order=row.get("sort_order") or 0,
            active=row.get("active") if row.get("active") is not None else True,
        )
    except (KeyError, TypeError, ValidationError) as e:
        raise CatalogRowError(f"Malformed category row {row.get('id', '?')}: {e}") from e


# Menu served when no hosted backend is configured
SEED_MENU_ROWS: list[dict[str, Any]] = [
    {
        "id": "turon-classic",
        "name": "Classic Turon Stix",
        "description": "Saba banana and langka wrapped in lumpia, fried and caramelized.",
        "base_price": 25.0,
        "category": "stix",
        "popular": True,
        "available": True,
        "sort_order": 1,
        "track_inventory": True,
        "stock_quantity": 120,
        "low_stock_threshold": 20,
        "variations": [
            {"id": "turon-classic-6", "name": "Pack of 6", "price": 140.0},
            {"id": "turon-classic-12", "name": "Pack of 12", "price": 270.0},
        ],
        "add_ons": [
            {"id": "dip-choco", "name": "Chocolate Dip", "price": 15.0, "category": "dips"},
            {"id": "dip-caramel", "name": "Caramel Dip", "price": 15.0, "category": "dips"},
        ],
    },
    {
        "id": "turon-ube-cheese",
        "name": "Ube Cheese Stix",
        "description": "Ube halaya and cheese in a crisp wrapper.",
        "base_price": 35.0,
        "category": "stix",
        "sort_order": 2,
        "discount_price": 30.0,
        "discount_active": True,
        "discount_start_date": "2026-01-01T00:00:00+00:00",
        "discount_end_date": "2026-12-31T23:59:59+00:00",
        "track_inventory": True,
        "stock_quantity": 40,
        "low_stock_threshold": 10,
        "add_ons": [
            {"id": "dip-choco", "name": "Chocolate Dip", "price": 15.0, "category": "dips"},
            {"id": "topping-cheese", "name": "Extra Cheese", "price": 10.0, "category": "toppings"},
        ],
    },
    {
        "id": "kikiam-stix",
        "name": "Kikiam Stix",
        "description": "Street-style kikiam on a stick with sweet and spicy sauce.",
        "base_price": 20.0,
        "category": "savory",
        "sort_order": 3,
        "add_ons": [
            {"id": "sauce-spicy", "name": "Spicy Vinegar", "price": 5.0, "category": "sauces"},
        ],
    },
    {
        "id": "frozen-turon-box",
        "name": "Frozen Turon Box",
        "description": "Ready-to-fry turon for resellers, 24 pieces per box.",
        "base_price": 480.0,
        "category": "frozen",
        "sort_order": 4,
        "track_inventory": True,
        "stock_quantity": 5,
        "low_stock_threshold": 2,
    },
    {
        "id": "iced-coffee",
        "name": "Iced Coffee",
        "description": "House blend over ice.",
        "base_price": 60.0,
        "category": "drinks",
        "sort_order": None,
        "variations": [
            {"id": "iced-coffee-16", "name": "16 oz", "price": 60.0},
            {"id": "iced-coffee-22", "name": "22 oz", "price": 80.0},
        ],
        "add_ons": [
            {"id": "shot-espresso", "name": "Extra Shot", "price": 20.0, "category": "coffee"},
        ],
    },
]

SEED_CATEGORY_ROWS: list[dict[str, Any]] = [
    {"id": "stix", "name": "Turon Stix", "icon": "🍌", "sort_order": 1, "active": True},
    {"id": "savory", "name": "Savory Stix", "icon": "🍢", "sort_order": 2, "active": True},
    {"id": "frozen", "name": "Frozen Packs", "icon": "🧊", "sort_order": 3, "active": True},
    {"id": "drinks", "name": "Drinks", "icon": "🥤", "sort_order": 4, "active": True},
]


class CatalogDatabase:
    """In-memory snapshot of the menu and its categories"""

    def __init__(
        self,
        items: Optional[Iterable[CatalogItem]] = None,
        categories: Optional[Iterable[Category]] = None,
    ):
        self.items: dict[str, CatalogItem] = {item.id: item for item in items or []}
        self.category_index: dict[str, Category] = {c.id: c for c in categories or []}

    @classmethod
    def from_rows(
        cls,
        rows: Iterable[dict[str, Any]],
        category_rows: Iterable[dict[str, Any]] = (),
    ) -> "CatalogDatabase":
        catalog = cls()
        catalog.load_rows(rows)
        catalog.load_category_rows(category_rows)
        return catalog

    def load_rows(self, rows: Iterable[dict[str, Any]]) -> int:
        """Replace the menu with normalized rows; returns the item count"""
        items = [normalize_menu_row(row) for row in rows]
        for item in items:
            self._disable_if_low(item)
        self.items = {item.id: item for item in items}
        logger.info(f"Catalog loaded with {len(self.items)} items")
        return len(self.items)

    def load_category_rows(self, rows: Iterable[dict[str, Any]]) -> int:
        categories = [normalize_category_row(row) for row in rows]
        self.category_index = {c.id: c for c in categories}
        return len(self.category_index)

    async def refresh(self, client) -> int:
        """
        Reload menu and categories from the hosted backend.

        Nothing is replaced unless every row normalizes.
        """
        rows = await client.fetch_menu_rows()
        category_rows = await client.fetch_category_rows()
        categories = [normalize_category_row(row) for row in category_rows]

        count = self.load_rows(rows)
        self.category_index = {c.id: c for c in categories}
        return count

    def get_item(self, item_id: str) -> Optional[CatalogItem]:
        """Get a menu item by ID"""
        return self.items.get(item_id)

    def list_items(
        self,
        category: Optional[str] = None,
        query: Optional[str] = None,
        available_only: bool = False,
    ) -> list[CatalogItem]:
        """Menu items in display order, unordered items last"""
        results = list(self.items.values())

        if category:
            results = [i for i in results if i.category == category]

        if query:
            query_lower = query.lower()
            results = [
                i for i in results
                if query_lower in i.name.lower() or query_lower in i.category.lower()
            ]

        if available_only:
            results = [i for i in results if i.available]

        results.sort(key=lambda i: (i.sort_order is None, i.sort_order or 0))
        return results

    # ==================== Menu items ====================

    def _new_options(self, changes: dict[str, Any]) -> dict[str, Any]:
        """Give fresh IDs to replacement variations and add-ons"""
        options = {}
        if changes.get("variations") is not None:
            options["variations"] = [
                Variation(id=str(uuid.uuid4()), **v) for v in changes["variations"]
            ]
        if changes.get("add_ons") is not None:
            options["add_ons"] = [
                AddOn(id=str(uuid.uuid4()), **a) for a in changes["add_ons"]
            ]
        return options

    def _require_category(self, category_id: str) -> None:
        if category_id not in self.category_index:
            raise CatalogError(f"Unknown category {category_id}")

    def add_menu_item(self, fields: dict[str, Any]) -> CatalogItem:
        """
        Create a menu item placed last in its category.

        Raises:
            CatalogError: if the category does not exist
        """
        self._require_category(fields["category"])

        in_category = [
            i.sort_order for i in self.items.values()
            if i.category == fields["category"] and i.sort_order is not None
        ]
        item = CatalogItem(
            **{**fields, **self._new_options(fields)},
            id=str(uuid.uuid4()),
            sort_order=max(in_category, default=0) + 1,
        )
        self._disable_if_low(item)
        self.items[item.id] = item
        logger.info(f"Menu item {item.id} created: {item.name}")
        return item

    def update_menu_item(self, item_id: str, changes: dict[str, Any]) -> Optional[CatalogItem]:
        """
        Apply a partial edit in place, so carts holding the item see it.

        Raises:
            CatalogError: if the new category does not exist
        """
        item = self.items.get(item_id)
        if not item:
            return None
        if "category" in changes:
            self._require_category(changes["category"])

        updated = CatalogItem.model_validate(
            {**item.model_dump(), **changes, **self._new_options(changes)}
        )
        for name in CatalogItem.model_fields:
            setattr(item, name, getattr(updated, name))
        self._disable_if_low(item)
        return item

    def delete_menu_item(self, item_id: str) -> bool:
        if self.items.pop(item_id, None) is None:
            return False
        logger.info(f"Menu item {item_id} deleted")
        return True

    def reorder_menu_items(self, item_ids: list[str]) -> list[CatalogItem]:
        """
        Number the given items 1..n in the given order.

        Raises:
            CatalogError: if any ID is unknown
        """
        missing = [i for i in item_ids if i not in self.items]
        if missing:
            raise CatalogError(f"Unknown menu items: {', '.join(missing)}")

        for position, item_id in enumerate(item_ids, start=1):
            self.items[item_id].sort_order = position
        return [self.items[i] for i in item_ids]

    # ==================== Categories ====================

    def categories(self, include_inactive: bool = False) -> list[Category]:
        """Categories in display order"""
        results = [
            c for c in self.category_index.values()
            if include_inactive or c.active
        ]
        results.sort(key=lambda c: (c.sort_order, c.name))
        return results

    def get_category(self, category_id: str) -> Optional[Category]:
        return self.category_index.get(category_id)

    def item_count(self, category_id: str) -> int:
        return sum(1 for i in self.items.values() if i.category == category_id)

    def add_category(self, category: Category) -> Category:
        """
        Add a category; a sort order of zero or less places it last.

        Raises:
            CatalogError: if the ID is taken
        """
        if category.id in self.category_index:
            raise CatalogError(f"Category {category.id} already exists")

        if category.sort_order <= 0:
            last = max((c.sort_order for c in self.category_index.values()), default=0)
            category = category.model_copy(update={"sort_order": last + 1})
        self.category_index[category.id] = category
        return category

    def update_category(self, category_id: str, changes: dict[str, Any]) -> Optional[Category]:
        category = self.category_index.get(category_id)
        if not category:
            return None

        updated = Category.model_validate({**category.model_dump(), **changes})
        self.category_index[category_id] = updated
        return updated

    def delete_category(self, category_id: str, move_to: Optional[str] = None) -> Optional[int]:
        """
        Delete a category, and either its items or move them elsewhere first.

        Returns:
            Number of items deleted or moved, None if the category does not exist

        Raises:
            CatalogError: if ``move_to`` is unknown or the category itself
        """
        if category_id not in self.category_index:
            return None
        if move_to is not None:
            if move_to == category_id:
                raise CatalogError("Cannot move items into the category being deleted")
            self._require_category(move_to)

        affected = [i for i in self.items.values() if i.category == category_id]
        if move_to is not None:
            self.reorder_menu_items(
                [i.id for i in self.list_items(category=move_to)] + [i.id for i in affected]
            )
            for item in affected:
                item.category = move_to
        else:
            for item in affected:
                del self.items[item.id]

        del self.category_index[category_id]
        action = f"moved to {move_to}" if move_to else "deleted"
        logger.info(f"Category {category_id} deleted, {len(affected)} items {action}")
        return len(affected)

    def reorder_categories(self, category_ids: list[str]) -> list[Category]:
        """
        Raises:
            CatalogError: if any ID is unknown
        """
        missing = [c for c in category_ids if c not in self.category_index]
        if missing:
            raise CatalogError(f"Unknown categories: {', '.join(missing)}")

        for position, category_id in enumerate(category_ids, start=1):
            self.category_index[category_id].sort_order = position
        return [self.category_index[c] for c in category_ids]

    # ==================== Inventory ====================

    def _sync_availability(self, item: CatalogItem) -> None:
        item.available = (item.stock_quantity or 0) > item.low_stock_threshold

    def _disable_if_low(self, item: CatalogItem) -> None:
        if item.has_stock_limit and item.stock_quantity <= item.low_stock_threshold:
            item.available = False

    def adjust_stock(self, item_id: str, delta: int) -> Optional[CatalogItem]:
        """
        Change stock by ``delta``, never below zero.

        Returns:
            The item, or None if it does not exist. Untracked items are
            returned unchanged.
        """
        item = self.items.get(item_id)
        if not item or not item.track_inventory:
            return item

        item.stock_quantity = max(0, (item.stock_quantity or 0) + delta)
        self._sync_availability(item)
        return item

    def set_stock(self, item_id: str, value: int) -> Optional[CatalogItem]:
        item = self.items.get(item_id)
        if not item or not item.track_inventory:
            return item

        item.stock_quantity = max(0, value)
        self._sync_availability(item)
        return item

    def set_threshold(self, item_id: str, value: int) -> Optional[CatalogItem]:
        item = self.items.get(item_id)
        if not item or not item.track_inventory:
            return item

        item.low_stock_threshold = max(0, value)
        self._sync_availability(item)
        return item

    def set_tracking(self, item_id: str, track: bool) -> Optional[CatalogItem]:
        """Turn inventory tracking on or off for an item"""
        item = self.items.get(item_id)
        if not item:
            return None

        if track:
            item.track_inventory = True
            item.stock_quantity = max(0, item.stock_quantity or 0)
            item.low_stock_threshold = max(0, item.low_stock_threshold)
            self._sync_availability(item)
        else:
            item.track_inventory = False
            item.stock_quantity = None
            item.low_stock_threshold = 0
        return item

    def low_stock_items(self) -> list[CatalogItem]:
        return [
            i for i in self.list_items()
            if i.stock_status in (StockStatus.LOW_STOCK, StockStatus.OUT_OF_STOCK)
        ]


# Singleton instance
catalog_db = CatalogDatabase.from_rows(SEED_MENU_ROWS, SEED_CATEGORY_ROWS)

import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, List, Optional

from blinker import Namespace

from app.catalog import Catalog, default_catalog, quick_add_id
from app.schemas.store import CartLineItem, SavedItem
from app.services.errors import NotFoundError, StorageError
from app.services.pricing import cart_subtotal, line_item_unit_price
from app.storage.kv import CART_KEY, SAVED_ITEMS_KEY, KeyValueStore, load_list, read_list

logger = logging.getLogger(__name__)

cart_signals = Namespace()
# Sent with ``count`` (badge count) after every cart mutation
cart_changed = cart_signals.signal("cart-changed")


class CartService:
    """The customer's working set of line items plus the saved-for-later list."""

    def __init__(self, store: KeyValueStore, catalog: Optional[Catalog] = None):
        self.store = store
        self.catalog = catalog or default_catalog

    # ---- reads ----

    def items(self) -> List[CartLineItem]:
        return [CartLineItem.model_validate(raw) for raw in read_list(self.store, CART_KEY)]

    def saved_items(self) -> List[SavedItem]:
        return [SavedItem.model_validate(raw) for raw in read_list(self.store, SAVED_ITEMS_KEY)]

    def item_count(self) -> int:
        return sum(line.quantity for line in self.items())

    def subtotal(self) -> Decimal:
        return cart_subtotal(self.items())

    # ---- writes ----

    def _load_lines(self) -> List[CartLineItem]:
        return [CartLineItem.model_validate(raw) for raw in load_list(self.store, CART_KEY)]

    def _load_saved(self) -> List[SavedItem]:
        return [SavedItem.model_validate(raw) for raw in load_list(self.store, SAVED_ITEMS_KEY)]

    def _write(self, lines: List[CartLineItem]) -> None:
        self.store.set(CART_KEY, [line.to_store() for line in lines])
        cart_changed.send(self, count=sum(line.quantity for line in lines))

    def _write_saved(self, saved: List[SavedItem]) -> None:
        self.store.set(SAVED_ITEMS_KEY, [s.to_store() for s in saved])

    def subscribe(self, receiver: Callable) -> Callable[[], None]:
        """Call ``receiver(service, count=...)`` after each mutation of this cart."""
        cart_changed.connect(receiver, sender=self, weak=False)
        return lambda: cart_changed.disconnect(receiver, sender=self)

    def add_item(self, product_id: str, selected_options: Optional[List[str]] = None) -> CartLineItem:
        """Add a customised product; always a new line, never merged."""
        product = self.catalog.get_product(product_id)
        options = list(selected_options or [])
        line = CartLineItem(
            id=f"{product_id}-{uuid.uuid4().hex[:12]}",
            product_id=product_id,
            name=product["name"],
            price=line_item_unit_price(product["base_price"], product["options"], options),
            quantity=1,
            restaurant=product["restaurant"],
            selected_options=options,
        )
        lines = self._load_lines()
        lines.append(line)
        self._write(lines)
        logger.info("Cart line added: %s", line.id)
        return line

    def quick_add(self, shop_id: str, item_name: str) -> CartLineItem:
        """Add a menu item straight from a shop page, merging by its stable id."""
        shop = self.catalog.get_shop(shop_id)
        menu_item = self.catalog.find_menu_item(shop_id, item_name)
        line_id = quick_add_id(shop_id, item_name)
        lines = self._load_lines()
        for line in lines:
            if line.id == line_id:
                line.quantity += 1
                self._write(lines)
                return line
        line = CartLineItem(
            id=line_id,
            product_id=line_id,
            name=menu_item["name"],
            price=menu_item["price"],
            quantity=1,
            restaurant=shop["name"],
        )
        lines.append(line)
        self._write(lines)
        return line

    def add_line(self, line: CartLineItem) -> CartLineItem:
        """Merge a ready-made line (e.g. from favorites) by id."""
        lines = self._load_lines()
        for existing in lines:
            if existing.id == line.id:
                existing.quantity += line.quantity
                self._write(lines)
                return existing
        lines.append(line)
        self._write(lines)
        return line

    def remove_item(self, line_id: str) -> None:
        self._write([line for line in self._load_lines() if line.id != line_id])

    def change_quantity(self, line_id: str, delta: int) -> CartLineItem:
        lines = self._load_lines()
        for line in lines:
            if line.id == line_id:
                line.quantity = max(1, line.quantity + int(delta))
                self._write(lines)
                return line
        raise NotFoundError("Item not found in cart")

    def clear(self) -> None:
        self._write([])

    def save_for_later(self, line_id: str) -> SavedItem:
        lines = self._load_lines()
        line = next((li for li in lines if li.id == line_id), None)
        if line is None:
            raise NotFoundError("Item not found in cart")
        saved = self._load_saved()
        previous_saved = list(saved)
        item = SavedItem(**line.model_dump(), saved_at=datetime.now(timezone.utc))
        saved.append(item)
        self._write_saved(saved)
        try:
            self._write([li for li in lines if li.id != line_id])
        except StorageError:
            logger.error("Cart write failed after saving %s; restoring saved items", line_id)
            self._write_saved(previous_saved)
            raise
        return item

    def move_to_cart(self, saved_id: str) -> CartLineItem:
        """Restore a saved item as a fresh line; the quantity always restarts at 1."""
        saved = self._load_saved()
        item = next((s for s in saved if s.id == saved_id), None)
        if item is None:
            raise NotFoundError("Saved item not found")
        line = CartLineItem(**item.model_dump(exclude={"saved_at", "quantity"}), quantity=1)
        lines = self._load_lines()
        lines.append(line)
        self._write_saved([s for s in saved if s.id != saved_id])
        try:
            self._write(lines)
        except StorageError:
            logger.error("Cart write failed while moving %s; restoring saved items", saved_id)
            self._write_saved(saved)
            raise
        return line

    def delete_saved(self, saved_id: str) -> None:
        self._write_saved([s for s in self._load_saved() if s.id != saved_id])

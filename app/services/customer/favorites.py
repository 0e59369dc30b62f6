import logging
from typing import List

from app.schemas.store import CartLineItem, FavoriteItem
from app.services.customer.cart import CartService
from app.services.errors import DomainInvariantError, NotFoundError
from app.storage.kv import FAVORITES_KEY, KeyValueStore, load_list, read_list

logger = logging.getLogger(__name__)


class Favorites:
    def __init__(self, store: KeyValueStore):
        self.store = store

    def list(self) -> List[FavoriteItem]:
        return [FavoriteItem.model_validate(raw) for raw in read_list(self.store, FAVORITES_KEY)]

    def _load(self) -> List[FavoriteItem]:
        return [FavoriteItem.model_validate(raw) for raw in load_list(self.store, FAVORITES_KEY)]

    def _write(self, items: List[FavoriteItem]) -> None:
        self.store.set(FAVORITES_KEY, [i.to_store() for i in items])

    def get(self, fav_id: str) -> FavoriteItem:
        for item in self.list():
            if item.id == fav_id:
                return item
        raise NotFoundError("Favorite not found")

    def add(self, item: FavoriteItem) -> FavoriteItem:
        items = self._load()
        if any(existing.id == item.id for existing in items):
            raise DomainInvariantError("Item is already in your favorites")
        items.append(item)
        self._write(items)
        return item

    def remove(self, fav_id: str) -> None:
        items = self._load()
        remaining = [i for i in items if i.id != fav_id]
        if len(remaining) == len(items):
            raise NotFoundError("Favorite not found")
        self._write(remaining)

    def add_to_cart(self, fav_id: str, cart: CartService) -> CartLineItem:
        item = self.get(fav_id)
        line = CartLineItem(
            id=item.id,
            product_id=item.id,
            name=item.name,
            price=item.price,
            quantity=1,
            restaurant=item.restaurant,
        )
        logger.info("Favorite %s added to cart", fav_id)
        return cart.add_line(line)

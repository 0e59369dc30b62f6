"""Catalog search with type/price filters, sort options and a short query history."""
import logging
from decimal import Decimal
from typing import List, Literal, Optional

from app.catalog import Catalog, default_catalog, quick_add_id
from app.schemas.store import Money, StoredModel
from app.services.errors import StorageError, ValidationError
from app.storage.kv import SEARCH_HISTORY_KEY, KeyValueStore, load_list, read_list

logger = logging.getLogger(__name__)

RESTAURANT = "restaurant"
FOOD = "food"
RESULT_TYPES = ("all", RESTAURANT, FOOD)

# bucket -> predicate on a two-place price
PRICE_RANGES = {
    "under100": lambda p: p < Decimal("100"),
    "under200": lambda p: p < Decimal("200"),
    "under300": lambda p: p < Decimal("300"),
    "above300": lambda p: p >= Decimal("300"),
}

SORT_OPTIONS = ("relevance", "price-low-high", "price-high-low", "distance", "popularity")

DEFAULT_HISTORY_LIMIT = 10


class SearchResult(StoredModel):
    id: str
    type: Literal["restaurant", "food"]
    name: str
    restaurant: str
    shop_id: str
    price: Optional[Money] = None
    description: str = ""
    distance: Optional[float] = None
    popularity: Optional[int] = None


def search(text: str, catalog: Optional[Catalog] = None) -> List[SearchResult]:
    """Case-insensitive substring match over shop names and menu items, in catalog order."""
    query = (text or "").strip().lower()
    if not query:
        return []
    catalog = catalog or default_catalog
    results = []
    for shop_id, shop in catalog.iter_shops():
        if query in shop["name"].lower():
            results.append(SearchResult(
                id=shop_id,
                type=RESTAURANT,
                name=shop["name"],
                restaurant=shop["name"],
                shop_id=shop_id,
                description=shop.get("description", ""),
                distance=shop.get("distance"),
                popularity=shop.get("popularity"),
            ))
        for item in shop.get("popular_items", []):
            if query in item["name"].lower() or query in item.get("description", "").lower():
                results.append(SearchResult(
                    id=quick_add_id(shop_id, item["name"]),
                    type=FOOD,
                    name=item["name"],
                    restaurant=shop["name"],
                    shop_id=shop_id,
                    price=item["price"],
                    description=item.get("description", ""),
                    distance=shop.get("distance"),
                    popularity=shop.get("popularity"),
                ))
    return results


def filter_results(results: List[SearchResult], type: str = "all", price_range: str = "all") -> List[SearchResult]:
    if type not in RESULT_TYPES:
        raise ValidationError(f"Unknown result type '{type}'")
    if price_range != "all" and price_range not in PRICE_RANGES:
        raise ValidationError(f"Unknown price range '{price_range}'")

    filtered = [r for r in results if type == "all" or r.type == type]
    if price_range != "all":
        in_range = PRICE_RANGES[price_range]
        # price-less results (restaurants) never fall inside a bucket
        filtered = [r for r in filtered if r.price is not None and in_range(r.price)]
    return filtered


def sort_results(results: List[SearchResult], option: str = "relevance") -> List[SearchResult]:
    if option not in SORT_OPTIONS:
        raise ValidationError(f"Unknown sort option '{option}'")
    if option == "relevance":
        return list(results)
    if option == "price-low-high":
        return sorted(results, key=lambda r: r.price or 0)
    if option == "price-high-low":
        return sorted(results, key=lambda r: r.price or 0, reverse=True)
    if option == "distance":
        return sorted(results, key=lambda r: r.distance or 0)
    return sorted(results, key=lambda r: r.popularity or 0, reverse=True)


class SearchHistory:
    def __init__(self, store: KeyValueStore, limit: int = DEFAULT_HISTORY_LIMIT):
        self.store = store
        self.limit = limit

    def entries(self) -> List[str]:
        return [e for e in read_list(self.store, SEARCH_HISTORY_KEY) if isinstance(e, str)]

    def record(self, text: str) -> List[str]:
        text = (text or "").strip()
        if not text:
            return self.entries()
        try:
            previous = [e for e in load_list(self.store, SEARCH_HISTORY_KEY) if isinstance(e, str)]
            history = ([text] + [e for e in previous if e != text])[: self.limit]
            self.store.set(SEARCH_HISTORY_KEY, history)
        except StorageError as e:
            logger.warning("Search history not saved: %s", e)
            return self.entries()
        return history

    def clear(self) -> None:
        self.store.remove(SEARCH_HISTORY_KEY)

from decimal import Decimal

import pytest

from app.catalog import Catalog
from app.services.customer.search import search, filter_results, sort_results, SearchHistory
from app.services.errors import StorageError, ValidationError
from app.storage.kv import SEARCH_HISTORY_KEY, MemoryStore


def test_chicken_matches_food_items_only_in_catalog_order():
    results = search("chicken")
    assert all(r.type == "food" for r in results)
    names = [r.name for r in results]
    assert names.index("Chicken Joy") < names.index("Chicken Inasal Paa")
    assert "Chicken Inasal Pecho" in names
    joy = results[0]
    assert joy.id == "jollibee-chicken-joy"
    assert joy.restaurant == "Jollibee"
    assert joy.price == Decimal("89.00")


def test_shop_name_and_items_both_match():
    results = search("GREENWICH")
    assert [r.type for r in results] == ["restaurant"]
    results = search("pizza")
    assert {r.name for r in results} == {"Hawaiian Overload"}


def test_blank_query():
    assert search("   ") == []


def test_under100_drops_restaurants_and_pricier_items():
    results = search("j") + search("jollibee")
    filtered = filter_results(results, price_range="under100")
    assert filtered
    assert all(r.type == "food" and r.price < Decimal("100") for r in filtered)


def test_type_filter():
    results = search("mang inasal")
    assert [r.type for r in filter_results(results, type="restaurant")] == ["restaurant"]


def test_above300_is_inclusive():
    catalog = Catalog(shops={"s": {
        "name": "Stall",
        "popular_items": [
            {"name": "Feast", "price": "₱300.00", "description": "for sharing"},
            {"name": "Snack", "price": "₱299.99", "description": "for one"},
        ],
    }}, products={})
    results = search("for", catalog)
    assert [r.name for r in filter_results(results, price_range="above300")] == ["Feast"]
    assert [r.name for r in filter_results(results, price_range="under300")] == ["Snack"]


def test_unknown_filter_values():
    with pytest.raises(ValidationError):
        filter_results([], type="drinks")
    with pytest.raises(ValidationError):
        filter_results([], price_range="cheap")
    with pytest.raises(ValidationError):
        sort_results([], "alphabetical")


def test_sorting():
    results = search("chicken")
    prices = [r.price for r in sort_results(results, "price-low-high")]
    assert prices == sorted(prices)
    prices = [r.price for r in sort_results(results, "price-high-low")]
    assert prices == sorted(prices, reverse=True)
    assert sort_results(results, "relevance") == results


def test_missing_distance_sorts_as_zero():
    catalog = Catalog(shops={
        "far": {"name": "Far Grill", "distance": 5.0, "popularity": 10, "popular_items": []},
        "near": {"name": "Near Grill", "popular_items": []},
    }, products={})
    results = search("grill", catalog)
    assert [r.shop_id for r in sort_results(results, "distance")] == ["near", "far"]
    assert [r.shop_id for r in sort_results(results, "popularity")] == ["far", "near"]


def test_history_is_deduplicated_recent_first_and_capped(store):
    history = SearchHistory(store, limit=3)
    for text in ["joy", "pizza", "joy", "lasagna", "inasal"]:
        history.record(text)
    assert history.entries() == ["inasal", "lasagna", "joy"]
    history.clear()
    assert history.entries() == []


class _HistoryReadFails(MemoryStore):
    armed = False

    def get(self, key):
        if key == SEARCH_HISTORY_KEY and self.armed:
            raise StorageError("read timed out")
        return super().get(key)


def test_history_survives_a_failed_read():
    store = _HistoryReadFails()
    history = SearchHistory(store)
    history.record("pizza")
    history.record("burger")
    store.armed = True
    assert history.record("chicken") == []
    store.armed = False
    assert history.entries() == ["burger", "pizza"]

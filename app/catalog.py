"""Static shops and products offered by the customer app."""
import re
from typing import Iterator, Tuple

from app.services.errors import NotFoundError

SHOPS = {
    "jollibee": {
        "name": "Jollibee",
        "rating": 4.8,
        "delivery_time": "20-30 min",
        "description": "The Philippines' largest fast-food chain brand. Bringing great tasting food to the Filipino people for over 40 years.",
        "special_offers": [
            "Free Delivery on orders above ₱500",
            "Get a FREE Peach Mango Pie on orders above ₱1000",
        ],
        "categories": ["Chicken Joy", "Burgers", "Spaghetti", "Rice Meals", "Breakfast", "Desserts"],
        "popular_items": [
            {"name": "Chicken Joy", "price": "₱89.00", "description": "Crispylicious, Juicylicious Chicken Joy"},
            {"name": "Jolly Spaghetti", "price": "₱79.00", "description": "Sweet-style spaghetti with ground meat and hotdog"},
        ],
        "distance": 0.8,
        "popularity": 95,
    },
    "mcdonalds": {
        "name": "McDonald's",
        "rating": 4.7,
        "delivery_time": "15-25 min",
        "description": "Quality food, quick service, and friendly staff - all at McDonald's. Serving happiness to Filipinos since 1981.",
        "special_offers": [
            "₱50 OFF on orders above ₱500",
            "Free McFlurry on orders above ₱800",
        ],
        "categories": ["Burgers", "Chicken", "Rice Meals", "Breakfast", "Desserts", "Beverages"],
        "popular_items": [
            {"name": "Big Mac", "price": "₱169.00", "description": "Iconic burger with two all-beef patties"},
        ],
        "distance": 1.2,
        "popularity": 92,
    },
    "greenwich": {
        "name": "Greenwich",
        "rating": 4.6,
        "delivery_time": "25-35 min",
        "description": "The Philippines' favorite pizza chain. Best pizza and pasta for sharing with family and friends.",
        "special_offers": [
            "20% OFF on all Pizzas every Monday",
            "Free Lasagna on orders above ₱1000",
        ],
        "categories": ["Pizza", "Pasta", "Chicken", "Rice Meals", "Appetizers", "Beverages"],
        "popular_items": [
            {"name": "Hawaiian Overload", "price": "₱299.00", "description": "Pizza loaded with ham, pineapple, and cheese"},
            {"name": "Lasagna Supreme", "price": "₱129.00", "description": "Rich and creamy lasagna with meat sauce"},
        ],
        "distance": 1.5,
        "popularity": 88,
    },
    "manginasal": {
        "name": "Mang Inasal",
        "rating": 4.5,
        "delivery_time": "20-30 min",
        "description": "Home of the best-tasting chicken inasal. Filipino favorite with unlimited rice.",
        "special_offers": [
            "Extra Unlimited Rice on all Chicken Meals",
            "Free Soup with every order",
        ],
        "categories": ["Chicken Inasal", "Paa", "Pecho", "Rice Meals", "Soups", "Beverages"],
        "popular_items": [
            {"name": "Chicken Inasal Paa", "price": "₱129.00", "description": "Grilled chicken leg quarter with unlimited rice"},
            {"name": "Chicken Inasal Pecho", "price": "₱139.00", "description": "Grilled chicken breast with unlimited rice"},
        ],
        "distance": 2.1,
        "popularity": 85,
    },
}


def _addons(*options):
    return [{"title": "Optional Add-ons", "items": [
        {"name": name, "price": price, "available": True} for name, price in options
    ]}]


PRODUCTS = {
    "jollibee-chicken-joy": {
        "name": "Chicken Joy",
        "base_price": "₱89.00",
        "description": "Crispylicious, Juicylicious Chicken Joy",
        "restaurant": "Jollibee",
        "shop_id": "jollibee",
        "options": _addons(("Extra Rice", "₱35.00"), ("Gravy", "₱15.00")),
    },
    "jollibee-jolly-spaghetti": {
        "name": "Jolly Spaghetti",
        "base_price": "₱79.00",
        "description": "Sweet-style spaghetti with ground meat and hotdog",
        "restaurant": "Jollibee",
        "shop_id": "jollibee",
        "options": _addons(("Extra Cheese", "₱20.00")),
    },
    "mcdonalds-big-mac": {
        "name": "Big Mac",
        "base_price": "₱169.00",
        "description": "Iconic burger with two all-beef patties",
        "restaurant": "McDonald's",
        "shop_id": "mcdonalds",
        "options": _addons(("Extra Cheese", "₱25.00"), ("Large Fries", "₱65.00")),
    },
    "greenwich-hawaiian-overload": {
        "name": "Hawaiian Overload",
        "base_price": "₱299.00",
        "description": "Pizza loaded with ham, pineapple, and cheese",
        "restaurant": "Greenwich",
        "shop_id": "greenwich",
        "options": [
            {"title": "Size Options", "items": [
                {"name": "Large Size", "price": "₱150.00", "available": True},
            ]},
            {"title": "Extra Toppings", "items": [
                {"name": "Extra Cheese", "price": "₱50.00", "available": True},
                {"name": "Extra Ham", "price": "₱45.00", "available": True},
            ]},
        ],
    },
    "greenwich-lasagna-supreme": {
        "name": "Lasagna Supreme",
        "base_price": "₱129.00",
        "description": "Rich and creamy lasagna with meat sauce",
        "restaurant": "Greenwich",
        "shop_id": "greenwich",
        "options": _addons(("Extra Cheese", "₱35.00")),
    },
    "manginasal-chicken-inasal-paa": {
        "name": "Chicken Inasal Paa",
        "base_price": "₱129.00",
        "description": "Grilled chicken leg quarter with unlimited rice",
        "restaurant": "Mang Inasal",
        "shop_id": "manginasal",
        "options": _addons(("Extra Chicken Oil", "₱15.00"), ("Extra Sauce", "₱10.00")),
    },
    "manginasal-chicken-inasal-pecho": {
        "name": "Chicken Inasal Pecho",
        "base_price": "₱139.00",
        "description": "Grilled chicken breast with unlimited rice",
        "restaurant": "Mang Inasal",
        "shop_id": "manginasal",
        "options": _addons(("Extra Chicken Oil", "₱15.00"), ("Extra Sauce", "₱10.00")),
    },
}


class Catalog:
    """Read-only view over shop and product records."""

    def __init__(self, shops=None, products=None):
        self.shops = SHOPS if shops is None else shops
        self.products = PRODUCTS if products is None else products

    def iter_shops(self) -> Iterator[Tuple[str, dict]]:
        return iter(self.shops.items())

    def get_shop(self, shop_id: str) -> dict:
        shop = self.shops.get(shop_id)
        if not shop:
            raise NotFoundError("Shop not found")
        return shop

    def get_product(self, product_id: str) -> dict:
        product = self.products.get(product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product

    def find_menu_item(self, shop_id: str, item_name: str) -> dict:
        for item in self.get_shop(shop_id)["popular_items"]:
            if item["name"] == item_name:
                return item
        raise NotFoundError(f"'{item_name}' is not on the menu")


def slugify(name: str) -> str:
    return re.sub(r"\s+", "-", name.lower())


def quick_add_id(shop_id: str, item_name: str) -> str:
    return f"{shop_id}-{slugify(item_name)}"


default_catalog = Catalog()

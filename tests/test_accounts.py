import pydantic
import pytest

from app.services.customer.accounts import AddressBook, PaymentMethods
from app.services.customer.cart import CartService
from app.services.customer.favorites import Favorites
from app.schemas.store import FavoriteItem
from app.services.errors import DomainInvariantError, NotFoundError, StorageError, ValidationError
from app.storage.kv import ADDRESSES_KEY, FAVORITES_KEY, PAYMENT_METHODS_KEY, MemoryStore


def _address(book, street, **extra):
    return book.add(street=street, city="Quezon City", state="NCR", zip_code="1100", **extra)


def _defaults(entries):
    return [e.id for e in entries if e.is_default]


def test_first_address_becomes_default(store):
    book = AddressBook(store)
    first = _address(book, "1 Katipunan")
    second = _address(book, "2 Katipunan")
    assert first.is_default and not second.is_default
    assert _defaults(book.list()) == [first.id]


def test_missing_address_fields(store):
    with pytest.raises(ValidationError):
        AddressBook(store).add(street="1 Katipunan", city="", state="NCR", zip_code="1100")
    assert AddressBook(store).list() == []


def test_set_default_keeps_exactly_one(store):
    book = AddressBook(store)
    _address(book, "1 Katipunan")
    second = _address(book, "2 Katipunan")
    book.set_default(second.id)
    assert _defaults(book.list()) == [second.id]


def test_add_as_default(store):
    book = AddressBook(store)
    _address(book, "1 Katipunan")
    third = _address(book, "3 Katipunan", is_default=True)
    assert _defaults(book.list()) == [third.id]


def test_deleting_default_promotes_first_remaining(store):
    book = AddressBook(store)
    first = _address(book, "1 Katipunan")
    second = _address(book, "2 Katipunan")
    book.delete(first.id)
    assert _defaults(book.list()) == [second.id]
    book.delete(second.id)
    assert book.list() == []
    assert book.default() is None


def test_update_address(store):
    book = AddressBook(store)
    first = _address(book, "1 Katipunan")
    updated = book.update(first.id, street="99 Aurora Blvd")
    assert updated.street == "99 Aurora Blvd"
    assert updated.is_default
    with pytest.raises(NotFoundError):
        book.update("missing", street="x")


def test_payment_methods_seeded_with_cash_default(store):
    methods = PaymentMethods(store)
    assert [m.id for m in methods.list()] == ["cash-1", "card-1", "gcash-1", "maya-1"]
    assert methods.default().id == "cash-1"


def test_payment_default_switch_and_promote(store):
    methods = PaymentMethods(store)
    methods.set_default("maya-1")
    assert _defaults(methods.list()) == ["maya-1"]
    methods.delete("maya-1")
    assert _defaults(methods.list()) == ["cash-1"]


def test_favorites_reject_duplicates(store):
    favorites = Favorites(store)
    item = FavoriteItem(id="mcdonalds-big-mac", name="Big Mac", price="₱169.00", restaurant="McDonald's")
    favorites.add(item)
    with pytest.raises(DomainInvariantError):
        favorites.add(item)
    assert len(favorites.list()) == 1


def test_favorite_to_cart_merges_by_id(store):
    favorites = Favorites(store)
    cart = CartService(store)
    favorites.add(FavoriteItem(id="mcdonalds-big-mac", name="Big Mac", price="₱169.00", restaurant="McDonald's"))
    cart.quick_add("mcdonalds", "Big Mac")
    line = favorites.add_to_cart("mcdonalds-big-mac", cart)
    assert line.quantity == 2
    assert len(cart.items()) == 1


def test_remove_unknown_favorite(store):
    with pytest.raises(NotFoundError):
        Favorites(store).remove("nope")


class _FlakyReads(MemoryStore):
    """Every read raises while ``armed``."""

    armed = False

    def get(self, key):
        if self.armed:
            raise StorageError("read timed out")
        return super().get(key)


def test_unreadable_payment_methods_are_not_reseeded():
    store = _FlakyReads()
    methods = PaymentMethods(store)
    methods.set_default("gcash-1")
    methods.delete("card-1")

    store.armed = True
    assert [m.id for m in methods.list()] == ["cash-1", "card-1", "gcash-1", "maya-1"]
    with pytest.raises(StorageError):
        methods.set_default("cash-1")
    store.armed = False

    assert [m.id for m in methods.list()] == ["cash-1", "gcash-1", "maya-1"]
    assert _defaults(methods.list()) == ["gcash-1"]
    assert [raw["id"] for raw in store.get(PAYMENT_METHODS_KEY)] == ["cash-1", "gcash-1", "maya-1"]


def test_unreadable_addresses_are_not_overwritten():
    store = _FlakyReads()
    book = AddressBook(store)
    first = _address(book, "1 Katipunan")
    store.armed = True
    with pytest.raises(StorageError):
        _address(book, "2 Katipunan")
    with pytest.raises(StorageError):
        book.delete(first.id)
    store.armed = False
    assert [a.street for a in book.list()] == ["1 Katipunan"]
    assert len(store.get(ADDRESSES_KEY)) == 1


def test_unreadable_favorites_are_not_overwritten():
    store = _FlakyReads()
    favorites = Favorites(store)
    favorites.add(FavoriteItem(id="mcdonalds-big-mac", name="Big Mac", price="₱169.00", restaurant="McDonald's"))
    store.armed = True
    assert favorites.list() == []
    with pytest.raises(StorageError):
        favorites.add(FavoriteItem(id="jollibee-chicken-joy", name="Chicken Joy", price="₱89.00"))
    store.armed = False
    assert [f["id"] for f in store.get(FAVORITES_KEY)] == ["mcdonalds-big-mac"]


def test_favorite_price_cannot_be_negative_or_nan():
    for price in ("-1", "NaN"):
        with pytest.raises(pydantic.ValidationError):
            FavoriteItem(id="x", name="X", price=price)

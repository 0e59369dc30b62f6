import pytest

P = "/api/v1/customer"

ADDRESS = {"label": "Home", "street": "123 Rizal Ave", "city": "Manila", "state": "NCR", "zip_code": "1000"}


@pytest.fixture()
def other_device():
    return {"X-Device-ID": "device-test-2"}


def test_device_header_required(client):
    r = client.get(f"{P}/cart")
    assert r.status_code == 400
    assert "X-Device-ID" in r.get_json()["message"]


def test_cart_flow(client, device, other_device):
    r = client.post(f"{P}/cart/items", json={"product_id": "jollibee-chicken-joy", "selected_options": ["Extra Rice"]}, headers=device)
    assert r.status_code == 201
    line = r.get_json()["data"]
    assert line["price"] == "₱124.00"
    assert line["selectedOptions"] == ["Extra Rice"]

    for _ in range(2):
        r = client.post(f"{P}/cart/quick-add", json={"shop_id": "jollibee", "item_name": "Chicken Joy"}, headers=device)
        assert r.status_code == 200
    assert r.get_json()["data"]["id"] == "jollibee-chicken-joy"
    assert r.get_json()["data"]["quantity"] == 2

    cart = client.get(f"{P}/cart", headers=device).get_json()["data"]
    assert cart["count"] == 3
    assert cart["subtotal"] == "₱302.00"
    assert client.get(f"{P}/cart/count", headers=device).get_json()["data"] == {"count": 3}
    assert client.get(f"{P}/cart/count", headers=other_device).get_json()["data"] == {"count": 0}

    r = client.post(f"{P}/cart/items/jollibee-chicken-joy/quantity", json={"delta": -5}, headers=device)
    assert r.get_json()["data"]["quantity"] == 1

    r = client.delete(f"{P}/cart/items/{line['id']}", headers=device)
    assert r.get_json()["data"]["count"] == 1

    r = client.delete(f"{P}/cart", headers=device)
    assert r.status_code == 200
    assert client.get(f"{P}/cart/count", headers=device).get_json()["data"]["count"] == 0


def test_cart_errors(client, device):
    r = client.post(f"{P}/cart/items", json={"product_id": "nope"}, headers=device)
    assert r.status_code == 404
    r = client.post(f"{P}/cart/items", json={"product_id": "jollibee-chicken-joy", "selected_options": ["Caviar"]}, headers=device)
    assert r.status_code == 400
    r = client.post(f"{P}/cart/items/missing/quantity", json={"delta": 1}, headers=device)
    assert r.status_code == 404
    r = client.post(f"{P}/cart/items", json={}, headers=device)
    assert r.status_code == 400
    assert r.get_json()["errors"]


def test_save_for_later_and_move_back(client, device):
    client.post(f"{P}/cart/quick-add", json={"shop_id": "mcdonalds", "item_name": "Big Mac"}, headers=device)
    client.post(f"{P}/cart/items/mcdonalds-big-mac/quantity", json={"delta": 2}, headers=device)

    r = client.post(f"{P}/cart/items/mcdonalds-big-mac/save", headers=device)
    assert r.status_code == 200
    assert "savedAt" in r.get_json()["data"]
    assert client.get(f"{P}/cart/count", headers=device).get_json()["data"]["count"] == 0

    saved = client.get(f"{P}/saved", headers=device).get_json()["data"]
    assert [s["id"] for s in saved] == ["mcdonalds-big-mac"]

    r = client.post(f"{P}/saved/mcdonalds-big-mac/move", headers=device)
    assert r.get_json()["data"]["quantity"] == 1
    assert client.get(f"{P}/saved", headers=device).get_json()["data"] == []
    assert client.post(f"{P}/saved/mcdonalds-big-mac/move", headers=device).status_code == 404


def test_place_and_track_order(client, device):
    r = client.post(f"{P}/orders", json={}, headers=device)
    assert r.status_code == 409

    client.post(f"{P}/cart/quick-add", json={"shop_id": "greenwich", "item_name": "Lasagna Supreme"}, headers=device)
    r = client.post(f"{P}/orders", json={"order_type": "delivery"}, headers=device)
    assert r.status_code == 400
    assert r.get_json()["message"] == "Please select a delivery address"

    assert client.post(f"{P}/addresses", json=ADDRESS, headers=device).status_code == 201
    r = client.post(f"{P}/orders", json={"order_type": "delivery"}, headers=device)
    assert r.status_code == 201
    order = r.get_json()["data"]
    assert order["id"].startswith("UFF-")
    assert order["subtotal"] == "₱129.00"
    assert order["deliveryFee"] == "₱50.00"
    assert order["total"] == "₱179.00"
    assert order["paymentMethod"]["type"] == "cash"
    assert order["deliveryAddress"]["street"] == "123 Rizal Ave"
    assert client.get(f"{P}/cart/count", headers=device).get_json()["data"]["count"] == 0

    history = client.get(f"{P}/orders", headers=device).get_json()["data"]
    assert [o["id"] for o in history] == [order["id"]]

    tracking = client.get(f"{P}/orders/{order['id']}/tracking", headers=device).get_json()["data"]
    assert [s["isCompleted"] for s in tracking["timeline"]] == [True] + [False] * 5
    assert tracking["timeline"][4]["description"] == "Your order is on the way"

    r = client.post(f"{P}/orders/{order['id']}/advance", headers=device)
    assert r.get_json()["data"]["status"] == "processing"
    assert client.get(f"{P}/orders/UFF-0", headers=device).status_code == 404


def test_pickup_order_has_no_fee(client, device):
    client.post(f"{P}/cart/quick-add", json={"shop_id": "jollibee", "item_name": "Jolly Spaghetti"}, headers=device)
    r = client.post(f"{P}/orders", json={"order_type": "pickup", "payment_method_id": "gcash-1"}, headers=device)
    assert r.status_code == 201
    order = r.get_json()["data"]
    assert order["deliveryFee"] == "₱0.00"
    assert order["total"] == "₱79.00"
    assert order["deliveryAddress"] is None
    assert order["paymentMethod"]["id"] == "gcash-1"


def test_unknown_order_type(client, device):
    client.post(f"{P}/cart/quick-add", json={"shop_id": "jollibee", "item_name": "Jolly Spaghetti"}, headers=device)
    r = client.post(f"{P}/orders", json={"order_type": "drone"}, headers=device)
    assert r.status_code == 400


def test_catalog_and_search(client, device):
    shops = client.get(f"{P}/shops", headers=device).get_json()["data"]
    assert {s["id"] for s in shops} == {"jollibee", "mcdonalds", "greenwich", "manginasal"}
    assert client.get(f"{P}/shops/jollibee", headers=device).get_json()["data"]["name"] == "Jollibee"
    assert client.get(f"{P}/shops/kfc", headers=device).status_code == 404
    assert client.get(f"{P}/products/mcdonalds-big-mac", headers=device).status_code == 200

    r = client.get(f"{P}/search?q=chicken&sort=price-high-low", headers=device)
    names = [res["name"] for res in r.get_json()["data"]]
    assert names == ["Chicken Inasal Pecho", "Chicken Inasal Paa", "Chicken Joy"]

    r = client.get(f"{P}/search?q=chicken&price_range=under100", headers=device)
    assert [res["name"] for res in r.get_json()["data"]] == ["Chicken Joy"]

    client.get(f"{P}/search?q=pizza", headers=device)
    client.get(f"{P}/search?q=%20%20", headers=device)
    history = client.get(f"{P}/search/history", headers=device).get_json()["data"]
    assert history == ["pizza", "chicken"]

    assert client.delete(f"{P}/search/history", headers=device).status_code == 200
    assert client.get(f"{P}/search/history", headers=device).get_json()["data"] == []


def test_addresses(client, device):
    first = client.post(f"{P}/addresses", json=ADDRESS, headers=device).get_json()["data"]
    assert first["isDefault"] is True
    second = client.post(f"{P}/addresses", json={**ADDRESS, "label": "Work", "street": "1 Ayala Ave"}, headers=device).get_json()["data"]
    assert second["isDefault"] is False

    r = client.post(f"{P}/addresses", json={"street": "x"}, headers=device)
    assert r.status_code == 400

    r = client.put(f"{P}/addresses/{second['id']}", json={"instructions": "Lobby"}, headers=device)
    assert r.get_json()["data"]["instructions"] == "Lobby"
    assert r.get_json()["data"]["street"] == "1 Ayala Ave"

    assert client.post(f"{P}/addresses/{second['id']}/default", headers=device).status_code == 200
    assert client.delete(f"{P}/addresses/{second['id']}", headers=device).status_code == 200
    remaining = client.get(f"{P}/addresses", headers=device).get_json()["data"]
    assert [(a["id"], a["isDefault"]) for a in remaining] == [(first["id"], True)]
    assert client.delete(f"{P}/addresses/{second['id']}", headers=device).status_code == 404


def test_payment_methods(client, device):
    methods = client.get(f"{P}/payment-methods", headers=device).get_json()["data"]
    assert [m["type"] for m in methods] == ["cash", "card", "gcash", "maya"]
    assert [m["id"] for m in methods if m["isDefault"]] == ["cash-1"]

    client.post(f"{P}/payment-methods/maya-1/default", headers=device)
    client.delete(f"{P}/payment-methods/maya-1", headers=device)
    methods = client.get(f"{P}/payment-methods", headers=device).get_json()["data"]
    assert [m["id"] for m in methods if m["isDefault"]] == ["cash-1"]
    assert client.post(f"{P}/payment-methods/paypal-1/default", headers=device).status_code == 404


def test_favorites(client, device):
    item = {"id": "jollibee-chicken-joy", "name": "Chicken Joy", "price": "₱89.00", "restaurant": "Jollibee", "shop_id": "jollibee"}
    assert client.post(f"{P}/favorites", json=item, headers=device).status_code == 201
    assert client.post(f"{P}/favorites", json=item, headers=device).status_code == 409

    favorites = client.get(f"{P}/favorites", headers=device).get_json()["data"]
    assert favorites[0]["shopId"] == "jollibee"

    r = client.post(f"{P}/favorites/jollibee-chicken-joy/cart", headers=device)
    assert r.get_json()["data"]["price"] == "₱89.00"
    assert client.get(f"{P}/cart/count", headers=device).get_json()["data"]["count"] == 1

    assert client.delete(f"{P}/favorites/jollibee-chicken-joy", headers=device).status_code == 200
    assert client.delete(f"{P}/favorites/jollibee-chicken-joy", headers=device).status_code == 404


def test_session_endpoints(client, device):
    assert client.get(f"{P}/session", headers=device).status_code == 404

    r = client.post(f"{P}/session/register", json={
        "name": "Juan", "email": "juan@example.com", "phone": "09171234567",
        "password": "secret1", "confirm_password": "secret2",
    }, headers=device)
    assert r.status_code == 400
    assert r.get_json()["message"] == "Passwords do not match"

    r = client.post(f"{P}/session/register", json={
        "name": "Juan", "email": "juan@example.com", "phone": "09171234567",
        "password": "secret1", "confirm_password": "secret1",
    }, headers=device)
    assert r.status_code == 201
    assert client.get(f"{P}/session", headers=device).get_json()["data"]["name"] == "Juan"

    r = client.put(f"{P}/session/profile", json={"address": "Makati"}, headers=device)
    assert r.get_json()["data"]["address"] == "Makati"
    r = client.put(f"{P}/session/profile", json={"email": "bad"}, headers=device)
    assert r.status_code == 400

    assert client.delete(f"{P}/session", headers=device).status_code == 200
    assert client.get(f"{P}/session", headers=device).status_code == 404
    assert client.put(f"{P}/session/profile", json={"name": "X"}, headers=device).status_code == 404


def test_login_and_oauth_session(client, device):
    r = client.post(f"{P}/session/login", json={"email": "ana@example.com", "password": "pw"}, headers=device)
    assert r.get_json()["data"]["name"] == "User"

    r = client.post(f"{P}/session/oauth", json={
        "token": "server-issued", "user": {"id": "42", "name": "Ana", "email": "ana@example.com"},
    }, headers=device)
    assert r.status_code == 200
    assert client.get(f"{P}/session", headers=device).get_json()["data"]["id"] == "42"

    r = client.post(f"{P}/session/oauth", json={"token": "t", "user": {"id": "1"}}, headers=device)
    assert r.status_code == 400

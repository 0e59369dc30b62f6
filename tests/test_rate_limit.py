from conftest import load_app, bearer
from app.version import API_PREFIX


def test_checkout_rate_limit(monkeypatch):
    app = load_app(monkeypatch, CHECKOUT_LIMIT_PER_IP="2 per minute")
    client = app.test_client()
    headers = {"X-Device-ID": "limit-device"}
    codes = [client.post(f"{API_PREFIX}/customer/orders", json={}, headers=headers).status_code for _ in range(3)]
    assert codes == [409, 409, 429]
    assert client.get(f"{API_PREFIX}/customer/cart", headers=headers).status_code == 200


def test_oauth_exchange_rate_limit(monkeypatch):
    app = load_app(monkeypatch, AUTH_LIMIT_PER_IP="3 per minute")
    client = app.test_client()
    for _ in range(4):
        r = client.post(f"{API_PREFIX}/auth/google/token", json={})
    assert r.status_code == 429
    assert r.get_json()["status"] == "error"


def test_merchant_order_submission_rate_limit(monkeypatch):
    app = load_app(monkeypatch, CHECKOUT_LIMIT_PER_IP="1 per minute")
    client = app.test_client()
    toks = client.post("/__auth/login_stub", json={"role": "customer"}).get_json()["data"]
    first = client.post(f"{API_PREFIX}/orders", json={"merchant_id": 1, "items": [{"product_id": 1}]}, headers=bearer(toks["access"]))
    second = client.post(f"{API_PREFIX}/orders", json={"merchant_id": 1, "items": [{"product_id": 1}]}, headers=bearer(toks["access"]))
    assert first.status_code == 404
    assert second.status_code == 429

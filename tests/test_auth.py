import datetime as dt

import jwt
import requests

from models.user import User
from conftest import login_stub, bearer


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def json(self):
        return self.payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


def fake_get(monkeypatch, payload=None, status_code=200, exc=None):
    calls = []

    def _get(url, **kwargs):
        calls.append((url, kwargs))
        if exc is not None:
            raise exc
        return FakeResponse(payload, status_code)

    monkeypatch.setattr("app.services.auth.requests.get", _get)
    return calls


def test_google_sign_in_creates_user_once(client, monkeypatch):
    calls = fake_get(monkeypatch, {"sub": "g-123", "email": "juan@example.com", "name": "Juan", "picture": "http://img/juan.png"})

    r = client.post("/api/v1/auth/google/token", json={"access_token": "goog-token"})
    assert r.status_code == 200
    body = r.get_json()
    assert body["role"] == "customer"
    assert body["access_token"] and body["refresh_token"]
    assert body["expires_in"] == 15 * 60
    assert body["user"]["provider"] == "google"
    assert body["user"]["picture"] == "http://img/juan.png"
    assert calls[0][1]["headers"] == {"Authorization": "Bearer goog-token"}

    again = client.post("/api/v1/auth/google/token", json={"access_token": "goog-token"}).get_json()
    assert again["user"]["id"] == body["user"]["id"]
    assert User.query.filter_by(provider="google").count() == 1


def test_facebook_sign_in(client, monkeypatch):
    calls = fake_get(monkeypatch, {
        "id": "fb-9", "name": "Ana", "email": "ana@example.com",
        "picture": {"data": {"url": "http://img/ana.png"}},
    })
    r = client.post("/api/v1/auth/facebook/token", json={"access_token": "fb-token"})
    assert r.status_code == 200
    user = r.get_json()["user"]
    assert user["provider"] == "facebook"
    assert user["picture"] == "http://img/ana.png"
    assert calls[0][1]["params"]["access_token"] == "fb-token"


def test_rejected_provider_token(client, monkeypatch):
    fake_get(monkeypatch, {"error": "invalid_token"}, status_code=401)
    r = client.post("/api/v1/auth/google/token", json={"access_token": "bad"})
    assert r.status_code == 401
    assert r.get_json()["message"] == "Invalid token"


def test_profile_without_id_is_rejected(client, monkeypatch):
    fake_get(monkeypatch, {"email": "nobody@example.com"})
    r = client.post("/api/v1/auth/google/token", json={"access_token": "tok"})
    assert r.status_code == 401


def test_provider_outage_is_retried_then_502(client, monkeypatch):
    calls = fake_get(monkeypatch, exc=requests.ConnectionError("down"))
    r = client.post("/api/v1/auth/google/token", json={"access_token": "tok"})
    assert r.status_code == 502
    assert r.get_json()["message"] == "Authentication failed"
    assert len(calls) == 3


def test_missing_access_token(client):
    r = client.post("/api/v1/auth/google/token", json={})
    assert r.status_code == 400
    assert r.get_json()["errors"][0]["loc"] == ["access_token"]


def test_refresh_flow(client):
    toks = login_stub(client, "customer", email="refresh@example.com")
    r = client.post("/api/v1/auth/refresh", json={"refresh_token": toks["refresh"]})
    assert r.status_code == 200
    new_access = r.get_json()["access_token"]
    assert client.get("/api/v1/user", headers=bearer(new_access)).status_code == 200

    r = client.post("/api/v1/auth/refresh", json={"refresh_token": toks["access"]})
    assert r.status_code == 401


def test_current_user(client):
    toks = login_stub(client, "customer", email="me@example.com", name="Me")
    r = client.get("/api/v1/user", headers=bearer(toks["access"]))
    assert r.status_code == 200
    assert r.get_json()["data"]["email"] == "me@example.com"

    assert client.get("/api/v1/user").status_code == 401
    assert client.get("/api/v1/user", headers=bearer("garbage")).status_code == 401

    merchant = login_stub(client, "merchant")
    assert client.get("/api/v1/user", headers=bearer(merchant["access"])).status_code == 403


def test_expired_access_token_blocked(client, app):
    past = dt.datetime.now(dt.timezone.utc) - dt.timedelta(seconds=1)
    expired = jwt.encode({"sub": "1", "role": "customer", "type": "access", "exp": past}, app.config["JWT_SECRET"], algorithm="HS256")
    r = client.get("/api/v1/user", headers=bearer(expired))
    assert r.status_code == 401
    assert r.get_json()["message"] == "token expired"

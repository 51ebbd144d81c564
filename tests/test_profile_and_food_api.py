import pytest

from chefbot.external import auth_service
from tests.conftest import make_food


class FakeResponse:
    def __init__(self, status_code, payload=None):
        self.status_code = status_code
        self._payload = payload or {}

    def json(self):
        return self._payload


def test_profile_is_created_from_token(client, auth_headers):
    res = client.get("/api/user-profile", headers=auth_headers("carol@example.com", "Carol"))

    assert res.status_code == 200
    body = res.get_json()
    assert body["email"] == "carol@example.com"
    assert body["name"] == "Carol"
    assert body["role"] == "user"
    assert body["dietaryPreferences"] == []


def test_update_profile(client, auth_headers):
    headers = auth_headers()

    res = client.put("/api/user-profile", json={"dietaryPreferences": ["vegan"]}, headers=headers)
    assert res.status_code == 200
    assert res.get_json()["dietaryPreferences"] == ["vegan"]

    res = client.put("/api/user-profile", json={"dietaryPreferences": ["carnivore"]}, headers=headers)
    assert res.status_code == 400


def test_sync_profile_from_auth_service(client, auth_headers, monkeypatch):
    calls = []

    def fake_get(url, headers=None, timeout=None):
        calls.append(headers)
        return FakeResponse(200, {"name": "Alice Liddell"})

    monkeypatch.setattr(auth_service.requests, "get", fake_get)
    headers = auth_headers()

    res = client.post("/api/user-profile", json={"dietaryPreferences": ["vegetarian"]}, headers=headers)

    assert res.status_code == 200
    assert res.get_json()["name"] == "Alice Liddell"
    assert res.get_json()["dietaryPreferences"] == ["vegetarian"]
    assert calls[0]["Authorization"] == headers["Authorization"]


def test_sync_profile_when_auth_service_fails(client, auth_headers, monkeypatch):
    monkeypatch.setattr(auth_service.requests, "get", lambda *a, **kw: FakeResponse(503))

    res = client.post("/api/user-profile", json={}, headers=auth_headers())

    assert res.status_code == 400


def test_food_listing_filters(app, client):
    with app.app_context():
        make_food("Tofu Bowl", is_vegan=True, price=12)
        make_food("Steak", price=30)
        make_food("Old Special", is_available=False)

    names = [f["name"] for f in client.get("/api/food").get_json()]
    assert names == ["Steak", "Tofu Bowl"]

    vegan = client.get("/api/food?isVegan=true").get_json()
    assert [f["name"] for f in vegan] == ["Tofu Bowl"]

    cheap = client.get("/api/food?maxPrice=20&sort=price_asc").get_json()
    assert [f["name"] for f in cheap] == ["Tofu Bowl"]

    assert client.get("/api/food?minPrice=abc").status_code == 400


def test_food_detail_and_missing_item(app, client):
    with app.app_context():
        food_id = make_food("Steak").id

    res = client.get(f"/api/food/{food_id}")
    assert res.status_code == 200
    assert res.get_json()["nutritionalInfo"]["calories"] == 800

    assert client.get("/api/food/999").status_code == 404


def test_review_updates_average_rating(app, client, auth_headers):
    with app.app_context():
        food_id = make_food("Steak").id

    alice = auth_headers()
    bob = auth_headers("bob@example.com", "Bob")
    client.post(f"/api/food/{food_id}/reviews", json={"rating": 5}, headers=alice)
    res = client.post(f"/api/food/{food_id}/reviews", json={"rating": 2, "review": "Dry"}, headers=bob)

    assert res.status_code == 201
    assert res.get_json()["averageRating"] == pytest.approx(3.5)

    again = client.post(f"/api/food/{food_id}/reviews", json={"rating": 4}, headers=alice)
    assert again.status_code == 400

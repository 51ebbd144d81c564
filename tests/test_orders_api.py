import pytest

from chefbot.extensions import db
from chefbot.models import UserProfile
from tests.conftest import CHECKOUT, make_food


@pytest.fixture
def pizza_id(app):
    with app.app_context():
        return make_food(price=25).id


def add_to_cart(client, headers, food_id, quantity=1):
    return client.post("/api/cart", json={"foodItemId": food_id, "quantity": quantity}, headers=headers)


def place_order(client, headers, food_id):
    add_to_cart(client, headers, food_id)
    return client.post("/api/orders", json=CHECKOUT, headers=headers)


def promote_to_admin(app, email):
    with app.app_context():
        UserProfile.query.filter_by(user_email=email).one().role = "admin"
        db.session.commit()


def test_checkout_flow(client, auth_headers, pizza_id):
    headers = auth_headers()

    res = add_to_cart(client, headers, pizza_id)
    assert res.status_code == 201
    assert res.get_json()["totalAmount"] == 25

    res = client.post("/api/orders", json=CHECKOUT, headers=headers)

    assert res.status_code == 201
    order = res.get_json()
    assert order["totalAmount"] == pytest.approx(27.0)
    assert order["taxAmount"] == pytest.approx(2.0)
    assert order["deliveryFee"] == 0
    assert order["orderStatus"] == "placed"
    assert order["statusHistory"][0]["note"] == "Order placed successfully"
    assert client.get("/api/cart", headers=headers).get_json()["items"] == []

    listed = client.get("/api/orders", headers=headers).get_json()
    assert [o["id"] for o in listed] == [order["id"]]


def test_empty_cart_checkout(client, auth_headers):
    res = client.post("/api/orders", json=CHECKOUT, headers=auth_headers())
    assert res.status_code == 400
    assert res.get_json() == {"message": "Cart is empty"}


def test_other_users_order_is_not_found(client, auth_headers, pizza_id):
    order = place_order(client, auth_headers(), pizza_id).get_json()

    res = client.get(f"/api/orders/{order['id']}", headers=auth_headers("bob@example.com", "Bob"))

    assert res.status_code == 404
    assert res.get_json() == {"message": "Order not found"}


def test_status_update_needs_admin(app, client, auth_headers, pizza_id):
    headers = auth_headers()
    order = place_order(client, headers, pizza_id).get_json()
    url = f"/api/orders/{order['id']}/status"

    assert client.put(url, json={"status": "confirmed"}, headers=headers).status_code == 403

    admin = auth_headers("admin@example.com", "Admin")
    client.get("/api/user-profile", headers=admin)
    promote_to_admin(app, "admin@example.com")

    res = client.put(url, json={"status": "confirmed"}, headers=admin)
    assert res.status_code == 200
    assert res.get_json()["orderStatus"] == "confirmed"


def test_cancel_then_cancel_again(client, auth_headers, pizza_id):
    headers = auth_headers()
    order = place_order(client, headers, pizza_id).get_json()
    url = f"/api/orders/{order['id']}/cancel"

    first = client.put(url, headers=headers)
    second = client.put(url, headers=headers)

    assert first.status_code == 200
    assert first.get_json()["orderStatus"] == "cancelled"
    assert second.status_code == 400
    assert len(client.get(f"/api/orders/{order['id']}", headers=headers).get_json()["statusHistory"]) == 2


def test_feedback_before_delivery(client, auth_headers, pizza_id):
    headers = auth_headers()
    order = place_order(client, headers, pizza_id).get_json()

    res = client.put(f"/api/orders/{order['id']}/feedback", json={"rating": 5}, headers=headers)

    assert res.status_code == 400
    assert client.get(f"/api/orders/{order['id']}", headers=headers).get_json()["rating"] is None


def test_add_unknown_food_to_cart(client, auth_headers):
    res = add_to_cart(client, auth_headers(), 12345)
    assert res.status_code == 404
    assert res.get_json() == {"message": "Food item not found"}


def test_add_unavailable_food_to_cart(app, client, auth_headers):
    with app.app_context():
        food_id = make_food(is_available=False).id
    assert add_to_cart(client, auth_headers(), food_id).status_code == 400

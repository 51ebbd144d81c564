from datetime import datetime

import pytest

from chefbot.errors import AuthorizationError, NotFoundError, ValidationError
from chefbot.models import Cart
from chefbot.services.order_service import OrderService, calculate_totals
from tests.conftest import CHECKOUT, fill_cart, make_food, make_user

NOW = datetime(2026, 3, 2, 12, 30)


@pytest.fixture
def user(ctx):
    return make_user()


@pytest.fixture
def admin(ctx):
    return make_user("admin@example.com", "Admin", role="admin")


@pytest.fixture
def order(user):
    fill_cart(user, (make_food(price=15), 1))
    return OrderService.create_order(user, CHECKOUT, now=NOW)


def test_calculate_totals_above_threshold():
    tax, fee, total = calculate_totals(25, 0.08, 2, 20)
    assert tax == pytest.approx(2.0)
    assert fee == 0
    assert total == pytest.approx(27.0)


def test_calculate_totals_below_threshold():
    tax, fee, total = calculate_totals(15, 0.08, 2, 20)
    assert tax == pytest.approx(1.2)
    assert fee == 2
    assert total == pytest.approx(18.2)


def test_create_order_snapshots_cart_and_clears_it(user):
    pizza = make_food(price=10, discount=10, calories=800)
    fill_cart(user, (pizza, 3))

    order = OrderService.create_order(user, dict(CHECKOUT, orderNotes="extra napkins"), now=NOW)

    # 3 x 9.00 = 27.00 subtotal, free delivery
    assert order.items[0].price == pytest.approx(9.0)
    assert order.total_amount == pytest.approx(27 * 1.08)
    assert order.delivery_fee == 0
    assert order.total_calories == 2400
    assert order.order_status == "placed"
    assert order.payment_status == "completed"
    assert order.created_at == NOW
    assert order.estimated_delivery_time == datetime(2026, 3, 2, 13, 15)
    assert [h.note for h in order.status_history] == ["Order placed successfully"]
    assert order.order_notes == "extra napkins"

    cart = Cart.query.filter_by(user_email=user.user_email).one()
    assert cart.items == []
    assert cart.total_amount == 0


def test_cash_on_delivery_is_pending(user):
    fill_cart(user, (make_food(), 1))
    order = OrderService.create_order(user, dict(CHECKOUT, paymentMethod="cash on delivery"), now=NOW)
    assert order.payment_status == "pending"


def test_create_order_with_empty_cart(user):
    with pytest.raises(ValidationError, match="Cart is empty"):
        OrderService.create_order(user, CHECKOUT, now=NOW)


def test_create_order_requires_address(user):
    fill_cart(user, (make_food(), 1))
    with pytest.raises(ValidationError):
        OrderService.create_order(user, {"paymentMethod": "wallet"}, now=NOW)


def test_create_order_rejects_unknown_payment_method(user):
    fill_cart(user, (make_food(), 1))
    with pytest.raises(ValidationError, match="Invalid payment method"):
        OrderService.create_order(user, dict(CHECKOUT, paymentMethod="bitcoin"), now=NOW)


def test_get_order_hides_other_users_orders(order):
    stranger = make_user("bob@example.com", "Bob")
    with pytest.raises(NotFoundError):
        OrderService.get_order(stranger, order.id)


def test_admin_moves_order_forward(order, admin):
    for status in ("confirmed", "preparing", "out for delivery", "delivered"):
        OrderService.update_status(admin, order.id, {"status": status})

    assert order.order_status == "delivered"
    assert order.actual_delivery_time is not None
    assert [h.status for h in order.status_history] == [
        "placed", "confirmed", "preparing", "out for delivery", "delivered",
    ]


def test_update_status_requires_admin(order, user):
    with pytest.raises(AuthorizationError):
        OrderService.update_status(user, order.id, {"status": "confirmed"})


def test_update_status_rejects_backwards_and_unknown(order, admin):
    OrderService.update_status(admin, order.id, {"status": "preparing"})

    with pytest.raises(ValidationError):
        OrderService.update_status(admin, order.id, {"status": "confirmed"})
    with pytest.raises(ValidationError, match="Invalid order status"):
        OrderService.update_status(admin, order.id, {"status": "lost"})


def test_update_status_missing_order(admin):
    with pytest.raises(NotFoundError):
        OrderService.update_status(admin, 999, {"status": "confirmed"})


def test_cancel_twice_keeps_history_unchanged(order, user):
    OrderService.cancel_order(user, order.id)
    history = [(h.status, h.note) for h in order.status_history]

    with pytest.raises(ValidationError):
        OrderService.cancel_order(user, order.id)

    assert order.order_status == "cancelled"
    assert history[-1] == ("cancelled", "Order cancelled by user")
    assert [(h.status, h.note) for h in order.status_history] == history


def test_cancel_by_stranger(order):
    stranger = make_user("bob@example.com", "Bob")
    with pytest.raises(AuthorizationError):
        OrderService.cancel_order(stranger, order.id)


def test_cancel_delivered_order(order, user, admin):
    OrderService.update_status(admin, order.id, {"status": "delivered"})
    with pytest.raises(ValidationError):
        OrderService.cancel_order(user, order.id)


def test_feedback_requires_delivery(order, user):
    with pytest.raises(ValidationError, match="delivered"):
        OrderService.add_feedback(user, order.id, {"rating": 5})
    assert order.rating is None


def test_feedback_after_delivery(order, user, admin):
    OrderService.update_status(admin, order.id, {"status": "delivered"})

    OrderService.add_feedback(user, order.id, {"rating": 4, "feedback": "Tasty"})

    assert order.rating == 4
    assert order.feedback == "Tasty"
    with pytest.raises(ValidationError):
        OrderService.add_feedback(user, order.id, {"rating": 1})
    assert order.rating == 4


@pytest.mark.parametrize("rating", [0, 6, "5", None, 4.5, True])
def test_feedback_rating_bounds(order, user, admin, rating):
    OrderService.update_status(admin, order.id, {"status": "delivered"})
    with pytest.raises(ValidationError):
        OrderService.add_feedback(user, order.id, {"rating": rating})


def test_feedback_by_stranger(order, admin):
    OrderService.update_status(admin, order.id, {"status": "delivered"})
    stranger = make_user("bob@example.com", "Bob")
    with pytest.raises(AuthorizationError):
        OrderService.add_feedback(stranger, order.id, {"rating": 5})

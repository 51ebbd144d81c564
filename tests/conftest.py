import pytest
from flask_jwt_extended import create_access_token

from chefbot import create_app
from chefbot.config import TestConfig
from chefbot.extensions import db
from chefbot.models import Cart, CartItem, FoodItem, UserProfile


@pytest.fixture
def app():
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def ctx(app):
    """Application context for tests that call services directly."""
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(app):
    def _headers(email="alice@example.com", name="Alice"):
        with app.app_context():
            token = create_access_token(identity=email, additional_claims={"name": name})
        return {"Authorization": f"Bearer {token}"}
    return _headers


def make_user(email="alice@example.com", name="Alice", **fields):
    user = UserProfile(user_email=email, name=name, **fields)
    db.session.add(user)
    db.session.commit()
    return user


def make_food(name="Margherita Pizza", **fields):
    data = {
        "description": "Classic pizza with tomato and mozzarella",
        "price": 10.0,
        "category": "main course",
        "calories": 800,
        "protein": 30,
        "carbohydrates": 90,
        "fat": 25,
        "ingredients": ["flour", "tomato", "mozzarella"],
    }
    data.update(fields)
    food = FoodItem(name=name, **data)
    db.session.add(food)
    db.session.commit()
    return food


def fill_cart(user, *lines):
    """lines: (food_item, quantity) pairs"""
    cart = Cart.query.filter_by(user_email=user.user_email).first()
    if not cart:
        cart = Cart(user_email=user.user_email)
        db.session.add(cart)
    for food, quantity in lines:
        cart.items.append(CartItem(food_item=food, quantity=quantity))
    cart.recalculate_totals()
    db.session.commit()
    return cart


CHECKOUT = {
    "deliveryAddress": {
        "street": "1 Main St",
        "city": "Springfield",
        "state": "IL",
        "zipCode": "62701",
        "country": "USA",
    },
    "paymentMethod": "credit card",
}

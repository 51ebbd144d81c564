# chefbot/services/cart_service.py
from chefbot.extensions import db
from chefbot.errors import ValidationError
from chefbot.models.cart import Cart, CartItem
from chefbot.services.food_service import FoodService


def get_or_create_cart(user):
    cart = Cart.query.filter_by(user_email=user.user_email).first()
    if not cart:
        cart = Cart(user_email=user.user_email)
        db.session.add(cart)
        db.session.commit()
    return cart


class CartService:

    @staticmethod
    def get_cart(user):
        return get_or_create_cart(user)

    @staticmethod
    def add_item(user, payload):
        payload = payload or {}
        quantity = payload.get("quantity", 1)
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValidationError("Quantity must be a positive integer")

        food = FoodService.get_item(payload.get("foodItemId"))
        if not food.is_available:
            raise ValidationError("Food item is not available")

        cart = get_or_create_cart(user)
        existing = next((i for i in cart.items if i.food_item_id == food.id), None)
        if existing:
            existing.quantity += quantity
        else:
            cart.items.append(CartItem(food_item=food, quantity=quantity))

        cart.recalculate_totals()
        db.session.commit()
        return cart

    @staticmethod
    def clear(user):
        cart = get_or_create_cart(user)
        cart.clear()
        db.session.commit()
        return cart

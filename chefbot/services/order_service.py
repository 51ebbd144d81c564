# chefbot/services/order_service.py
import logging
from datetime import datetime, timedelta

from flask import current_app

from chefbot.extensions import db
from chefbot.enums.app_enum import OrderStatusEnum, PaymentMethodEnum, PaymentStatusEnum
from chefbot.errors import AuthorizationError, NotFoundError, ValidationError
from chefbot.models.cart import Cart
from chefbot.models.order import Order, OrderItem
from chefbot.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)

ADDRESS_FIELDS = ("street", "city", "state", "zipCode", "country")

# Forward-only lifecycle; cancellation is possible from any non-terminal state
LIFECYCLE = (
    OrderStatusEnum.placed.value,
    OrderStatusEnum.confirmed.value,
    OrderStatusEnum.preparing.value,
    OrderStatusEnum.out_for_delivery.value,
    OrderStatusEnum.delivered.value,
)
TERMINAL_STATUSES = (OrderStatusEnum.delivered.value, OrderStatusEnum.cancelled.value)


def calculate_totals(subtotal, tax_rate, delivery_fee, free_delivery_threshold):
    """Return (tax_amount, delivery_fee, total_amount) for an items subtotal."""
    fee = delivery_fee if subtotal < free_delivery_threshold else 0
    tax = subtotal * tax_rate
    return tax, fee, subtotal + tax + fee


def _validate_checkout(payload):
    address = payload.get("deliveryAddress")
    if not isinstance(address, dict):
        raise ValidationError("deliveryAddress is required")
    missing = [f for f in ADDRESS_FIELDS if not address.get(f)]
    if missing:
        raise ValidationError(f"deliveryAddress is missing: {', '.join(missing)}")

    payment_method = payload.get("paymentMethod")
    if payment_method not in {m.value for m in PaymentMethodEnum}:
        raise ValidationError("Invalid payment method")

    return {f: address[f] for f in ADDRESS_FIELDS}, payment_method


def _load_order(order_id):
    order = db.session.get(Order, order_id)
    if not order:
        raise NotFoundError("Order not found")
    return order


class OrderService:

    @staticmethod
    def create_order(user, payload, now=None):
        payload = payload or {}
        address, payment_method = _validate_checkout(payload)

        cart = Cart.query.filter_by(user_email=user.user_email).first()
        if not cart or not cart.items:
            raise ValidationError("Cart is empty")

        now = now or datetime.now()
        config = current_app.config

        order_items = []
        for cart_item in cart.items:
            price = cart_item.food_item.discounted_price
            order_items.append(
                OrderItem(
                    food_item=cart_item.food_item,
                    quantity=cart_item.quantity,
                    price=price,
                    total_price=price * cart_item.quantity,
                )
            )

        subtotal = sum(item.total_price for item in order_items)
        tax, fee, total = calculate_totals(
            subtotal,
            config["TAX_RATE"],
            config["DELIVERY_FEE"],
            config["FREE_DELIVERY_THRESHOLD"],
        )

        order = Order(
            user_email=user.user_email,
            items=order_items,
            total_amount=total,
            total_calories=cart.total_calories,
            tax_amount=tax,
            delivery_fee=fee,
            delivery_address=address,
            payment_method=payment_method,
            payment_status=(
                PaymentStatusEnum.pending.value
                if payment_method == PaymentMethodEnum.cash_on_delivery.value
                else PaymentStatusEnum.completed.value
            ),
            delivery_instructions=payload.get("deliveryInstructions"),
            order_notes=payload.get("orderNotes"),
            estimated_delivery_time=now + timedelta(minutes=config["ESTIMATED_DELIVERY_MINUTES"]),
            created_at=now,
        )
        order.set_nutrition_summary(cart.nutrition_summary())
        order.update_status(OrderStatusEnum.placed.value, "Order placed successfully", at=now)

        db.session.add(order)
        cart.clear()
        db.session.commit()
        logger.info("[OrderService] Order %s placed by %s (%.2f)", order.id, user.user_email, total)

        LedgerService.record_order(order, now=now)
        return order

    @staticmethod
    def list_orders(user):
        return (
            Order.query
            .filter_by(user_email=user.user_email)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .all()
        )

    @staticmethod
    def get_order(user, order_id):
        order = db.session.get(Order, order_id)
        if not order or order.user_email != user.user_email:
            raise NotFoundError("Order not found")
        return order

    @staticmethod
    def update_status(user, order_id, payload):
        if not user.is_admin:
            raise AuthorizationError("Not authorized as an admin")

        order = _load_order(order_id)
        status = (payload or {}).get("status")

        if status not in {s.value for s in OrderStatusEnum}:
            raise ValidationError("Invalid order status")
        if order.order_status in TERMINAL_STATUSES:
            raise ValidationError(f"Order is already {order.order_status}")
        if status != OrderStatusEnum.cancelled.value and \
                LIFECYCLE.index(status) <= LIFECYCLE.index(order.order_status):
            raise ValidationError(f"Cannot move order from {order.order_status} to {status}")

        order.update_status(status, (payload or {}).get("note"))
        db.session.commit()
        return order

    @staticmethod
    def cancel_order(user, order_id):
        order = _load_order(order_id)

        if order.user_email != user.user_email and not user.is_admin:
            raise AuthorizationError("Not authorized")

        if order.order_status in TERMINAL_STATUSES:
            raise ValidationError(f"Order cannot be cancelled as it is already {order.order_status}")

        order.update_status(OrderStatusEnum.cancelled.value, "Order cancelled by user")
        db.session.commit()
        return order

    @staticmethod
    def add_feedback(user, order_id, payload):
        payload = payload or {}
        order = _load_order(order_id)

        if order.user_email != user.user_email:
            raise AuthorizationError("Not authorized")

        if order.order_status != OrderStatusEnum.delivered.value:
            raise ValidationError("Can only add feedback to delivered orders")

        if order.rating is not None:
            raise ValidationError("Feedback has already been submitted for this order")

        rating = payload.get("rating")
        if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
            raise ValidationError("Rating must be an integer between 1 and 5")

        order.rating = rating
        order.feedback = payload.get("feedback")
        db.session.commit()
        return order

from datetime import datetime

from chefbot.extensions import db
from chefbot.enums.app_enum import OrderStatusEnum, PaymentStatusEnum
from chefbot.models.nutrition import NutritionSummaryMixin
from chefbot.models.types import BigInt


class Order(NutritionSummaryMixin, db.Model):
    __tablename__ = "orders"

    id = db.Column(BigInt, primary_key=True)
    user_email = db.Column(db.String(255), nullable=False, index=True)

    total_amount = db.Column(db.Float, nullable=False)
    total_calories = db.Column(db.Float, nullable=False, default=0)
    tax_amount = db.Column(db.Float, nullable=False, default=0)
    delivery_fee = db.Column(db.Float, nullable=False, default=0)
    discount_amount = db.Column(db.Float, nullable=False, default=0)

    # {street, city, state, zipCode, country}
    delivery_address = db.Column(db.JSON, nullable=False)
    payment_method = db.Column(db.String(30), nullable=False)
    payment_status = db.Column(db.String(20), nullable=False, default=PaymentStatusEnum.pending.value)
    order_status = db.Column(db.String(30), nullable=False, default=OrderStatusEnum.placed.value)

    delivery_instructions = db.Column(db.Text)
    order_notes = db.Column(db.Text)
    estimated_delivery_time = db.Column(db.DateTime)
    actual_delivery_time = db.Column(db.DateTime)

    rating = db.Column(db.Integer)
    feedback = db.Column(db.Text)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    items = db.relationship(
        "OrderItem",
        backref="order",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )
    status_history = db.relationship(
        "OrderStatusHistory",
        backref="order",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="OrderStatusHistory.id",
    )

    @property
    def order_number(self):
        return f"{self.id:06d}"[-6:]

    def update_status(self, status, note=None, at=None):
        """Every status write goes through here so the history log stays complete."""
        at = at or datetime.now()
        self.order_status = status
        self.status_history.append(
            OrderStatusHistory(status=status, timestamp=at, note=note or f"Order {status}")
        )
        if status == OrderStatusEnum.delivered.value:
            self.actual_delivery_time = at

    def to_dict(self):
        return {
            "id": self.id,
            "orderNumber": self.order_number,
            "user": self.user_email,
            "items": [item.to_dict() for item in self.items],
            "totalAmount": self.total_amount,
            "totalCalories": self.total_calories,
            "nutritionSummary": self.nutrition_summary(),
            "taxAmount": self.tax_amount,
            "deliveryFee": self.delivery_fee,
            "discountAmount": self.discount_amount,
            "deliveryAddress": self.delivery_address,
            "paymentMethod": self.payment_method,
            "paymentStatus": self.payment_status,
            "orderStatus": self.order_status,
            "statusHistory": [h.to_dict() for h in self.status_history],
            "deliveryInstructions": self.delivery_instructions,
            "orderNotes": self.order_notes,
            "estimatedDeliveryTime": (
                self.estimated_delivery_time.isoformat() if self.estimated_delivery_time else None
            ),
            "actualDeliveryTime": (
                self.actual_delivery_time.isoformat() if self.actual_delivery_time else None
            ),
            "rating": self.rating,
            "feedback": self.feedback,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


class OrderItem(db.Model):
    __tablename__ = "order_items"

    id = db.Column(BigInt, primary_key=True)
    order_id = db.Column(BigInt, db.ForeignKey("orders.id"), nullable=False, index=True)
    food_item_id = db.Column(BigInt, db.ForeignKey("food_items.id"), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    # unit price after discount
    price = db.Column(db.Float, nullable=False)
    total_price = db.Column(db.Float, nullable=False)

    food_item = db.relationship("FoodItem", lazy="joined")

    def to_dict(self):
        return {
            "foodItem": self.food_item.to_summary() if self.food_item else self.food_item_id,
            "quantity": self.quantity,
            "price": self.price,
            "totalPrice": self.total_price,
        }


class OrderStatusHistory(db.Model):
    __tablename__ = "order_status_history"

    id = db.Column(BigInt, primary_key=True)
    order_id = db.Column(BigInt, db.ForeignKey("orders.id"), nullable=False, index=True)
    status = db.Column(db.String(30), nullable=False)
    timestamp = db.Column(db.DateTime, nullable=False, default=datetime.now)
    note = db.Column(db.String(255))

    def to_dict(self):
        return {
            "status": self.status,
            "timestamp": self.timestamp.isoformat(),
            "note": self.note,
        }

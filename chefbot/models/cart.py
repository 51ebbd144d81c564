from datetime import datetime

from chefbot.extensions import db
from chefbot.models.nutrition import NUTRIENT_FIELDS, NutritionSummaryMixin, empty_nutrition_summary
from chefbot.models.types import BigInt


class Cart(NutritionSummaryMixin, db.Model):
    __tablename__ = "carts"

    id = db.Column(BigInt, primary_key=True)
    user_email = db.Column(db.String(255), nullable=False, unique=True, index=True)
    total_amount = db.Column(db.Float, nullable=False, default=0)
    total_calories = db.Column(db.Float, nullable=False, default=0)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    items = db.relationship(
        "CartItem",
        backref="cart",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="CartItem.id",
    )

    def recalculate_totals(self):
        total_amount = 0
        total_calories = 0
        summary = empty_nutrition_summary()

        for item in self.items:
            food = item.food_item
            total_amount += food.discounted_price * item.quantity
            total_calories += food.calories * item.quantity
            for field in NUTRIENT_FIELDS:
                summary[field] += (getattr(food, field) or 0) * item.quantity

        self.total_amount = total_amount
        self.total_calories = total_calories
        self.set_nutrition_summary(summary)

    def clear(self):
        self.items.clear()
        self.total_amount = 0
        self.total_calories = 0
        self.set_nutrition_summary(None)

    def to_dict(self):
        return {
            "id": self.id,
            "items": [
                {
                    "id": item.id,
                    "foodItem": item.food_item.to_summary(),
                    "quantity": item.quantity,
                }
                for item in self.items
            ],
            "totalAmount": self.total_amount,
            "totalCalories": self.total_calories,
            "nutritionSummary": self.nutrition_summary(),
        }


class CartItem(db.Model):
    __tablename__ = "cart_items"

    id = db.Column(BigInt, primary_key=True)
    cart_id = db.Column(BigInt, db.ForeignKey("carts.id"), nullable=False, index=True)
    food_item_id = db.Column(BigInt, db.ForeignKey("food_items.id"), nullable=False)
    quantity = db.Column(db.Integer, nullable=False, default=1)

    food_item = db.relationship("FoodItem", lazy="joined")

from datetime import datetime

from chefbot.extensions import db
from chefbot.models.nutrition import NutritionSummaryMixin
from chefbot.models.types import BigInt


class CalorieTracker(NutritionSummaryMixin, db.Model):
    __tablename__ = "calorie_trackers"

    id = db.Column(BigInt, primary_key=True)
    user_email = db.Column(db.String(255), nullable=False, index=True)
    log_date = db.Column(db.Date, nullable=False)
    total_calories = db.Column(db.Float, nullable=False, default=0)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    meals = db.relationship(
        "MealEntry",
        backref="tracker",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="MealEntry.id",
    )

    __table_args__ = (
        db.UniqueConstraint("user_email", "log_date", name="uk_calorie_user_date"),
    )

    def to_dict(self, calorie_goal=None):
        data = {
            "id": self.id,
            "date": self.log_date.isoformat(),
            "totalCalories": self.total_calories,
            "meals": [meal.to_dict() for meal in self.meals],
            "nutritionSummary": self.nutrition_summary(),
        }
        if calorie_goal is not None:
            data["calorieGoal"] = calorie_goal
        return data


class MealEntry(db.Model):
    __tablename__ = "calorie_meals"

    id = db.Column(BigInt, primary_key=True)
    tracker_id = db.Column(BigInt, db.ForeignKey("calorie_trackers.id"), nullable=False, index=True)
    order_id = db.Column(BigInt, db.ForeignKey("orders.id"))
    # breakfast | lunch | dinner | snack
    meal_type = db.Column(db.String(20), nullable=False)
    total_calories = db.Column(db.Float, nullable=False)
    time = db.Column(db.DateTime, nullable=False, default=datetime.now)

    food_items = db.relationship(
        "MealFoodItem",
        backref="meal",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="MealFoodItem.id",
    )

    def to_dict(self):
        return {
            "order": self.order_id,
            "mealType": self.meal_type,
            "totalCalories": self.total_calories,
            "time": self.time.isoformat(),
            "foodItems": [
                {"foodItem": f.food_item_id, "quantity": f.quantity, "calories": f.calories}
                for f in self.food_items
            ],
        }


class MealFoodItem(db.Model):
    __tablename__ = "calorie_meal_items"

    id = db.Column(BigInt, primary_key=True)
    meal_id = db.Column(BigInt, db.ForeignKey("calorie_meals.id"), nullable=False, index=True)
    food_item_id = db.Column(BigInt, db.ForeignKey("food_items.id"), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    calories = db.Column(db.Float, nullable=False)

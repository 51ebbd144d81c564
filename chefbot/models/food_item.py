from datetime import datetime

from chefbot.extensions import db
from chefbot.models.nutrition import NutritionSummaryMixin
from chefbot.models.types import BigInt


class FoodItem(NutritionSummaryMixin, db.Model):
    __tablename__ = "food_items"

    id = db.Column(BigInt, primary_key=True)
    name = db.Column(db.String(255), nullable=False, index=True)
    description = db.Column(db.Text, nullable=False, default="")
    price = db.Column(db.Float, nullable=False)
    image = db.Column(db.String(512))
    category = db.Column(db.String(50), nullable=False, index=True)

    is_vegetarian = db.Column(db.Boolean, nullable=False, default=False)
    is_vegan = db.Column(db.Boolean, nullable=False, default=False)
    is_gluten_free = db.Column(db.Boolean, nullable=False, default=False)

    # per serving; macros come from NutritionSummaryMixin
    calories = db.Column(db.Float, nullable=False, default=0)

    ingredients = db.Column(db.JSON, nullable=False, default=list)
    preparation_time = db.Column(db.Integer, nullable=False, default=0)
    spicy_level = db.Column(db.Integer, nullable=False, default=0)

    average_rating = db.Column(db.Float, nullable=False, default=0)
    is_available = db.Column(db.Boolean, nullable=False, default=True)
    is_popular = db.Column(db.Boolean, nullable=False, default=False)
    is_recommended = db.Column(db.Boolean, nullable=False, default=False)
    # percent, 0-100
    discount = db.Column(db.Float, nullable=False, default=0)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    ratings = db.relationship(
        "FoodRating",
        backref="food_item",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="FoodRating.id",
    )

    @property
    def discounted_price(self):
        return self.price * (1 - (self.discount or 0) / 100)

    def nutritional_info(self):
        return {"calories": self.calories, **self.nutrition_summary()}

    def add_rating(self, user_email, rating, review=None):
        self.ratings.append(FoodRating(user_email=user_email, rating=rating, review=review))
        self.recalculate_average_rating()

    def recalculate_average_rating(self):
        if self.ratings:
            self.average_rating = sum(r.rating for r in self.ratings) / len(self.ratings)
        else:
            self.average_rating = 0

    def to_summary(self):
        """Short form embedded in chat history."""
        return {
            "id": self.id,
            "name": self.name,
            "image": self.image,
            "price": self.price,
            "category": self.category,
            "isVegetarian": self.is_vegetarian,
            "isVegan": self.is_vegan,
            "calories": self.calories,
        }

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "image": self.image,
            "category": self.category,
            "isVegetarian": self.is_vegetarian,
            "isVegan": self.is_vegan,
            "isGlutenFree": self.is_gluten_free,
            "nutritionalInfo": self.nutritional_info(),
            "ingredients": self.ingredients or [],
            "preparationTime": self.preparation_time,
            "spicyLevel": self.spicy_level,
            "ratings": [r.to_dict() for r in self.ratings],
            "averageRating": self.average_rating,
            "isAvailable": self.is_available,
            "isPopular": self.is_popular,
            "isRecommended": self.is_recommended,
            "discount": self.discount,
        }


class FoodRating(db.Model):
    __tablename__ = "food_ratings"

    id = db.Column(BigInt, primary_key=True)
    food_item_id = db.Column(BigInt, db.ForeignKey("food_items.id"), nullable=False, index=True)
    user_email = db.Column(db.String(255), nullable=False)
    rating = db.Column(db.Integer, nullable=False)
    review = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            "user": self.user_email,
            "rating": self.rating,
            "review": self.review,
            "date": self.created_at.isoformat() if self.created_at else None,
        }

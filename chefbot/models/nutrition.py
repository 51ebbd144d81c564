from chefbot.extensions import db

NUTRIENT_FIELDS = ("protein", "carbohydrates", "fat", "fiber", "sugar", "sodium")


def empty_nutrition_summary():
    return {field: 0 for field in NUTRIENT_FIELDS}


class NutritionSummaryMixin:
    """Macro columns shared by carts, orders and calorie trackers."""

    protein = db.Column(db.Float, nullable=False, default=0)
    carbohydrates = db.Column(db.Float, nullable=False, default=0)
    fat = db.Column(db.Float, nullable=False, default=0)
    fiber = db.Column(db.Float, nullable=False, default=0)
    sugar = db.Column(db.Float, nullable=False, default=0)
    sodium = db.Column(db.Float, nullable=False, default=0)

    def nutrition_summary(self):
        return {field: getattr(self, field) or 0 for field in NUTRIENT_FIELDS}

    def set_nutrition_summary(self, summary):
        for field in NUTRIENT_FIELDS:
            setattr(self, field, (summary or {}).get(field, 0) or 0)

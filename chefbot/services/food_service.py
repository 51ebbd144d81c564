# chefbot/services/food_service.py
from chefbot.extensions import db
from chefbot.errors import NotFoundError, ValidationError
from chefbot.models.food_item import FoodItem

BOOLEAN_FILTERS = {
    "isVegetarian": FoodItem.is_vegetarian,
    "isVegan": FoodItem.is_vegan,
    "isGlutenFree": FoodItem.is_gluten_free,
}

SORT_OPTIONS = {
    "price_asc": FoodItem.price.asc(),
    "price_desc": FoodItem.price.desc(),
    "rating": FoodItem.average_rating.desc(),
    "newest": FoodItem.created_at.desc(),
}


class FoodService:

    @staticmethod
    def list_items(args):
        query = FoodItem.query.filter(FoodItem.is_available.is_(True))

        if args.get("category"):
            query = query.filter(FoodItem.category == args["category"])
        for arg, column in BOOLEAN_FILTERS.items():
            if args.get(arg) == "true":
                query = query.filter(column.is_(True))
        if args.get("search"):
            query = query.filter(FoodItem.name.ilike(f"%{args['search']}%"))

        try:
            if args.get("minPrice"):
                query = query.filter(FoodItem.price >= float(args["minPrice"]))
            if args.get("maxPrice"):
                query = query.filter(FoodItem.price <= float(args["maxPrice"]))
        except ValueError:
            raise ValidationError("Invalid price filter")

        order = SORT_OPTIONS.get(args.get("sort"), FoodItem.name.asc())
        return query.order_by(order, FoodItem.id).all()

    @staticmethod
    def get_item(food_id):
        item = db.session.get(FoodItem, food_id) if food_id is not None else None
        if not item:
            raise NotFoundError("Food item not found")
        return item

    @staticmethod
    def add_review(user, food_id, payload):
        payload = payload or {}
        item = FoodService.get_item(food_id)

        rating = payload.get("rating")
        if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
            raise ValidationError("Rating must be an integer between 1 and 5")
        if any(r.user_email == user.user_email for r in item.ratings):
            raise ValidationError("Food item already reviewed")

        item.add_rating(user.user_email, rating, payload.get("review"))
        db.session.commit()
        return item

# chefbot/services/chatbot_service.py
import logging
import math
import random
import re
from datetime import datetime

from chefbot.extensions import db
from chefbot.enums.app_enum import IntentEnum, OrderStatusEnum
from chefbot.models.calorie_tracker import CalorieTracker
from chefbot.models.food_item import FoodItem
from chefbot.models.order import Order
from chefbot.models.user_profile import DEFAULT_CALORIE_GOAL
from chefbot.services.intent_service import detect_intent

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 5

ERROR_REPLY = "I'm having trouble processing your request right now. Please try again later."

GREETINGS = (
    "Hello {name}! How can I help you today?",
    "Hi there {name}! What can I do for you?",
    "Hey {name}! How can I assist you with your food order today?",
    "Greetings {name}! I'm ChefBot, your personal food assistant. How may I help you?",
)

RECOMMENDATION_CATEGORIES = (
    "breakfast", "lunch", "dinner", "appetizer",
    "main course", "dessert", "beverage", "snack",
)

MENU_CATEGORIES = ("appetizer", "main course", "dessert", "beverage")

ORDER_STATUS_REPLIES = {
    OrderStatusEnum.placed.value:
        "Your order #{number} has been placed and is waiting for confirmation from the restaurant.",
    OrderStatusEnum.confirmed.value:
        "Your order #{number} has been confirmed and the restaurant is preparing your food.",
    OrderStatusEnum.preparing.value:
        "Your order #{number} is being prepared by our chefs. It should be ready for delivery soon.",
    OrderStatusEnum.out_for_delivery.value:
        "Your order #{number} is out for delivery! It should arrive at your location shortly.",
    OrderStatusEnum.delivered.value:
        "Your order #{number} has been delivered. Enjoy your meal! Would you like to provide feedback?",
    OrderStatusEnum.cancelled.value:
        "Your order #{number} was cancelled. Would you like to place a new order?",
}

IN_FLIGHT_STATUSES = (
    OrderStatusEnum.confirmed.value,
    OrderStatusEnum.preparing.value,
    OrderStatusEnum.out_for_delivery.value,
)

# Item name runs until the first sentence punctuation or the end of the message
FOOD_NUTRITION_PATTERNS = (
    re.compile(r"calories in (.+?)(?:[?.!]|$)", re.IGNORECASE),
    re.compile(r"nutrition for (.+?)(?:[?.!]|$)", re.IGNORECASE),
)

ALLERGEN_PATTERNS = (
    re.compile(r"allergic to (.+?)(?:[?.!]|$)", re.IGNORECASE),
    re.compile(r"allergy to (.+?)(?:[?.!]|$)", re.IGNORECASE),
)

CROSS_CONTAMINATION_NOTE = "However, please note that cross-contamination is possible in our kitchen."

HELP_TEXT = (
    "I'm ChefBot, your personal food assistant! Here's how I can help you:\n\n"
    "• Recommend food items based on your preferences\n"
    "• Provide nutritional information about menu items\n"
    "• Track your order status\n"
    "• Answer questions about dietary restrictions and allergies\n"
    "• Help you track your calorie intake\n\n"
    "Just ask me anything about our food, and I'll do my best to assist you!"
)

FEEDBACK_TEXT = (
    "We value your feedback! You can rate your order and provide comments after delivery "
    "through the 'Orders' section. If you have specific suggestions or concerns, please let us "
    "know, and we'll make sure to address them."
)


def _fmt(number):
    return f"{number:g}"


def _names(items):
    return ", ".join(item.name for item in items)


def _reply(intent, text, items=None):
    return {
        "text": text,
        "intent": intent.value,
        "related_food_items": [item.id for item in items or []],
    }


def _first_capture(patterns, message):
    for pattern in patterns:
        match = pattern.search(message)
        if match:
            return match.group(1).strip()
    return None


def _available_items():
    return FoodItem.query.filter(FoodItem.is_available.is_(True))


class ChatbotService:
    """
    Rule-based assistant. Every handler only reads the catalog, the order
    history or the calorie ledger; persisting the exchange is up to the caller.
    """

    def __init__(self, rng=None, clock=None):
        self.rng = rng or random.Random()
        self.clock = clock or datetime.now
        self._handlers = {
            IntentEnum.greeting: self.handle_greeting,
            IntentEnum.food_recommendation: self.handle_food_recommendation,
            IntentEnum.order_status: self.handle_order_status,
            IntentEnum.nutrition_info: self.handle_nutrition_info,
            IntentEnum.dietary_question: self.handle_dietary_question,
            IntentEnum.help: self.handle_help,
            IntentEnum.feedback: self.handle_feedback,
            IntentEnum.general_query: self.handle_general_query,
        }

    def process_message(self, message, user):
        try:
            intent = detect_intent(message)
            return self._handlers[intent](message, user)
        except Exception:
            logger.exception("[ChatbotService] Failed to answer %r for %s", message, user.user_email)
            db.session.rollback()
            return {"text": ERROR_REPLY, "intent": IntentEnum.other.value, "related_food_items": []}

    # -------------------- GREETING -------------------- #

    def handle_greeting(self, message, user):
        template = self.rng.choice(GREETINGS)
        return _reply(IntentEnum.greeting, template.format(name=user.name))

    # -------------------- RECOMMENDATION -------------------- #

    def handle_food_recommendation(self, message, user):
        text = message.lower()
        preferences = [p.lower() for p in (user.dietary_preferences or [])]

        query = _available_items()

        if "vegetarian" in text or "vegetarian" in preferences:
            query = query.filter(FoodItem.is_vegetarian.is_(True))
        if "vegan" in text or "vegan" in preferences:
            query = query.filter(FoodItem.is_vegan.is_(True))
        if "gluten free" in text or "gluten-free" in preferences:
            query = query.filter(FoodItem.is_gluten_free.is_(True))

        categories = [c for c in RECOMMENDATION_CATEGORIES if c in text]
        if categories:
            query = query.filter(FoodItem.category.in_(categories))

        if "low calorie" in text or "diet" in text:
            query = query.filter(FoodItem.calories < 500)
        if "high protein" in text:
            query = query.filter(FoodItem.protein > 20)

        if "popular" in text or "best seller" in text:
            query = query.filter(FoodItem.is_popular.is_(True)).order_by(FoodItem.id)
        elif "special" in text or "chef" in text:
            query = query.filter(FoodItem.is_recommended.is_(True)).order_by(FoodItem.id)
        else:
            query = query.order_by(FoodItem.average_rating.desc(), FoodItem.id)

        items = query.limit(MAX_SUGGESTIONS).all()

        if not items:
            return _reply(
                IntentEnum.food_recommendation,
                "I'm sorry, I couldn't find any food items matching your criteria. "
                "Would you like me to suggest something else?",
            )

        return _reply(
            IntentEnum.food_recommendation,
            f"Based on your preferences, I recommend: {_names(items)}. "
            "Would you like more details about any of these items?",
            items,
        )

    # -------------------- ORDER STATUS -------------------- #

    def handle_order_status(self, message, user):
        order = (
            Order.query
            .filter_by(user_email=user.user_email)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .first()
        )

        if not order:
            return _reply(
                IntentEnum.order_status,
                "I don't see any recent orders for you. Would you like to place a new order?",
            )

        status = order.order_status
        template = ORDER_STATUS_REPLIES.get(status, "Your order #{number} status is: {status}.")
        text = template.format(number=order.order_number, status=status)

        if order.estimated_delivery_time and status in IN_FLIGHT_STATUSES:
            text += f" Estimated delivery time: {order.estimated_delivery_time.strftime('%H:%M')}."

        return _reply(IntentEnum.order_status, text)

    # -------------------- NUTRITION -------------------- #

    def handle_nutrition_info(self, message, user):
        food_name = _first_capture(FOOD_NUTRITION_PATTERNS, message)

        if food_name:
            item = (
                FoodItem.query
                .filter(db.func.lower(FoodItem.name).contains(food_name.lower(), autoescape=True))
                .order_by(FoodItem.id)
                .first()
            )
            if not item:
                return _reply(
                    IntentEnum.nutrition_info,
                    f'I\'m sorry, I couldn\'t find nutritional information for "{food_name}". '
                    "Would you like to know about a different item?",
                )
            return _reply(
                IntentEnum.nutrition_info,
                f"{item.name} contains {_fmt(item.calories)} calories, {_fmt(item.protein)}g protein, "
                f"{_fmt(item.carbohydrates)}g carbs, and {_fmt(item.fat)}g fat per serving. "
                "Would you like more detailed nutritional information?",
                [item],
            )

        text = message.lower()
        if "daily" in text or "today" in text or "consumed" in text:
            tracker = CalorieTracker.query.filter_by(
                user_email=user.user_email,
                log_date=self.clock().date(),
            ).first()

            if not tracker or not tracker.total_calories:
                return _reply(
                    IntentEnum.nutrition_info,
                    "You haven't consumed any calories from our restaurant today. "
                    "Would you like me to recommend something?",
                )

            goal = user.calorie_goal or DEFAULT_CALORIE_GOAL
            percent = math.floor(tracker.total_calories / goal * 100 + 0.5)
            return _reply(
                IntentEnum.nutrition_info,
                f"Today you've consumed {_fmt(tracker.total_calories)} calories from our restaurant, "
                f"which is {percent}% of your daily goal ({goal} calories). "
                f"This includes {_fmt(tracker.protein)}g protein, {_fmt(tracker.carbohydrates)}g carbs, "
                f"and {_fmt(tracker.fat)}g fat.",
            )

        return _reply(
            IntentEnum.nutrition_info,
            "I can provide nutritional information for any item on our menu. Just ask about a "
            "specific dish, or check your daily calorie intake by asking "
            "'How many calories have I consumed today?'",
        )

    # -------------------- DIETARY -------------------- #

    def handle_dietary_question(self, message, user):
        text = message.lower()

        flag_branches = (
            (("vegetarian",), FoodItem.is_vegetarian, "vegetarian"),
            (("vegan",), FoodItem.is_vegan, "vegan"),
            (("gluten free", "gluten-free"), FoodItem.is_gluten_free, "gluten-free"),
        )
        for keywords, column, label in flag_branches:
            if not any(k in text for k in keywords):
                continue
            items = _available_items().filter(column.is_(True)).order_by(FoodItem.id).limit(MAX_SUGGESTIONS).all()
            if not items:
                return _reply(
                    IntentEnum.dietary_question,
                    f"I'm sorry, we don't currently have any {label} options available. "
                    "Please check back later as our menu changes regularly.",
                )
            return _reply(
                IntentEnum.dietary_question,
                f"Yes, we have several {label} options including: {_names(items)}. "
                "Would you like more details about any of these items?",
                items,
            )

        if "allergy" in text or "allergic" in text:
            allergen = _first_capture(ALLERGEN_PATTERNS, message)
            if not allergen:
                return _reply(
                    IntentEnum.dietary_question,
                    "If you have food allergies, please let me know what you're allergic to, and I can "
                    f"suggest items that don't contain those ingredients. {CROSS_CONTAMINATION_NOTE}",
                )

            allergen = allergen.lower()
            safe_items = [
                item for item in _available_items().order_by(FoodItem.id).all()
                if not any(allergen in ingredient.lower() for ingredient in item.ingredients or [])
            ][:MAX_SUGGESTIONS]

            if not safe_items:
                return _reply(
                    IntentEnum.dietary_question,
                    f"I'm sorry, I couldn't find items that are guaranteed to be free from {allergen}. "
                    "Please consult with our staff for more detailed allergen information.",
                )
            return _reply(
                IntentEnum.dietary_question,
                f"Based on our ingredient information, these items should be free from {allergen}: "
                f"{_names(safe_items)}. {CROSS_CONTAMINATION_NOTE} "
                "Would you like more details about any of these items?",
                safe_items,
            )

        return _reply(
            IntentEnum.dietary_question,
            "I can help you find food items that match your dietary preferences. We offer vegetarian, "
            "vegan, and gluten-free options. You can also ask about specific allergens or nutritional "
            "requirements.",
        )

    # -------------------- STATIC -------------------- #

    def handle_help(self, message, user):
        return _reply(IntentEnum.help, HELP_TEXT)

    def handle_feedback(self, message, user):
        return _reply(IntentEnum.feedback, FEEDBACK_TEXT)

    # -------------------- FALLBACK -------------------- #

    def handle_general_query(self, message, user):
        text = message.lower()

        for item in _available_items().order_by(FoodItem.id).all():
            if item.name.lower() in text:
                return _reply(
                    IntentEnum.general_query,
                    f"{item.name} is {item.description}. It costs ${item.price:.2f} and contains "
                    f"{_fmt(item.calories)} calories. Would you like to add it to your cart?",
                    [item],
                )

        if "menu" in text or "what do you have" in text or "what do you offer" in text:
            category = self.rng.choice(MENU_CATEGORIES)
            items = (
                _available_items()
                .filter(FoodItem.category == category)
                .order_by(FoodItem.id)
                .limit(MAX_SUGGESTIONS)
                .all()
            )
            if not items:
                return _reply(
                    IntentEnum.general_query,
                    "We offer a variety of appetizers, main courses, desserts, and beverages. "
                    "Would you like me to recommend something specific?",
                )
            return _reply(
                IntentEnum.general_query,
                f"We have a wide selection of items on our menu. Some of our {category}s include: "
                f"{_names(items)}. Would you like to see more categories or get details about any of "
                "these items?",
                items,
            )

        return _reply(
            IntentEnum.general_query,
            "I'm not sure I understand. You can ask me about our menu, get food recommendations, "
            "check your order status, or inquire about nutritional information. How can I help you today?",
        )

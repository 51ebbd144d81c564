from enum import Enum


class RoleEnum(str, Enum):
    user = "user"
    admin = "admin"


class FoodCategoryEnum(str, Enum):
    appetizer = "appetizer"
    main_course = "main course"
    dessert = "dessert"
    beverage = "beverage"
    side = "side"
    breakfast = "breakfast"
    lunch = "lunch"
    dinner = "dinner"
    snack = "snack"


class OrderStatusEnum(str, Enum):
    placed = "placed"
    confirmed = "confirmed"
    preparing = "preparing"
    out_for_delivery = "out for delivery"
    delivered = "delivered"
    cancelled = "cancelled"


class PaymentMethodEnum(str, Enum):
    credit_card = "credit card"
    debit_card = "debit card"
    cash_on_delivery = "cash on delivery"
    wallet = "wallet"


class PaymentStatusEnum(str, Enum):
    pending = "pending"
    completed = "completed"
    failed = "failed"
    refunded = "refunded"


class MealTypeEnum(str, Enum):
    breakfast = "breakfast"
    lunch = "lunch"
    dinner = "dinner"
    snack = "snack"


class ExpenseCategoryEnum(str, Enum):
    breakfast = "breakfast"
    lunch = "lunch"
    dinner = "dinner"
    snack = "snack"
    other = "other"


class SenderEnum(str, Enum):
    user = "user"
    bot = "bot"


class IntentEnum(str, Enum):
    greeting = "greeting"
    food_recommendation = "food_recommendation"
    order_status = "order_status"
    nutrition_info = "nutrition_info"
    dietary_question = "dietary_question"
    general_query = "general_query"
    feedback = "feedback"
    help = "help"
    other = "other"

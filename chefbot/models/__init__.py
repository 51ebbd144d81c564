from .user_profile import UserProfile
from .food_item import FoodItem, FoodRating
from .cart import Cart, CartItem
from .order import Order, OrderItem, OrderStatusHistory
from .chat_message import ChatMessage
from .calorie_tracker import CalorieTracker, MealEntry, MealFoodItem
from .expense_tracker import ExpenseTracker, ExpenseEntry

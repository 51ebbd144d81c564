from .intent_service import detect_intent
from .chatbot_service import ChatbotService
from .chat_history_service import ChatHistoryService, ChatbotConversationService
from .ledger_service import LedgerService
from .order_service import OrderService
from .calorie_tracker_service import CalorieTrackerService
from .expense_tracker_service import ExpenseTrackerService
from .user_profile_service import UserProfileService
from .food_service import FoodService
from .cart_service import CartService

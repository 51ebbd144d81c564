import re

from chefbot.enums.app_enum import IntentEnum


def _compile(*patterns):
    return [re.compile(p, re.IGNORECASE) for p in patterns]


# Evaluated top to bottom; the first intent with a matching pattern wins.
# Sets overlap ("vegan", "diet", "suggestion"), so the order is significant.
INTENT_PATTERNS = [
    (IntentEnum.greeting, _compile(
        r"^hi$", r"^hello$", r"^hey$", r"^howdy$", r"^greetings$",
        r"^good morning$", r"^good afternoon$", r"^good evening$",
        r"^hi there$", r"^hello there$", r"^hey there$",
    )),
    (IntentEnum.food_recommendation, _compile(
        r"recommend", r"suggestion", r"what should i eat", r"what can i eat",
        r"what's good", r"whats good", r"popular", r"best seller",
        r"special", r"chef's choice", r"chefs choice", r"signature",
        r"healthy option", r"diet", r"low calorie", r"high protein",
        r"vegetarian", r"vegan", r"gluten free",
    )),
    (IntentEnum.order_status, _compile(
        r"where is my order", r"order status", r"track order", r"delivery status",
        r"when will my order arrive", r"how long", r"eta", r"estimated time",
        r"order arrived", r"order delivered", r"order delayed",
    )),
    (IntentEnum.nutrition_info, _compile(
        r"calorie", r"nutrition", r"protein", r"carb", r"fat",
        r"how many calories", r"nutritional information", r"healthy",
        r"diet", r"macro", r"vitamin", r"mineral", r"sodium", r"sugar",
    )),
    (IntentEnum.dietary_question, _compile(
        r"allergy", r"allergic", r"intolerance", r"vegetarian", r"vegan",
        r"gluten free", r"dairy free", r"nut free", r"soy free",
        r"keto", r"paleo", r"low carb", r"low fat", r"low sodium",
    )),
    (IntentEnum.help, _compile(
        r"help", r"assist", r"support", r"guide", r"how to",
        r"how do i", r"what can you do", r"what do you do",
    )),
    (IntentEnum.feedback, _compile(
        r"feedback", r"review", r"rate", r"rating", r"comment",
        r"complain", r"complaint", r"suggest", r"suggestion",
    )),
]


def detect_intent(message: str) -> IntentEnum:
    for intent, patterns in INTENT_PATTERNS:
        if any(pattern.search(message) for pattern in patterns):
            return intent
    return IntentEnum.general_query

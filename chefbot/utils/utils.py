from calendar import monthrange
from datetime import date, datetime

from chefbot.enums.app_enum import ExpenseCategoryEnum, MealTypeEnum
from chefbot.errors import ValidationError

# -------------------- TIME-OF-DAY BUCKETS -------------------- #
# [start_hour, end_hour) -> bucket
MEAL_HOURS = (
    (5, 11, "breakfast"),
    (11, 16, "lunch"),
    (16, 22, "dinner"),
)


def meal_type_for_hour(hour: int) -> str:
    for start, end, bucket in MEAL_HOURS:
        if start <= hour < end:
            return MealTypeEnum(bucket).value
    return MealTypeEnum.snack.value


def expense_category_for_hour(hour: int) -> str:
    """
    Same windows as meal_type_for_hour, but late-night spending is filed
    under "other" rather than "snack".
    """
    for start, end, bucket in MEAL_HOURS:
        if start <= hour < end:
            return ExpenseCategoryEnum(bucket).value
    return ExpenseCategoryEnum.other.value


# -------------------- DATES -------------------- #

def parse_iso_date(value, field="date") -> date:
    if not value:
        raise ValidationError(f"{field} is required. Use YYYY-MM-DD")
    try:
        return datetime.fromisoformat(str(value)).date()
    except ValueError:
        raise ValidationError("Invalid date format. Use YYYY-MM-DD")


def parse_year_month(year, month):
    try:
        year, month = int(year), int(month)
    except (TypeError, ValueError):
        raise ValidationError("Invalid year or month format")
    if year < 1 or month < 1 or month > 12:
        raise ValidationError("Invalid year or month format")
    return year, month


def previous_month(year: int, month: int):
    if month == 1:
        return year - 1, 12
    return year, month - 1


def next_month(year: int, month: int):
    if month == 12:
        return year + 1, 1
    return year, month + 1


def days_in_month(year: int, month: int) -> int:
    return monthrange(year, month)[1]


def percent_of(value, total):
    return (value / total) * 100 if total else 0

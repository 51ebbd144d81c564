from .utils import (
    meal_type_for_hour,
    expense_category_for_hour,
    parse_iso_date,
    parse_year_month,
    previous_month,
    next_month,
    days_in_month,
    percent_of,
)

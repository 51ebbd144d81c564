# chefbot/services/calorie_tracker_service.py
from datetime import date, timedelta

from chefbot.extensions import db
from chefbot.enums.app_enum import MealTypeEnum
from chefbot.errors import ValidationError
from chefbot.models.calorie_tracker import CalorieTracker
from chefbot.models.nutrition import NUTRIENT_FIELDS, empty_nutrition_summary
from chefbot.utils import parse_iso_date, percent_of

MIN_CALORIE_GOAL = 500
MAX_CALORIE_GOAL = 10000


def _average_nutrition(trackers):
    summary = empty_nutrition_summary()
    for tracker in trackers:
        for field in NUTRIENT_FIELDS:
            summary[field] += getattr(tracker, field) or 0
    if trackers:
        summary = {field: value / len(trackers) for field, value in summary.items()}
    return summary


def _trackers_between(user_email, start, end):
    return (
        CalorieTracker.query
        .filter(CalorieTracker.user_email == user_email)
        .filter(CalorieTracker.log_date >= start)
        .filter(CalorieTracker.log_date <= end)
        .order_by(CalorieTracker.log_date.asc())
        .all()
    )


class CalorieTrackerService:

    @staticmethod
    def get_by_date(user, log_date):
        log_date = parse_iso_date(log_date)
        tracker = CalorieTracker.query.filter_by(user_email=user.user_email, log_date=log_date).first()

        if not tracker:
            return {
                "date": log_date.isoformat(),
                "totalCalories": 0,
                "calorieGoal": user.calorie_goal,
                "meals": [],
                "nutritionSummary": empty_nutrition_summary(),
            }
        return tracker.to_dict(calorie_goal=user.calorie_goal)

    @staticmethod
    def get_range(user, start_date, end_date):
        start = parse_iso_date(start_date, "startDate")
        end = parse_iso_date(end_date, "endDate")
        if start > end:
            raise ValidationError("startDate must be on or before endDate")

        trackers = _trackers_between(user.user_email, start, end)
        by_date = {t.log_date: t for t in trackers}
        meal_types = [m.value for m in MealTypeEnum]

        chart = {
            "dates": [],
            "calories": [],
            "calorieGoal": user.calorie_goal,
            "nutritionData": {"protein": [], "carbohydrates": [], "fat": []},
            "mealTypeData": {m: [] for m in meal_types},
        }

        day = start
        while day <= end:
            tracker = by_date.get(day)
            chart["dates"].append(day.isoformat())
            chart["calories"].append(tracker.total_calories if tracker else 0)
            for nutrient in chart["nutritionData"]:
                chart["nutritionData"][nutrient].append(getattr(tracker, nutrient) if tracker else 0)

            per_meal = dict.fromkeys(meal_types, 0)
            for meal in (tracker.meals if tracker else []):
                per_meal[meal.meal_type] += meal.total_calories
            for meal_type in meal_types:
                chart["mealTypeData"][meal_type].append(per_meal[meal_type])

            day += timedelta(days=1)

        return {"trackers": [t.to_dict() for t in trackers], "chartData": chart}

    @staticmethod
    def get_summary(user, today=None):
        today = today or date.today()
        yesterday = today - timedelta(days=1)
        # weeks start on Sunday
        start_of_week = today - timedelta(days=(today.weekday() + 1) % 7)
        start_of_month = today.replace(day=1)
        goal = user.calorie_goal

        week = _trackers_between(user.user_email, start_of_week, today)
        month = _trackers_between(user.user_email, start_of_month, today)
        today_tracker = next((t for t in month if t.log_date == today), None)
        yesterday_tracker = CalorieTracker.query.filter_by(
            user_email=user.user_email, log_date=yesterday
        ).first()

        today_calories = today_tracker.total_calories if today_tracker else 0
        yesterday_calories = yesterday_tracker.total_calories if yesterday_tracker else 0

        week_calories = sum(t.total_calories for t in week)
        week_avg = week_calories / len(week) if week else 0
        month_calories = sum(t.total_calories for t in month)
        month_avg = month_calories / len(month) if month else 0

        return {
            "calorieGoal": goal,
            "today": {
                "date": today.isoformat(),
                "calories": today_calories,
                "percentOfGoal": percent_of(today_calories, goal),
                "nutrition": today_tracker.nutrition_summary() if today_tracker else empty_nutrition_summary(),
            },
            "yesterday": {
                "date": yesterday.isoformat(),
                "calories": yesterday_calories,
                "percentOfGoal": percent_of(yesterday_calories, goal),
            },
            "week": {
                "totalCalories": week_calories,
                "avgCalories": week_avg,
                "avgPercentOfGoal": percent_of(week_avg, goal),
                "nutrition": _average_nutrition(week),
            },
            "month": {
                "totalCalories": month_calories,
                "avgCalories": month_avg,
                "avgPercentOfGoal": percent_of(month_avg, goal),
                "nutrition": _average_nutrition(month),
            },
        }

    @staticmethod
    def update_goal(user, payload):
        goal = (payload or {}).get("calorieGoal")
        if isinstance(goal, bool) or not isinstance(goal, (int, float)) \
                or not MIN_CALORIE_GOAL <= goal <= MAX_CALORIE_GOAL:
            raise ValidationError(
                f"Calorie goal must be between {MIN_CALORIE_GOAL} and {MAX_CALORIE_GOAL}"
            )

        user.calorie_goal = int(goal)
        db.session.commit()
        return {"message": "Calorie goal updated", "calorieGoal": user.calorie_goal}

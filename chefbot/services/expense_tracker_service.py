# chefbot/services/expense_tracker_service.py
from datetime import date

from chefbot.extensions import db
from chefbot.enums.app_enum import ExpenseCategoryEnum
from chefbot.errors import ValidationError
from chefbot.models.expense_tracker import ExpenseTracker
from chefbot.services.ledger_service import get_or_create
from chefbot.utils import days_in_month, next_month, parse_year_month, percent_of, previous_month

MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def _empty_categories():
    return {c.value: 0 for c in ExpenseCategoryEnum}


class ExpenseTrackerService:

    @staticmethod
    def get_by_month(user, year, month):
        year, month = parse_year_month(year, month)
        tracker = ExpenseTracker.query.filter_by(user_email=user.user_email, year=year, month=month).first()

        if not tracker:
            return {
                "year": year,
                "month": month,
                "totalExpense": 0,
                "expenses": [],
                "budget": 0,
                "savings": 0,
                "categories": _empty_categories(),
            }
        return tracker.to_dict()

    @staticmethod
    def get_range(user, args):
        start = parse_year_month(args.get("startYear"), args.get("startMonth"))
        end = parse_year_month(args.get("endYear"), args.get("endMonth"))
        if start > end:
            raise ValidationError("Start month must be on or before end month")

        trackers = [
            t for t in (
                ExpenseTracker.query
                .filter(ExpenseTracker.user_email == user.user_email)
                .filter(ExpenseTracker.year.between(start[0], end[0]))
                .order_by(ExpenseTracker.year.asc(), ExpenseTracker.month.asc())
                .all()
            )
            if start <= (t.year, t.month) <= end
        ]
        by_month = {(t.year, t.month): t for t in trackers}

        chart = {"labels": [], "expenses": [], "categories": {c: [] for c in _empty_categories()}}
        current = start
        while current <= end:
            tracker = by_month.get(current)
            chart["labels"].append(f"{MONTH_NAMES[current[1] - 1]} {current[0]}")
            chart["expenses"].append(tracker.total_expense if tracker else 0)
            categories = tracker.categories() if tracker else _empty_categories()
            for category, value in categories.items():
                chart["categories"][category].append(value)
            current = next_month(*current)

        total = sum(t.total_expense for t in trackers)
        category_totals = _empty_categories()
        for tracker in trackers:
            for category, value in tracker.categories().items():
                category_totals[category] += value

        return {
            "trackers": [t.to_dict() for t in trackers],
            "chartData": chart,
            "summary": {
                "totalExpense": total,
                "avgExpense": total / len(trackers) if trackers else 0,
                "categoryTotals": category_totals,
            },
        }

    @staticmethod
    def get_summary(user, today=None):
        today = today or date.today()
        year, month = today.year, today.month
        prev_year, prev_month = previous_month(year, month)

        year_trackers = ExpenseTracker.query.filter_by(user_email=user.user_email, year=year).all()
        current = next((t for t in year_trackers if t.month == month), None)
        previous = ExpenseTracker.query.filter_by(
            user_email=user.user_email, year=prev_year, month=prev_month
        ).first()

        current_expense = current.total_expense if current else 0
        previous_expense = previous.total_expense if previous else 0
        year_expense = sum(t.total_expense for t in year_trackers)
        budget = current.budget if current else 0

        return {
            "currentMonth": {
                "year": year,
                "month": month,
                "expense": current_expense,
                "budget": budget,
                "budgetRemaining": budget - current_expense,
                "budgetPercentUsed": percent_of(current_expense, budget),
                "savings": current.savings if current else 0,
                "categoryBreakdown": current.categories() if current else _empty_categories(),
                "dailyAverage": current_expense / days_in_month(year, month),
            },
            "previousMonth": {
                "year": prev_year,
                "month": prev_month,
                "expense": previous_expense,
            },
            "yearToDate": {
                "expense": year_expense,
                "monthlyAverage": year_expense / len(year_trackers) if year_trackers else 0,
            },
            "comparison": {
                "monthOverMonthChange": (
                    (current_expense - previous_expense) / previous_expense * 100
                    if previous_expense > 0 else 0
                ),
            },
        }

    @staticmethod
    def update_budget(user, payload, today=None):
        payload = payload or {}
        today = today or date.today()

        budget = payload.get("budget")
        if isinstance(budget, bool) or not isinstance(budget, (int, float)):
            raise ValidationError("Budget must be a number")
        if budget < 0:
            raise ValidationError("Budget cannot be negative")

        year, month = parse_year_month(
            payload["year"] if payload.get("year") is not None else today.year,
            payload["month"] if payload.get("month") is not None else today.month,
        )

        tracker = get_or_create(ExpenseTracker, user_email=user.user_email, year=year, month=month)
        tracker.budget = budget
        tracker.savings = budget - tracker.total_expense if budget > tracker.total_expense else 0
        db.session.commit()

        return {"message": "Budget updated", "budget": budget, "savings": tracker.savings}

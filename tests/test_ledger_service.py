from datetime import date, datetime

import pytest

from chefbot.extensions import db
from chefbot.models import CalorieTracker, ExpenseTracker, MealEntry
from chefbot.services.ledger_service import LedgerService, get_or_create
from chefbot.services.order_service import OrderService
from tests.conftest import CHECKOUT, fill_cart, make_food, make_user


@pytest.fixture
def user(ctx):
    return make_user()


def place_order(user, now, price=25, calories=600, quantity=1):
    fill_cart(user, (make_food(price=price, calories=calories, protein=10), quantity))
    return OrderService.create_order(user, CHECKOUT, now=now)


@pytest.mark.parametrize("hour, meal_type, category", [
    (8, "breakfast", "breakfast"),
    (13, "lunch", "lunch"),
    (19, "dinner", "dinner"),
    (23, "snack", "other"),
])
def test_order_is_bucketed_by_hour(user, hour, meal_type, category):
    order = place_order(user, datetime(2026, 3, 2, hour, 15))

    tracker = CalorieTracker.query.filter_by(user_email=user.user_email).one()
    assert tracker.log_date == date(2026, 3, 2)
    assert tracker.meals[0].meal_type == meal_type
    assert tracker.meals[0].order_id == order.id

    expenses = ExpenseTracker.query.filter_by(user_email=user.user_email).one()
    assert (expenses.year, expenses.month) == (2026, 3)
    assert getattr(expenses, category) == pytest.approx(order.total_amount)
    assert expenses.expenses[0].category == category


def test_orders_on_the_same_day_share_one_tracker(user):
    first = place_order(user, datetime(2026, 3, 2, 9, 0), calories=400, quantity=2)
    second = place_order(user, datetime(2026, 3, 2, 19, 0), calories=700)

    tracker = CalorieTracker.query.filter_by(user_email=user.user_email).one()
    assert tracker.total_calories == 1500
    assert tracker.protein == 30
    assert [m.meal_type for m in tracker.meals] == ["breakfast", "dinner"]
    assert tracker.meals[0].food_items[0].calories == 800

    expenses = ExpenseTracker.query.filter_by(user_email=user.user_email).one()
    assert expenses.total_expense == pytest.approx(first.total_amount + second.total_amount)
    assert expenses.expenses[0].description == "Food order - 1 items"


def test_orders_on_different_days_get_separate_trackers(user):
    place_order(user, datetime(2026, 3, 2, 12, 0))
    place_order(user, datetime(2026, 3, 3, 12, 0))

    assert CalorieTracker.query.filter_by(user_email=user.user_email).count() == 2
    assert ExpenseTracker.query.filter_by(user_email=user.user_email).count() == 1


def test_ledger_failure_does_not_undo_order(user, monkeypatch):
    def broken(order, now):
        raise RuntimeError("ledger down")

    monkeypatch.setattr(LedgerService, "update_calorie_tracker", staticmethod(broken))

    order = place_order(user, datetime(2026, 3, 2, 12, 0))

    assert order.id is not None
    assert CalorieTracker.query.count() == 0
    assert MealEntry.query.count() == 0
    # the expense side still runs
    assert ExpenseTracker.query.filter_by(user_email=user.user_email).one().total_expense == \
        pytest.approx(order.total_amount)


def test_get_or_create_returns_existing_row(user):
    first = get_or_create(ExpenseTracker, user_email=user.user_email, year=2026, month=4)
    second = get_or_create(ExpenseTracker, user_email=user.user_email, year=2026, month=4)
    assert first.id == second.id


class _NoMatch:
    def first(self):
        return None


class _FirstLookupMisses:
    """Model.query whose first lookup misses, as if another request inserted the row meanwhile."""

    def __init__(self, query):
        self.query = query
        self.missed = False

    def filter_by(self, **keys):
        if self.missed:
            return self.query.filter_by(**keys)
        self.missed = True
        return _NoMatch()


def test_get_or_create_reads_back_row_after_lost_insert(user, monkeypatch):
    db.session.add(ExpenseTracker(user_email=user.user_email, year=2026, month=4, budget=5))
    db.session.commit()
    monkeypatch.setattr(ExpenseTracker, "query", _FirstLookupMisses(ExpenseTracker.query))

    row = get_or_create(ExpenseTracker, user_email="alice@example.com", year=2026, month=4)

    assert row.budget == 5
    assert db.session.query(ExpenseTracker).filter_by(
        user_email="alice@example.com", year=2026, month=4
    ).count() == 1

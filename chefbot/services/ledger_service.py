# chefbot/services/ledger_service.py
import logging
from datetime import datetime

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError

from chefbot.extensions import db
from chefbot.models.calorie_tracker import CalorieTracker, MealEntry, MealFoodItem
from chefbot.models.expense_tracker import ExpenseEntry, ExpenseTracker
from chefbot.models.nutrition import NUTRIENT_FIELDS
from chefbot.utils import expense_category_for_hour, meal_type_for_hour

logger = logging.getLogger(__name__)


def get_or_create(model, **keys):
    """
    Return the row identified by ``keys``, creating it when missing. Losing a
    creation race to another request surfaces as an IntegrityError on the
    unique key, in which case the winner's row is read back.
    """
    row = model.query.filter_by(**keys).first()
    if row:
        return row

    row = model(**keys)
    db.session.add(row)
    try:
        db.session.flush()
    except IntegrityError:
        db.session.rollback()
        row = model.query.filter_by(**keys).one()
    return row


class LedgerService:
    """
    Derived calorie/expense ledgers, written right after an order is
    committed. Both updates are best effort: a failure is logged and never
    reaches the order.
    """

    @staticmethod
    def record_order(order, now=None):
        now = now or datetime.now()

        try:
            LedgerService.update_calorie_tracker(order, now)
        except Exception:
            db.session.rollback()
            logger.exception("[LedgerService] Calorie tracker update failed for order %s", order.id)

        try:
            LedgerService.update_expense_tracker(order, now)
        except Exception:
            db.session.rollback()
            logger.exception("[LedgerService] Expense tracker update failed for order %s", order.id)

    @staticmethod
    def update_calorie_tracker(order, now):
        # Bucketed by the wall-clock hour of the write, not by the order timestamp
        meal_type = meal_type_for_hour(now.hour)
        tracker = get_or_create(CalorieTracker, user_email=order.user_email, log_date=now.date())

        meal = MealEntry(
            tracker_id=tracker.id,
            order_id=order.id,
            meal_type=meal_type,
            total_calories=order.total_calories,
            time=now,
        )
        for item in order.items:
            meal.food_items.append(
                MealFoodItem(
                    food_item_id=item.food_item_id,
                    quantity=item.quantity,
                    calories=item.food_item.calories * item.quantity,
                )
            )
        db.session.add(meal)

        summary = order.nutrition_summary()
        increments = {"total_calories": CalorieTracker.total_calories + (order.total_calories or 0)}
        for field in NUTRIENT_FIELDS:
            increments[field] = getattr(CalorieTracker, field) + summary[field]

        db.session.execute(
            update(CalorieTracker)
            .where(CalorieTracker.id == tracker.id)
            .values(**increments)
            .execution_options(synchronize_session=False)
        )
        db.session.commit()

        logger.info(
            "[LedgerService] Logged %s kcal (%s) for %s on %s",
            order.total_calories, meal_type, order.user_email, now.date(),
        )
        return tracker

    @staticmethod
    def update_expense_tracker(order, now):
        category = expense_category_for_hour(now.hour)
        tracker = get_or_create(
            ExpenseTracker, user_email=order.user_email, year=now.year, month=now.month
        )

        db.session.add(
            ExpenseEntry(
                tracker_id=tracker.id,
                order_id=order.id,
                amount=order.total_amount,
                date=now,
                category=category,
                description=f"Food order - {len(order.items)} items",
            )
        )

        category_column = getattr(ExpenseTracker, category)
        db.session.execute(
            update(ExpenseTracker)
            .where(ExpenseTracker.id == tracker.id)
            .values(
                {
                    ExpenseTracker.total_expense: ExpenseTracker.total_expense + order.total_amount,
                    category_column: category_column + order.total_amount,
                }
            )
            .execution_options(synchronize_session=False)
        )
        db.session.commit()

        logger.info(
            "[LedgerService] Logged expense %.2f (%s) for %s in %04d-%02d",
            order.total_amount, category, order.user_email, now.year, now.month,
        )
        return tracker

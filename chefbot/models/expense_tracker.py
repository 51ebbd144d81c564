from datetime import datetime

from chefbot.extensions import db
from chefbot.enums.app_enum import ExpenseCategoryEnum
from chefbot.models.types import BigInt


class ExpenseTracker(db.Model):
    __tablename__ = "expense_trackers"

    id = db.Column(BigInt, primary_key=True)
    user_email = db.Column(db.String(255), nullable=False, index=True)
    year = db.Column(db.Integer, nullable=False)
    month = db.Column(db.Integer, nullable=False)

    total_expense = db.Column(db.Float, nullable=False, default=0)
    budget = db.Column(db.Float, nullable=False, default=0)
    savings = db.Column(db.Float, nullable=False, default=0)

    # per-category running totals, one column per ExpenseCategoryEnum value
    breakfast = db.Column(db.Float, nullable=False, default=0)
    lunch = db.Column(db.Float, nullable=False, default=0)
    dinner = db.Column(db.Float, nullable=False, default=0)
    snack = db.Column(db.Float, nullable=False, default=0)
    other = db.Column(db.Float, nullable=False, default=0)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    expenses = db.relationship(
        "ExpenseEntry",
        backref="tracker",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="ExpenseEntry.id",
    )

    __table_args__ = (
        db.UniqueConstraint("user_email", "year", "month", name="uk_expense_user_month"),
        db.CheckConstraint("month BETWEEN 1 AND 12", name="ck_expense_month"),
    )

    def categories(self):
        return {c.value: getattr(self, c.value) or 0 for c in ExpenseCategoryEnum}

    def to_dict(self):
        return {
            "id": self.id,
            "year": self.year,
            "month": self.month,
            "totalExpense": self.total_expense,
            "expenses": [e.to_dict() for e in self.expenses],
            "budget": self.budget,
            "savings": self.savings,
            "categories": self.categories(),
        }


class ExpenseEntry(db.Model):
    __tablename__ = "expense_entries"

    id = db.Column(BigInt, primary_key=True)
    tracker_id = db.Column(BigInt, db.ForeignKey("expense_trackers.id"), nullable=False, index=True)
    order_id = db.Column(BigInt, db.ForeignKey("orders.id"))
    amount = db.Column(db.Float, nullable=False)
    date = db.Column(db.DateTime, nullable=False, default=datetime.now)
    category = db.Column(db.String(20), nullable=False, default=ExpenseCategoryEnum.other.value)
    description = db.Column(db.String(255))

    def to_dict(self):
        return {
            "order": self.order_id,
            "amount": self.amount,
            "date": self.date.isoformat(),
            "category": self.category,
            "description": self.description,
        }

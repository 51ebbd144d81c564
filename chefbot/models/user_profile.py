from datetime import datetime

from chefbot.extensions import db
from chefbot.enums.app_enum import RoleEnum
from chefbot.models.types import BigInt

DEFAULT_CALORIE_GOAL = 2000


class UserProfile(db.Model):
    __tablename__ = "user_profiles"

    id = db.Column(BigInt, primary_key=True)
    user_email = db.Column(db.String(255), nullable=False, unique=True, index=True)
    name = db.Column(db.String(120), nullable=False)
    # user | admin
    role = db.Column(db.String(20), nullable=False, default=RoleEnum.user.value)
    dietary_preferences = db.Column(db.JSON, nullable=False, default=list)
    calorie_goal = db.Column(db.Integer, nullable=False, default=DEFAULT_CALORIE_GOAL)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def is_admin(self):
        return self.role == RoleEnum.admin.value

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.user_email,
            "name": self.name,
            "role": self.role,
            "dietaryPreferences": self.dietary_preferences or [],
            "calorieGoal": self.calorie_goal,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

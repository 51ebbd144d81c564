from datetime import datetime

from chefbot.extensions import db
from chefbot.enums.app_enum import IntentEnum
from chefbot.models.types import BigInt


class ChatMessage(db.Model):
    __tablename__ = "chat_messages"

    id = db.Column(BigInt, primary_key=True)
    user_email = db.Column(db.String(255), nullable=False, index=True)
    session_id = db.Column(db.String(120), nullable=False, index=True)
    message = db.Column(db.Text, nullable=False)
    # user | bot
    sender = db.Column(db.String(10), nullable=False)
    intent = db.Column(db.String(30), nullable=False, default=IntentEnum.general_query.value)
    related_food_items = db.Column(db.JSON, nullable=False, default=list)
    timestamp = db.Column(db.DateTime, nullable=False, default=datetime.now, index=True)

    def to_dict(self, related_items=None):
        return {
            "id": self.id,
            "user": self.user_email,
            "message": self.message,
            "sender": self.sender,
            "timestamp": self.timestamp.isoformat(),
            "relatedFoodItems": related_items if related_items is not None else (self.related_food_items or []),
            "intent": self.intent,
            "sessionId": self.session_id,
        }

# chefbot/services/chat_history_service.py
import time

from chefbot.extensions import db
from chefbot.enums.app_enum import IntentEnum, SenderEnum
from chefbot.errors import ValidationError
from chefbot.models.chat_message import ChatMessage
from chefbot.models.food_item import FoodItem


def new_session_id(user):
    return f"session_{int(time.time() * 1000)}_{user.id}"


class ChatHistoryService:

    @staticmethod
    def append(user_email, session_id, message, sender, intent=None, related_food_items=None):
        record = ChatMessage(
            user_email=user_email,
            session_id=session_id,
            message=message,
            sender=sender,
            intent=intent or IntentEnum.general_query.value,
            related_food_items=list(related_food_items or []),
        )
        db.session.add(record)
        db.session.commit()
        return record

    @staticmethod
    def list_messages(user_email, session_id=None):
        query = ChatMessage.query.filter_by(user_email=user_email)
        if session_id:
            query = query.filter_by(session_id=session_id)
        return query.order_by(ChatMessage.timestamp.asc(), ChatMessage.id.asc()).all()

    @staticmethod
    def clear(user_email, session_id=None):
        query = ChatMessage.query.filter_by(user_email=user_email)
        if session_id:
            query = query.filter_by(session_id=session_id)
        deleted = query.delete(synchronize_session=False)
        db.session.commit()
        return deleted

    @staticmethod
    def serialize(messages):
        """Embed a short description of every referenced food item."""
        ids = {food_id for m in messages for food_id in (m.related_food_items or [])}
        foods = {}
        if ids:
            foods = {f.id: f.to_summary() for f in FoodItem.query.filter(FoodItem.id.in_(ids)).all()}

        return [
            m.to_dict(related_items=[foods[i] for i in (m.related_food_items or []) if i in foods])
            for m in messages
        ]


class ChatbotConversationService:

    @staticmethod
    def send_message(user, payload, chatbot):
        message = (payload or {}).get("message")
        if not isinstance(message, str) or not message.strip():
            raise ValidationError("Message is required")

        session_id = (payload or {}).get("sessionId") or new_session_id(user)

        user_message = ChatHistoryService.append(
            user.user_email, session_id, message, SenderEnum.user.value
        )

        reply = chatbot.process_message(message, user)

        bot_message = ChatHistoryService.append(
            user.user_email,
            session_id,
            reply["text"],
            SenderEnum.bot.value,
            intent=reply.get("intent"),
            related_food_items=reply.get("related_food_items"),
        )

        return {
            "userMessage": user_message.to_dict(),
            "botMessage": ChatHistoryService.serialize([bot_message])[0],
            "sessionId": session_id,
        }

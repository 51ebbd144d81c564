from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required

from chefbot.services.chat_history_service import ChatbotConversationService, ChatHistoryService
from chefbot.services.chatbot_service import ChatbotService
from chefbot.utils.jwt_utils import get_current_user

chatbot_bp = Blueprint("chatbot", __name__, url_prefix="/api/chatbot")


@chatbot_bp.route("/message", methods=["POST"])
@jwt_required()
def send_message():
    user = get_current_user()
    if not user:
        return jsonify({"message": "Unauthorized"}), 401

    chatbot = ChatbotService(rng=current_app.extensions["chatbot_rng"])
    data = request.get_json(silent=True)
    return jsonify(ChatbotConversationService.send_message(user, data, chatbot)), 200


@chatbot_bp.route("/history", methods=["GET"])
@jwt_required()
def get_history():
    user = get_current_user()
    if not user:
        return jsonify({"message": "Unauthorized"}), 401

    messages = ChatHistoryService.list_messages(user.user_email, request.args.get("sessionId"))
    return jsonify(ChatHistoryService.serialize(messages)), 200


@chatbot_bp.route("/history", methods=["DELETE"])
@jwt_required()
def clear_history():
    user = get_current_user()
    if not user:
        return jsonify({"message": "Unauthorized"}), 401

    ChatHistoryService.clear(user.user_email, request.args.get("sessionId"))
    return jsonify({"message": "Chat history cleared"}), 200

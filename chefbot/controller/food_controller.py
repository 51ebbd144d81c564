from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from chefbot.services.food_service import FoodService
from chefbot.utils.jwt_utils import get_current_user

food_bp = Blueprint("food", __name__, url_prefix="/api/food")


@food_bp.route("", methods=["GET"])
def get_food_items():
    return jsonify([item.to_dict() for item in FoodService.list_items(request.args)]), 200


@food_bp.route("/<int:food_id>", methods=["GET"])
def get_food_item(food_id):
    return jsonify(FoodService.get_item(food_id).to_dict()), 200


@food_bp.route("/<int:food_id>/reviews", methods=["POST"])
@jwt_required()
def add_review(food_id):
    user = get_current_user()
    if not user:
        return jsonify({"message": "Unauthorized"}), 401

    item = FoodService.add_review(user, food_id, request.get_json(silent=True))
    return jsonify(item.to_dict()), 201

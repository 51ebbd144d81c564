from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from chefbot.services.cart_service import CartService
from chefbot.utils.jwt_utils import get_current_user

cart_bp = Blueprint("cart", __name__, url_prefix="/api/cart")


@cart_bp.route("", methods=["GET"])
@jwt_required()
def get_cart():
    user = get_current_user()
    if not user:
        return jsonify({"message": "Unauthorized"}), 401

    return jsonify(CartService.get_cart(user).to_dict()), 200


@cart_bp.route("", methods=["POST"])
@jwt_required()
def add_to_cart():
    user = get_current_user()
    if not user:
        return jsonify({"message": "Unauthorized"}), 401

    cart = CartService.add_item(user, request.get_json(silent=True))
    return jsonify(cart.to_dict()), 201


@cart_bp.route("", methods=["DELETE"])
@jwt_required()
def clear_cart():
    user = get_current_user()
    if not user:
        return jsonify({"message": "Unauthorized"}), 401

    return jsonify(CartService.clear(user).to_dict()), 200

from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from chefbot.services.order_service import OrderService
from chefbot.utils.jwt_utils import get_current_user

order_bp = Blueprint("order", __name__, url_prefix="/api/orders")


@order_bp.route("", methods=["POST"])
@jwt_required()
def create_order():
    user = get_current_user()
    if not user:
        return jsonify({"message": "Unauthorized"}), 401

    order = OrderService.create_order(user, request.get_json(silent=True))
    return jsonify(order.to_dict()), 201


@order_bp.route("", methods=["GET"])
@jwt_required()
def get_orders():
    user = get_current_user()
    if not user:
        return jsonify({"message": "Unauthorized"}), 401

    return jsonify([o.to_dict() for o in OrderService.list_orders(user)]), 200


@order_bp.route("/<int:order_id>", methods=["GET"])
@jwt_required()
def get_order(order_id):
    user = get_current_user()
    if not user:
        return jsonify({"message": "Unauthorized"}), 401

    return jsonify(OrderService.get_order(user, order_id).to_dict()), 200


@order_bp.route("/<int:order_id>/status", methods=["PUT"])
@jwt_required()
def update_order_status(order_id):
    user = get_current_user()
    if not user:
        return jsonify({"message": "Unauthorized"}), 401

    order = OrderService.update_status(user, order_id, request.get_json(silent=True))
    return jsonify(order.to_dict()), 200


@order_bp.route("/<int:order_id>/cancel", methods=["PUT"])
@jwt_required()
def cancel_order(order_id):
    user = get_current_user()
    if not user:
        return jsonify({"message": "Unauthorized"}), 401

    return jsonify(OrderService.cancel_order(user, order_id).to_dict()), 200


@order_bp.route("/<int:order_id>/feedback", methods=["PUT"])
@jwt_required()
def add_order_feedback(order_id):
    user = get_current_user()
    if not user:
        return jsonify({"message": "Unauthorized"}), 401

    order = OrderService.add_feedback(user, order_id, request.get_json(silent=True))
    return jsonify(order.to_dict()), 200

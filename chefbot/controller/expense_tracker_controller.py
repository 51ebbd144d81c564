from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from chefbot.services.expense_tracker_service import ExpenseTrackerService
from chefbot.utils.jwt_utils import get_current_user

expense_tracker_bp = Blueprint("expense_tracker", __name__, url_prefix="/api/expense-tracker")


@expense_tracker_bp.route("/month/<year>/<month>", methods=["GET"])
@jwt_required()
def get_by_month(year, month):
    user = get_current_user()
    if not user:
        return jsonify({"message": "Unauthorized"}), 401

    return jsonify(ExpenseTrackerService.get_by_month(user, year, month)), 200


@expense_tracker_bp.route("/range", methods=["GET"])
@jwt_required()
def get_range():
    user = get_current_user()
    if not user:
        return jsonify({"message": "Unauthorized"}), 401

    return jsonify(ExpenseTrackerService.get_range(user, request.args)), 200


@expense_tracker_bp.route("/summary", methods=["GET"])
@jwt_required()
def get_summary():
    user = get_current_user()
    if not user:
        return jsonify({"message": "Unauthorized"}), 401

    return jsonify(ExpenseTrackerService.get_summary(user)), 200


@expense_tracker_bp.route("/budget", methods=["PUT"])
@jwt_required()
def update_budget():
    user = get_current_user()
    if not user:
        return jsonify({"message": "Unauthorized"}), 401

    return jsonify(ExpenseTrackerService.update_budget(user, request.get_json(silent=True))), 200

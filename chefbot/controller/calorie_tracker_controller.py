from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from chefbot.services.calorie_tracker_service import CalorieTrackerService
from chefbot.utils.jwt_utils import get_current_user

calorie_tracker_bp = Blueprint("calorie_tracker", __name__, url_prefix="/api/calorie-tracker")


@calorie_tracker_bp.route("/date/<log_date>", methods=["GET"])
@jwt_required()
def get_by_date(log_date):
    user = get_current_user()
    if not user:
        return jsonify({"message": "Unauthorized"}), 401

    return jsonify(CalorieTrackerService.get_by_date(user, log_date)), 200


@calorie_tracker_bp.route("/range", methods=["GET"])
@jwt_required()
def get_range():
    user = get_current_user()
    if not user:
        return jsonify({"message": "Unauthorized"}), 401

    start_date = request.args.get("startDate")
    end_date = request.args.get("endDate")
    return jsonify(CalorieTrackerService.get_range(user, start_date, end_date)), 200


@calorie_tracker_bp.route("/summary", methods=["GET"])
@jwt_required()
def get_summary():
    user = get_current_user()
    if not user:
        return jsonify({"message": "Unauthorized"}), 401

    return jsonify(CalorieTrackerService.get_summary(user)), 200


@calorie_tracker_bp.route("/goal", methods=["PUT"])
@jwt_required()
def update_goal():
    user = get_current_user()
    if not user:
        return jsonify({"message": "Unauthorized"}), 401

    return jsonify(CalorieTrackerService.update_goal(user, request.get_json(silent=True))), 200

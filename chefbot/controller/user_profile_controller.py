from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from chefbot.services.user_profile_service import UserProfileService
from chefbot.utils.jwt_utils import get_current_user

user_profile_bp = Blueprint("user_profile", __name__, url_prefix="/api/user-profile")


@user_profile_bp.route("", methods=["GET"])
@jwt_required()
def get_user_profile():
    user = get_current_user()
    if not user:
        return jsonify({"message": "Unauthorized"}), 401

    return jsonify(user.to_dict()), 200


@user_profile_bp.route("", methods=["POST"])
@jwt_required()
def sync_user_profile():
    user = get_current_user()
    if not user:
        return jsonify({"message": "Unauthorized"}), 401

    jwt_token = request.headers.get("Authorization").split(" ")[1]
    data = request.get_json(silent=True)

    user = UserProfileService.sync_from_auth_service(user, data, jwt_token)
    return jsonify(user.to_dict()), 200


@user_profile_bp.route("", methods=["PUT"])
@jwt_required()
def update_user_profile():
    user = get_current_user()
    if not user:
        return jsonify({"message": "Unauthorized"}), 401

    user = UserProfileService.update_user_profile(user, request.get_json(silent=True))
    return jsonify(user.to_dict()), 200

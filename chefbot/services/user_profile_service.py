# chefbot/services/user_profile_service.py
import logging

from chefbot.extensions import db
from chefbot.errors import ValidationError
from chefbot.external.auth_service import AuthServiceError, fetch_auth_profile

logger = logging.getLogger(__name__)

DIETARY_PREFERENCES = ("vegetarian", "vegan", "gluten-free")


def _validate_preferences(preferences):
    if not isinstance(preferences, list) or any(p not in DIETARY_PREFERENCES for p in preferences):
        raise ValidationError(f"dietaryPreferences must be a list drawn from {', '.join(DIETARY_PREFERENCES)}")
    return preferences


class UserProfileService:

    @staticmethod
    def sync_from_auth_service(user, payload, jwt_token):
        """Refresh the display name from the auth service, then apply local settings."""
        try:
            user_info = fetch_auth_profile(jwt_token)
        except AuthServiceError as e:
            logger.warning("[UserProfileService] Auth service lookup failed for %s: %s", user.user_email, e)
            raise ValidationError(str(e))

        user.name = user_info.get("name") or user_info.get("fullName") or user.name
        return UserProfileService.update_user_profile(user, payload)

    @staticmethod
    def update_user_profile(user, payload):
        payload = payload or {}

        if "name" in payload:
            name = str(payload["name"] or "").strip()
            if not name:
                raise ValidationError("Name cannot be empty")
            user.name = name

        if "dietaryPreferences" in payload:
            user.dietary_preferences = _validate_preferences(payload["dietaryPreferences"])

        db.session.commit()
        return user

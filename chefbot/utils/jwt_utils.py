from flask_jwt_extended import get_jwt, get_jwt_identity

from chefbot.extensions import db
from chefbot.models.user_profile import UserProfile


def get_current_user_email():
    return get_jwt_identity()


def get_current_user():
    """
    Local profile of the token holder. Tokens are issued by the auth service,
    so the first authenticated request creates a default profile.
    """
    user_email = get_current_user_email()
    if not user_email:
        return None

    profile = UserProfile.query.filter_by(user_email=user_email).first()
    if profile:
        return profile

    claims = get_jwt()
    profile = UserProfile(
        user_email=user_email,
        name=claims.get("name") or user_email.split("@")[0],
    )
    db.session.add(profile)
    db.session.commit()
    return profile

import requests
from flask import current_app


class AuthServiceError(Exception):
    pass


def fetch_auth_profile(jwt_token: str) -> dict:
    """Look up the token holder's account on the auth service."""
    config = current_app.config
    try:
        response = requests.get(
            config["AUTH_SERVICE_URL"],
            headers={"Authorization": f"Bearer {jwt_token}"},
            timeout=config["AUTH_SERVICE_TIMEOUT"],
        )
    except requests.RequestException as e:
        raise AuthServiceError(f"Auth service unreachable: {e}") from e

    if response.status_code != 200:
        raise AuthServiceError(f"Failed to fetch user profile: {response.status_code}")

    payload = response.json()
    # some deployments wrap the account in {"data": {...}}
    return payload.get("data", payload)

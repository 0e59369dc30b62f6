"""Provider access token -> profile -> local ``User``.

The provider token is only used to fetch the profile; it is not verified
against the provider's token-info endpoint.
"""
import logging

import requests
from flask import current_app
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from models import db
from models.user import User
from app.services.errors import AuthenticationError, UpstreamError

logger = logging.getLogger(__name__)

GOOGLE = "google"
FACEBOOK = "facebook"
PROVIDERS = (GOOGLE, FACEBOOK)


def http_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.3, min=0.3, max=3),
        retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
    )


@http_retry()
def _get_json(url, **kwargs):
    resp = requests.get(url, timeout=current_app.config["OAUTH_HTTP_TIMEOUT"], **kwargs)
    if resp.status_code in (400, 401, 403):
        raise AuthenticationError("Invalid token")
    resp.raise_for_status()
    return resp.json()


def fetch_profile(provider: str, access_token: str) -> dict:
    """Return ``{"id", "email", "name", "picture"}`` for the token's owner."""
    cfg = current_app.config
    try:
        if provider == GOOGLE:
            data = _get_json(
                cfg["GOOGLE_USERINFO_URL"],
                headers={"Authorization": f"Bearer {access_token}"},
            )
            provider_id = data.get("sub")
            picture = data.get("picture")
        elif provider == FACEBOOK:
            data = _get_json(
                cfg["FACEBOOK_GRAPH_URL"],
                params={"access_token": access_token, "fields": "id,name,email,picture"},
            )
            provider_id = data.get("id")
            picture = ((data.get("picture") or {}).get("data") or {}).get("url")
        else:
            raise AuthenticationError(f"Unsupported provider '{provider}'")
    except requests.RequestException as e:
        logger.error("Profile lookup with %s failed: %s", provider, e)
        raise UpstreamError("Authentication failed") from e

    if not provider_id:
        raise AuthenticationError("Invalid token")
    return {
        "id": str(provider_id),
        "email": data.get("email"),
        "name": data.get("name"),
        "picture": picture,
    }


def find_or_create_user(provider: str, profile: dict) -> User:
    user = User.query.filter_by(provider=provider, provider_id=profile["id"]).first()
    if user:
        return user
    user = User(
        provider=provider,
        provider_id=profile["id"],
        email=profile.get("email"),
        name=profile.get("name"),
        picture=profile.get("picture"),
    )
    db.session.add(user)
    db.session.flush()
    logger.info("Created %s user %s", provider, user.id)
    return user

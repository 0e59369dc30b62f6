import logging
from flask import Blueprint, request, jsonify, current_app
from flask_limiter.util import get_remote_address
from extensions import limiter
from models import db
from models.user import User
from models.merchant import Merchant
from app.version import API_PREFIX
from app.auth.permissions import CUSTOMER, MERCHANT
from app.services.auth import fetch_profile, find_or_create_user, GOOGLE, FACEBOOK
from app.services.errors import ServiceError
from app.schemas.auth import OAuthTokenRequest, RefreshRequest
from app.utils import (
    ok,
    error,
    service_error,
    transactional,
    internal_error_response,
    auth_required,
    role_required,
    decode_token,
    issue_tokens,
    TokenError,
)
from app.utils.validation import validate_schema

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix=API_PREFIX)


def _exchange(provider):
    data: OAuthTokenRequest = request.validated_data
    try:
        profile = fetch_profile(provider, data.access_token)
        with transactional(f"Failed to sign in with {provider}"):
            user = find_or_create_user(provider, profile)
    except ServiceError as e:
        return service_error(e)
    except Exception:
        return internal_error_response()
    tokens = issue_tokens(user.id, CUSTOMER)
    logger.info("User %s signed in with %s", user.id, provider)
    return jsonify({
        "status": "success",
        **tokens,
        "expires_in": current_app.config["ACCESS_TOKEN_LIFETIME_MIN"] * 60,
        "user": user.to_dict(),
    }), 200


@auth_bp.route("/auth/google/token", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["AUTH_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many logins from this IP",
)
@validate_schema(OAuthTokenRequest)
def google_token():
    """
    Exchange a Google access token for an API session
    ---
    tags: [Auth]
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            access_token: {type: string}
    responses:
      200:
        description: Access/refresh token pair and the user record
      401:
        description: Provider rejected the token
    """
    return _exchange(GOOGLE)


@auth_bp.route("/auth/facebook/token", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["AUTH_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many logins from this IP",
)
@validate_schema(OAuthTokenRequest)
def facebook_token():
    return _exchange(FACEBOOK)


@auth_bp.route("/auth/refresh", methods=["POST"])
@validate_schema(RefreshRequest)
def refresh_tokens():
    data: RefreshRequest = request.validated_data
    try:
        payload = decode_token(data.refresh_token, expected_type="refresh")
    except TokenError as e:
        return error(str(e), status=401)

    role = payload.get("role")
    model = {CUSTOMER: User, MERCHANT: Merchant}.get(role)
    if model is None or db.session.get(model, int(payload["sub"])) is None:
        return error("Account not found", status=401)
    return jsonify({
        **issue_tokens(payload["sub"], role),
        "expires_in": current_app.config["ACCESS_TOKEN_LIFETIME_MIN"] * 60,
    }), 200


@auth_bp.route("/user", methods=["GET"])
@auth_required
@role_required(CUSTOMER)
def current_user():
    return ok(request.user.to_dict())

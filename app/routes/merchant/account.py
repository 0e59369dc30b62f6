import logging
from flask import Blueprint, current_app, request
from flask_limiter.util import get_remote_address
from extensions import limiter
from app.version import API_PREFIX
from app.services.errors import ServiceError
from app.services.merchant.products import register_merchant, find_merchant_by_email
from app.schemas.merchant import MerchantRegisterRequest, MerchantLoginRequest
from app.utils import ok, error, service_error, transactional, internal_error_response, issue_tokens
from app.utils.validation import validate_schema
from app.auth.permissions import MERCHANT

logger = logging.getLogger(__name__)

# Public merchant endpoints; everything on merchant_bp needs a merchant token
merchant_account_bp = Blueprint("merchant_account", __name__, url_prefix=f"{API_PREFIX}/merchant")


@merchant_account_bp.route("/register", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["AUTH_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many registrations from this IP",
)
@validate_schema(MerchantRegisterRequest)
def register():
    """
    Register a merchant
    ---
    tags: [Merchant]
    responses:
      201:
        description: Merchant record and token pair
      400:
        description: Email already registered
    """
    data: MerchantRegisterRequest = request.validated_data
    try:
        with transactional("Failed to register merchant"):
            merchant = register_merchant(data.model_dump())
    except ServiceError as e:
        return service_error(e)
    except Exception:
        return internal_error_response()
    logger.info("Merchant %s registered", merchant.id)
    return ok({"merchant": merchant.to_dict(), **issue_tokens(merchant.id, MERCHANT)}, status=201)


@merchant_account_bp.route("/login", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["AUTH_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many logins from this IP",
)
@validate_schema(MerchantLoginRequest)
def login():
    data: MerchantLoginRequest = request.validated_data
    try:
        merchant = find_merchant_by_email(data.email)
    except ServiceError:
        return error("Invalid credentials", status=401)
    return ok({"merchant": merchant.to_dict(), **issue_tokens(merchant.id, MERCHANT)})

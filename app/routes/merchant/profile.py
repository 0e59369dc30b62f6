import logging
from flask import request
from app.services.errors import ServiceError
from app.services.merchant import products as product_service
from app.schemas.merchant import MerchantProfileUpdateRequest
from app.utils import ok, service_error, transactional, internal_error_response
from app.utils.validation import validate_schema
from . import merchant_bp, forbid_other_merchant

logger = logging.getLogger(__name__)


@merchant_bp.route("/<int:merchant_id>/profile", methods=["GET"])
def get_profile(merchant_id):
    denied = forbid_other_merchant(merchant_id)
    if denied:
        return denied
    try:
        merchant = product_service.get_merchant(merchant_id)
    except ServiceError as e:
        return service_error(e)
    return ok(merchant.to_dict())


@merchant_bp.route("/<int:merchant_id>/profile", methods=["PUT"])
@validate_schema(MerchantProfileUpdateRequest)
def update_profile(merchant_id):
    """
    Update the caller's business profile
    ---
    tags: [Merchant]
    responses:
      200:
        description: Updated merchant record
      403:
        description: Path names another merchant
    """
    denied = forbid_other_merchant(merchant_id)
    if denied:
        return denied
    data: MerchantProfileUpdateRequest = request.validated_data
    try:
        with transactional("Failed to update profile"):
            merchant = product_service.get_merchant(merchant_id)
            product_service.update_profile(merchant, data.model_dump(exclude_unset=True))
    except ServiceError as e:
        return service_error(e)
    except Exception:
        return internal_error_response()
    logger.info("Merchant %s updated profile", merchant_id)
    return ok(merchant.to_dict(), message="Profile updated")

import logging
from flask import Blueprint, current_app, request
from flask_limiter.util import get_remote_address
from extensions import limiter
from models.merchant import Merchant
from models import db
from app.version import API_PREFIX
from app.metrics import ORDERS_PLACED
from app.services.errors import ServiceError
from app.services.merchant.orders import create_order
from app.schemas.merchant import SubmitOrderRequest
from app.utils import ok, error, service_error, transactional, internal_error_response, auth_required, role_required
from app.utils.validation import validate_schema

logger = logging.getLogger(__name__)

orders_bp = Blueprint("orders", __name__, url_prefix=API_PREFIX)


@orders_bp.route("/orders", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["CHECKOUT_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many checkout attempts from this IP",
)
@auth_required
@role_required("customer:place_order")
@validate_schema(SubmitOrderRequest)
def submit_order():
    """
    Send an order to a merchant
    ---
    tags: [Customer]
    responses:
      201:
        description: The pending merchant order
      404:
        description: Unknown merchant
    """
    data: SubmitOrderRequest = request.validated_data
    if db.session.get(Merchant, data.merchant_id) is None:
        return error("Merchant not found", status=404)
    try:
        with transactional("Failed to submit order"):
            order = create_order(
                request.user,
                data.merchant_id,
                [item.model_dump() for item in data.items],
                delivery_address=data.delivery_address,
                order_number=data.order_number,
            )
    except ServiceError as e:
        return service_error(e)
    except Exception:
        return internal_error_response()
    ORDERS_PLACED.labels("merchant").inc()
    logger.info("Order %s submitted to merchant %s", order.id, data.merchant_id)
    return ok(order.to_dict(), message="Order submitted", status=201)

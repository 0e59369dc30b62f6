import logging
from flask import current_app, request
from flask_limiter.util import get_remote_address
from extensions import limiter
from app.metrics import ORDERS_PLACED
from app.services.errors import ServiceError
from app.services.customer.orders import timeline
from app.utils import ok, service_error
from app.utils.validation import validate_schema
from app.schemas.customer import PlaceOrderRequest
from . import customer_bp, order_service, dump

logger = logging.getLogger(__name__)


@customer_bp.route("/orders", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["CHECKOUT_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many checkout attempts from this IP",
)
@validate_schema(PlaceOrderRequest)
def place_order():
    """
    Place an order from the current cart
    ---
    tags: [Customer]
    parameters:
      - in: header
        name: X-Device-ID
        required: true
        type: string
      - in: body
        name: body
        schema:
          type: object
          properties:
            order_type: {type: string, enum: [delivery, pickup]}
            address_id: {type: string}
            payment_method_id: {type: string}
    responses:
      201:
        description: The placed order
      400:
        description: Missing address or bad order type
      409:
        description: Cart is empty
    """
    data: PlaceOrderRequest = request.validated_data
    try:
        order = order_service().place_order(
            data.order_type,
            address_id=data.address_id,
            payment_method_id=data.payment_method_id,
        )
    except ServiceError as e:
        return service_error(e)
    ORDERS_PLACED.labels(order.order_type).inc()
    return ok(order.to_store(), message="Order placed", status=201)


@customer_bp.route("/orders", methods=["GET"])
def order_history():
    return ok(dump(order_service().history()))


@customer_bp.route("/orders/<order_id>", methods=["GET"])
def get_order(order_id):
    try:
        order = order_service().get_order(order_id)
    except ServiceError as e:
        return service_error(e)
    return ok(order.to_store())


@customer_bp.route("/orders/<order_id>/tracking", methods=["GET"])
def track_order(order_id):
    try:
        order = order_service().get_order(order_id)
    except ServiceError as e:
        return service_error(e)
    return ok({"order": order.to_store(), "timeline": timeline(order)})


@customer_bp.route("/orders/<order_id>/advance", methods=["POST"])
def advance_order(order_id):
    try:
        order = order_service().advance_status(order_id)
    except ServiceError as e:
        return service_error(e)
    return ok(order.to_store(), message=f"Order is now {order.status.value}")

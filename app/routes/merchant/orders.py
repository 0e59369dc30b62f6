from flask import request
from app.metrics import MERCHANT_ORDER_TRANSITIONS
from app.services.errors import ServiceError
from app.services.merchant import orders as order_service
from app.schemas.merchant import OrderStatusRequest
from app.utils import ok, service_error, transactional, internal_error_response
from app.utils.validation import validate_schema
from . import merchant_bp, forbid_other_merchant


def _actor():
    return f"merchant:{request.user.id}"


def _apply(order_id, action, message):
    try:
        with transactional("Failed to update order status"):
            order = order_service.get_order_for_merchant(request.user.id, order_id)
            action(order)
    except ServiceError as e:
        return service_error(e)
    except Exception:
        return internal_error_response()
    MERCHANT_ORDER_TRANSITIONS.labels(order.status).inc()
    return ok(order.to_dict(), message=message)


@merchant_bp.route("/<int:merchant_id>/orders", methods=["GET"])
def list_orders(merchant_id):
    """
    Orders received by a merchant
    ---
    tags: [Merchant]
    parameters:
      - {in: path, name: merchant_id, type: integer, required: true}
      - {in: query, name: status, type: string, enum: [pending, preparing, ready, delivered, cancelled]}
    responses:
      200:
        description: Orders, newest first
    """
    denied = forbid_other_merchant(merchant_id)
    if denied:
        return denied
    try:
        orders = order_service.list_orders(merchant_id, request.args.get("status"))
    except ServiceError as e:
        return service_error(e)
    return ok([o.to_dict() for o in orders])


@merchant_bp.route("/orders/<int:order_id>", methods=["PUT"])
@validate_schema(OrderStatusRequest)
def update_order(order_id):
    data: OrderStatusRequest = request.validated_data
    return _apply(
        order_id,
        lambda order: order_service.update_status(order, data.status, _actor()),
        f"Order marked as {data.status}",
    )


@merchant_bp.route("/orders/<int:order_id>/accept", methods=["POST"])
def accept_order(order_id):
    return _apply(order_id, lambda o: order_service.accept_order(o, _actor()), "Order accepted")


@merchant_bp.route("/orders/<int:order_id>/reject", methods=["POST"])
def reject_order(order_id):
    return _apply(order_id, lambda o: order_service.reject_order(o, _actor()), "Order rejected")


@merchant_bp.route("/orders/<int:order_id>/ready", methods=["POST"])
def mark_ready(order_id):
    return _apply(order_id, lambda o: order_service.mark_ready(o, _actor()), "Order ready")


@merchant_bp.route("/orders/<int:order_id>/deliver", methods=["POST"])
def mark_delivered(order_id):
    return _apply(order_id, lambda o: order_service.mark_delivered(o, _actor()), "Order delivered")

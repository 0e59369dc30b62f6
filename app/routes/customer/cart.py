from flask import request
from app.services.errors import ServiceError
from app.utils import ok, service_error
from app.utils.validation import validate_schema
from app.schemas.customer import AddToCartRequest, QuickAddRequest, ChangeQuantityRequest
from app.services.pricing import format_money
from . import customer_bp, cart_service, dump


def _cart_payload(cart):
    lines = cart.items()
    return {
        "items": dump(lines),
        "count": sum(line.quantity for line in lines),
        "subtotal": format_money(cart.subtotal()),
    }


@customer_bp.route("/cart", methods=["GET"])
def view_cart():
    """
    View cart
    ---
    tags: [Customer]
    parameters:
      - in: header
        name: X-Device-ID
        required: true
        type: string
    responses:
      200:
        description: Cart lines, badge count and subtotal
    """
    return ok(_cart_payload(cart_service()))


@customer_bp.route("/cart/count", methods=["GET"])
def cart_count():
    return ok({"count": cart_service().item_count()})


@customer_bp.route("/cart/items", methods=["POST"])
@validate_schema(AddToCartRequest)
def add_to_cart():
    data: AddToCartRequest = request.validated_data
    cart = cart_service()
    try:
        line = cart.add_item(data.product_id, data.selected_options)
    except ServiceError as e:
        return service_error(e)
    return ok(line.to_store(), message="Item added to cart", status=201)


@customer_bp.route("/cart/quick-add", methods=["POST"])
@validate_schema(QuickAddRequest)
def quick_add():
    data: QuickAddRequest = request.validated_data
    try:
        line = cart_service().quick_add(data.shop_id, data.item_name)
    except ServiceError as e:
        return service_error(e)
    return ok(line.to_store(), message="Item added to cart")


@customer_bp.route("/cart/items/<line_id>/quantity", methods=["POST"])
@validate_schema(ChangeQuantityRequest)
def change_quantity(line_id):
    data: ChangeQuantityRequest = request.validated_data
    try:
        line = cart_service().change_quantity(line_id, data.delta)
    except ServiceError as e:
        return service_error(e)
    return ok(line.to_store())


@customer_bp.route("/cart/items/<line_id>", methods=["DELETE"])
def remove_from_cart(line_id):
    cart = cart_service()
    try:
        cart.remove_item(line_id)
    except ServiceError as e:
        return service_error(e)
    return ok(_cart_payload(cart), message="Item removed")


@customer_bp.route("/cart", methods=["DELETE"])
def clear_cart():
    try:
        cart_service().clear()
    except ServiceError as e:
        return service_error(e)
    return ok(message="Cart cleared")


@customer_bp.route("/cart/items/<line_id>/save", methods=["POST"])
def save_for_later(line_id):
    try:
        item = cart_service().save_for_later(line_id)
    except ServiceError as e:
        return service_error(e)
    return ok(item.to_store(), message="Saved for later")


@customer_bp.route("/saved", methods=["GET"])
def saved_items():
    return ok(dump(cart_service().saved_items()))


@customer_bp.route("/saved/<saved_id>/move", methods=["POST"])
def move_to_cart(saved_id):
    try:
        line = cart_service().move_to_cart(saved_id)
    except ServiceError as e:
        return service_error(e)
    return ok(line.to_store(), message="Moved to cart")


@customer_bp.route("/saved/<saved_id>", methods=["DELETE"])
def delete_saved(saved_id):
    try:
        cart_service().delete_saved(saved_id)
    except ServiceError as e:
        return service_error(e)
    return ok(message="Saved item removed")

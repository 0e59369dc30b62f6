from flask import request
from app.services.errors import ServiceError
from app.services.merchant import products as product_service
from app.schemas.merchant import ProductRequest, ProductUpdateRequest
from app.utils import ok, service_error, transactional, internal_error_response
from app.utils.validation import validate_schema
from . import merchant_bp, forbid_other_merchant


@merchant_bp.route("/products", methods=["POST"])
@validate_schema(ProductRequest)
def create_product():
    """
    Add a product to the caller's menu
    ---
    tags: [Merchant]
    responses:
      201:
        description: Created product
    """
    data: ProductRequest = request.validated_data
    try:
        with transactional("Failed to create product"):
            product = product_service.create_product(request.user.id, data.model_dump())
    except ServiceError as e:
        return service_error(e)
    except Exception:
        return internal_error_response()
    return ok(product.to_dict(), message="Product created", status=201)


@merchant_bp.route("/<int:merchant_id>/products", methods=["GET"])
def list_products(merchant_id):
    denied = forbid_other_merchant(merchant_id)
    if denied:
        return denied
    products = product_service.list_products(merchant_id)
    return ok([p.to_dict() for p in products])


@merchant_bp.route("/products/<int:product_id>", methods=["PUT"])
@validate_schema(ProductUpdateRequest)
def update_product(product_id):
    data: ProductUpdateRequest = request.validated_data
    try:
        with transactional("Failed to update product"):
            product = product_service.get_product(request.user.id, product_id)
            product_service.update_product(product, data.model_dump(exclude_unset=True))
    except ServiceError as e:
        return service_error(e)
    except Exception:
        return internal_error_response()
    return ok(product.to_dict(), message="Product updated")


@merchant_bp.route("/products/<int:product_id>/availability", methods=["POST"])
def toggle_availability(product_id):
    try:
        with transactional("Failed to toggle availability"):
            product = product_service.get_product(request.user.id, product_id)
            product_service.toggle_availability(product)
    except ServiceError as e:
        return service_error(e)
    except Exception:
        return internal_error_response()
    state = "available" if product.is_available else "unavailable"
    return ok(product.to_dict(), message=f"Product marked {state}")


@merchant_bp.route("/products/<int:product_id>", methods=["DELETE"])
def delete_product(product_id):
    try:
        with transactional("Failed to delete product"):
            product = product_service.get_product(request.user.id, product_id)
            product_service.delete_product(product)
    except ServiceError as e:
        return service_error(e)
    except Exception:
        return internal_error_response()
    return ok(message="Product deleted")

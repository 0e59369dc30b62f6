from flask import request, g
from app.schemas.store import UserProfile
from app.services.errors import ServiceError
from app.services.customer.accounts import AddressBook, PaymentMethods
from app.services.customer.favorites import Favorites
from app.services.customer.session import Session
from app.utils import ok, error, service_error
from app.utils.validation import validate_schema
from app.schemas.customer import (
    AddressRequest,
    RegisterRequest,
    LoginRequest,
    ProfileUpdateRequest,
    SignInRequest,
    FavoriteRequest,
)
from . import customer_bp, cart_service, dump


# --- Addresses ---

@customer_bp.route("/addresses", methods=["GET"])
def list_addresses():
    return ok(dump(AddressBook(g.store).list()))


@customer_bp.route("/addresses", methods=["POST"])
@validate_schema(AddressRequest)
def add_address():
    data: AddressRequest = request.validated_data
    try:
        address = AddressBook(g.store).add(**data.model_dump())
    except ServiceError as e:
        return service_error(e)
    return ok(address.to_store(), message="Address added", status=201)


@customer_bp.route("/addresses/<address_id>", methods=["PUT"])
@validate_schema(AddressRequest)
def update_address(address_id):
    data: AddressRequest = request.validated_data
    try:
        address = AddressBook(g.store).update(address_id, **data.model_dump(exclude_unset=True))
    except ServiceError as e:
        return service_error(e)
    return ok(address.to_store(), message="Address updated")


@customer_bp.route("/addresses/<address_id>", methods=["DELETE"])
def delete_address(address_id):
    try:
        AddressBook(g.store).delete(address_id)
    except ServiceError as e:
        return service_error(e)
    return ok(message="Address removed")


@customer_bp.route("/addresses/<address_id>/default", methods=["POST"])
def set_default_address(address_id):
    try:
        address = AddressBook(g.store).set_default(address_id)
    except ServiceError as e:
        return service_error(e)
    return ok(address.to_store())


# --- Payment methods ---

@customer_bp.route("/payment-methods", methods=["GET"])
def list_payment_methods():
    return ok(dump(PaymentMethods(g.store).list()))


@customer_bp.route("/payment-methods/<method_id>/default", methods=["POST"])
def set_default_payment_method(method_id):
    try:
        method = PaymentMethods(g.store).set_default(method_id)
    except ServiceError as e:
        return service_error(e)
    return ok(method.to_store())


@customer_bp.route("/payment-methods/<method_id>", methods=["DELETE"])
def delete_payment_method(method_id):
    try:
        PaymentMethods(g.store).delete(method_id)
    except ServiceError as e:
        return service_error(e)
    return ok(message="Payment method removed")


# --- Favorites ---

@customer_bp.route("/favorites", methods=["GET"])
def list_favorites():
    return ok(dump(Favorites(g.store).list()))


@customer_bp.route("/favorites", methods=["POST"])
@validate_schema(FavoriteRequest)
def add_favorite():
    data: FavoriteRequest = request.validated_data
    try:
        item = Favorites(g.store).add(data)
    except ServiceError as e:
        return service_error(e)
    return ok(item.to_store(), message="Added to favorites", status=201)


@customer_bp.route("/favorites/<fav_id>", methods=["DELETE"])
def remove_favorite(fav_id):
    try:
        Favorites(g.store).remove(fav_id)
    except ServiceError as e:
        return service_error(e)
    return ok(message="Item removed from favorites")


@customer_bp.route("/favorites/<fav_id>/cart", methods=["POST"])
def favorite_to_cart(fav_id):
    try:
        line = Favorites(g.store).add_to_cart(fav_id, cart_service())
    except ServiceError as e:
        return service_error(e)
    return ok(line.to_store(), message="Item added to cart")


# --- Session ---

@customer_bp.route("/session/register", methods=["POST"])
@validate_schema(RegisterRequest)
def register():
    data: RegisterRequest = request.validated_data
    try:
        user = Session(g.store).register(
            data.name, data.email, data.phone, data.password, data.confirm_password
        )
    except ServiceError as e:
        return service_error(e)
    return ok(user.to_store(), message="Registration successful", status=201)


@customer_bp.route("/session/login", methods=["POST"])
@validate_schema(LoginRequest)
def login():
    data: LoginRequest = request.validated_data
    try:
        user = Session(g.store).login(data.email, data.password)
    except ServiceError as e:
        return service_error(e)
    return ok(user.to_store(), message="Logged in")


@customer_bp.route("/session/oauth", methods=["POST"])
@validate_schema(SignInRequest)
def adopt_oauth_session():
    data: SignInRequest = request.validated_data
    try:
        user = Session(g.store).sign_in(data.token, UserProfile.model_validate(data.user))
    except ServiceError as e:
        return service_error(e)
    except ValueError as e:
        return error(str(e), status=400)
    return ok(user.to_store(), message="Signed in")


@customer_bp.route("/session", methods=["GET"])
def current_session():
    user = Session(g.store).current_user()
    if user is None:
        return error("Not signed in", status=404)
    return ok(user.to_store())


@customer_bp.route("/session/profile", methods=["PUT"])
@validate_schema(ProfileUpdateRequest)
def update_profile():
    data: ProfileUpdateRequest = request.validated_data
    try:
        user = Session(g.store).update_profile(**data.model_dump(exclude_unset=True))
    except ServiceError as e:
        return service_error(e)
    return ok(user.to_store(), message="Profile updated successfully")


@customer_bp.route("/session", methods=["DELETE"])
def logout():
    try:
        Session(g.store).logout()
    except ServiceError as e:
        return service_error(e)
    return ok(message="You have been logged out successfully")

from flask import Blueprint, request
from app.utils.responses import ok, error
import logging
from app.auth.permissions import CUSTOMER, MERCHANT
from app.utils.jwt import create_access_token, create_refresh_token
from models import db
from models.user import User
from models.merchant import Merchant


test_support_bp = Blueprint("test_support_bp", __name__)


@test_support_bp.route("/__ok", methods=["GET"])
def __ok():
    return ok({"ping": "pong"})


@test_support_bp.route("/__boom", methods=["GET"])
def __boom():
    raise RuntimeError("boom")


@test_support_bp.route("/__log", methods=["GET"])
def __log():
    logging.getLogger(__name__).info("test log line")
    return ok({"logged": True})


@test_support_bp.route("/__auth/login_stub", methods=["POST"])
def __login_stub():
    """Create (or reuse) an account and hand back tokens without OAuth."""
    j = request.get_json() or {}
    role = j.get("role", CUSTOMER)
    email = j.get("email", f"{role}@example.com")
    if role == CUSTOMER:
        principal = User.query.filter_by(provider="stub", provider_id=email).first()
        if not principal:
            principal = User(provider="stub", provider_id=email, email=email, name=j.get("name", "Test User"))
    elif role == MERCHANT:
        principal = Merchant.query.filter_by(email=email).first()
        if not principal:
            principal = Merchant(email=email, name=j.get("name", "Test Owner"), business_name=j.get("business_name", "Test Kitchen"))
    else:
        return error("Unknown role", status=400)
    db.session.add(principal)
    db.session.commit()
    return ok({
        "id": principal.id,
        "access": create_access_token(principal.id, role),
        "refresh": create_refresh_token(principal.id, role),
    })

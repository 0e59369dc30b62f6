from flask import Blueprint, request
from app.version import API_PREFIX
from app.utils import auth_required, role_required, error

merchant_bp = Blueprint("merchant", __name__, url_prefix=f"{API_PREFIX}/merchant")


@merchant_bp.before_request
@auth_required
@role_required("merchant")
def _enforce_merchant_role():
    """Ensure the requester is an authenticated merchant."""
    return None


def forbid_other_merchant(merchant_id):
    """403 response when the path names a merchant other than the caller."""
    if request.user.id != merchant_id:
        return error("Forbidden", status=403)
    return None


from . import products  # noqa: E402
from . import orders  # noqa: E402
from . import reports  # noqa: E402
from . import profile  # noqa: E402
from .account import merchant_account_bp  # noqa: E402,F401

from flask import Blueprint, current_app, request, g
from app.version import API_PREFIX
from app.storage import get_store
from app.utils import error
from app.services.customer.cart import CartService
from app.services.customer.orders import OrderService
from app.services.pricing import parse_money

customer_bp = Blueprint("customer", __name__, url_prefix=f"{API_PREFIX}/customer")

DEVICE_HEADER = "X-Device-ID"


@customer_bp.before_request
def _bind_device_store():
    """Every customer call works on the state of one device."""
    device_id = (request.headers.get(DEVICE_HEADER) or "").strip()
    if not device_id:
        return error(f"{DEVICE_HEADER} header missing", status=400)
    g.device_id = device_id[:100]
    g.store = get_store(g.device_id)
    return None


def cart_service() -> CartService:
    return CartService(g.store)


def order_service() -> OrderService:
    cfg = current_app.config
    return OrderService(
        g.store,
        cart_service(),
        parse_money(cfg["DELIVERY_FEE"]),
        history_limit=cfg["ORDER_HISTORY_LIMIT"],
    )


def dump(models):
    return [m.to_store() for m in models]


from . import cart  # noqa: E402
from . import orders  # noqa: E402
from . import catalog  # noqa: E402
from . import account  # noqa: E402

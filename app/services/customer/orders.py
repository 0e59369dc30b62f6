import logging
import time
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from app.schemas.store import CUSTOMER_STATUS_FLOW, CustomerOrderStatus, Order
from app.services.customer.accounts import AddressBook, PaymentMethods
from app.services.customer.cart import CartService
from app.services.errors import DomainInvariantError, NotFoundError, StorageError, ValidationError
from app.services.pricing import DELIVERY, ORDER_TYPES, PICKUP, cart_subtotal, delivery_fee, order_total
from app.storage.kv import ORDERS_KEY, KeyValueStore, load_list, read_list

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 100

STATUS_DESCRIPTIONS = {
    CustomerOrderStatus.PENDING: "Your order has been placed",
    CustomerOrderStatus.PROCESSING: "Your order has been received and is being processed",
    CustomerOrderStatus.CONFIRMED: "Restaurant has confirmed your order",
    CustomerOrderStatus.PREPARING: "Your food is being prepared",
}
DELIVERY_DESCRIPTIONS = {
    CustomerOrderStatus.DELIVERING: "Your order is on the way",
    CustomerOrderStatus.COMPLETED: "Your order has been delivered",
}
PICKUP_DESCRIPTIONS = {
    CustomerOrderStatus.DELIVERING: "Your order is ready for pickup",
    CustomerOrderStatus.COMPLETED: "Your order has been picked up",
}


def new_order_number() -> str:
    return f"UFF-{int(time.time() * 1000)}{uuid.uuid4().hex[:4].upper()}"


def next_status(status: CustomerOrderStatus) -> CustomerOrderStatus:
    index = CUSTOMER_STATUS_FLOW.index(status)
    if index == len(CUSTOMER_STATUS_FLOW) - 1:
        raise DomainInvariantError("Order is already completed")
    return CUSTOMER_STATUS_FLOW[index + 1]


class OrderService:
    """Turns the cart into orders and walks them along the customer timeline."""

    def __init__(
        self,
        store: KeyValueStore,
        cart: CartService,
        fee,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ):
        self.store = store
        self.cart = cart
        self.fee = fee
        self.history_limit = history_limit
        self.addresses = AddressBook(store)
        self.payment_methods = PaymentMethods(store)

    def history(self) -> List[Order]:
        return [Order.model_validate(raw) for raw in read_list(self.store, ORDERS_KEY)]

    def get_order(self, order_id: str) -> Order:
        for order in self.history():
            if order.id == order_id:
                return order
        raise NotFoundError("Order not found")

    def _load(self) -> List[Order]:
        return [Order.model_validate(raw) for raw in load_list(self.store, ORDERS_KEY)]

    def _write(self, orders: List[Order]) -> None:
        self.store.set(ORDERS_KEY, [o.to_store() for o in orders[: self.history_limit]])

    def place_order(
        self,
        order_type: str,
        address_id: Optional[str] = None,
        payment_method_id: Optional[str] = None,
    ) -> Order:
        lines = self.cart.items()
        if not lines:
            raise DomainInvariantError("Your cart is empty")
        if order_type not in ORDER_TYPES:
            raise ValidationError(f"Unknown order type '{order_type}'")

        address = None
        if order_type == DELIVERY:
            address = self.addresses.get(address_id) if address_id else self.addresses.default()
            if address is None:
                raise ValidationError("Please select a delivery address")

        if payment_method_id:
            method = self.payment_methods.get(payment_method_id)
        else:
            method = self.payment_methods.default()

        subtotal = cart_subtotal(lines)
        fee = delivery_fee(order_type, self.fee)
        order = Order(
            id=new_order_number(),
            items=lines,
            order_type=order_type,
            delivery_address=address if order_type != PICKUP else None,
            payment_method=method,
            subtotal=subtotal,
            delivery_fee=fee,
            total=order_total(subtotal, fee),
            status=CUSTOMER_STATUS_FLOW[0],
            created_at=datetime.now(timezone.utc),
        )
        orders = self._load()
        orders.insert(0, order)
        self._write(orders)
        try:
            self.cart.clear()
        except StorageError as e:
            logger.error("Order %s placed but the cart could not be cleared: %s", order.id, e)
        logger.info("Order %s placed (%s, total %s)", order.id, order_type, order.total)
        return order

    def advance_status(self, order_id: str) -> Order:
        orders = self._load()
        for index, order in enumerate(orders):
            if order.id == order_id:
                updated = order.model_copy(update={"status": next_status(order.status)})
                orders[index] = updated
                self._write(orders)
                logger.info("Order %s moved to %s", order_id, updated.status.value)
                return updated
        raise NotFoundError("Order not found")


def timeline(order: Order) -> List[dict]:
    """Tracking steps for an order; wording of the last two depends on the order type."""
    tail = PICKUP_DESCRIPTIONS if order.order_type == PICKUP else DELIVERY_DESCRIPTIONS
    current = CUSTOMER_STATUS_FLOW.index(order.status)
    steps = []
    for index, status in enumerate(CUSTOMER_STATUS_FLOW):
        steps.append({
            "status": status.value,
            "description": STATUS_DESCRIPTIONS.get(status) or tail[status],
            "isCompleted": index <= current,
        })
    return steps

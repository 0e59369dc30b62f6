from decimal import Decimal
import logging
from typing import Iterable, Optional

from models import db
from models.order import MerchantOrder, MerchantOrderItem, MerchantOrderStatus, OrderStatusLog
from models.product import Product
from app.services.errors import DomainInvariantError, NotFoundError, ValidationError
from app.services.pricing import parse_money

logger = logging.getLogger(__name__)

S = MerchantOrderStatus

# from-status -> allowed next statuses
TRANSITIONS = {
    S.PENDING: {S.PREPARING, S.CANCELLED},
    S.PREPARING: {S.READY},
    S.READY: {S.DELIVERED},
    S.DELIVERED: set(),
    S.CANCELLED: set(),
}


def get_order_for_merchant(merchant_id: int, order_id: int) -> MerchantOrder:
    order = MerchantOrder.query.filter_by(id=order_id, merchant_id=merchant_id).first()
    if not order:
        raise NotFoundError("Order not found")
    return order


def list_orders(merchant_id: int, status: Optional[str] = None):
    query = MerchantOrder.query.filter_by(merchant_id=merchant_id)
    if status:
        try:
            status = S(status).value
        except ValueError:
            raise ValidationError(f"Unknown order status '{status}'")
        query = query.filter_by(status=status)
    return query.order_by(MerchantOrder.created_at.desc(), MerchantOrder.id.desc()).all()


def update_status(order: MerchantOrder, new_status, updated_by: str) -> MerchantOrder:
    """Move ``order`` to ``new_status`` if the merchant workflow allows it."""
    try:
        target = S(new_status)
    except ValueError:
        raise ValidationError(f"Unknown order status '{new_status}'")
    current = S(order.status)
    if target not in TRANSITIONS[current]:
        raise DomainInvariantError(f"Cannot move order from {current.value} to {target.value}")

    order.status = target.value
    db.session.add(OrderStatusLog(order_id=order.id, status=target.value, updated_by=updated_by))
    logger.info("Merchant order %s: %s -> %s", order.id, current.value, target.value)
    return order


def accept_order(order, updated_by):
    return update_status(order, S.PREPARING, updated_by)


def reject_order(order, updated_by):
    return update_status(order, S.CANCELLED, updated_by)


cancel_order = reject_order


def mark_ready(order, updated_by):
    return update_status(order, S.READY, updated_by)


def mark_delivered(order, updated_by):
    return update_status(order, S.DELIVERED, updated_by)


def create_order(
    customer,
    merchant_id: int,
    items: Iterable[dict],
    delivery_address: Optional[str] = None,
    order_number: Optional[str] = None,
) -> MerchantOrder:
    """Create a pending order; prices are taken from the merchant's products."""
    items = list(items)
    if not items:
        raise ValidationError("Order has no items")

    order = MerchantOrder(
        order_number=order_number,
        customer_id=customer.id,
        merchant_id=merchant_id,
        status=S.PENDING.value,
        delivery_address=delivery_address,
        total_amount=Decimal("0.00"),
    )
    db.session.add(order)
    db.session.flush()

    total = Decimal("0.00")
    for entry in items:
        product = Product.query.filter_by(
            id=entry["product_id"], merchant_id=merchant_id, is_active=True
        ).first()
        if not product:
            raise ValidationError(f"Product {entry['product_id']} not found for this merchant")
        if not product.is_available:
            raise ValidationError(f"{product.name} is currently unavailable")
        quantity = int(entry.get("quantity", 1))
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")
        price = parse_money(product.price)
        total += price * quantity
        db.session.add(
            MerchantOrderItem(
                order_id=order.id,
                product_id=product.id,
                name=product.name,
                quantity=quantity,
                price=price,
            )
        )

    order.total_amount = total
    db.session.add(OrderStatusLog(order_id=order.id, status=S.PENDING.value, updated_by=f"customer:{customer.id}"))
    return order


__all__ = [
    "TRANSITIONS",
    "get_order_for_merchant",
    "list_orders",
    "update_status",
    "accept_order",
    "reject_order",
    "cancel_order",
    "mark_ready",
    "mark_delivered",
    "create_order",
]

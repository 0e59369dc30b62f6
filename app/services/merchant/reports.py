from datetime import datetime, timedelta
from decimal import Decimal

from sqlalchemy import func

from models import db
from models.order import MerchantOrder, MerchantOrderItem, MerchantOrderStatus

TOP_ITEMS_LIMIT = 5


def sales_summary(merchant_id: int, top_limit: int = TOP_ITEMS_LIMIT) -> dict:
    """Totals over delivered orders only."""
    delivered = MerchantOrder.query.filter_by(
        merchant_id=merchant_id, status=MerchantOrderStatus.DELIVERED.value
    )
    order_count = delivered.count()
    total_sales = sum((Decimal(o.total_amount) for o in delivered.all()), Decimal("0.00"))

    revenue = func.sum(MerchantOrderItem.price * MerchantOrderItem.quantity)
    rows = (
        db.session.query(
            MerchantOrderItem.product_id,
            MerchantOrderItem.name,
            func.sum(MerchantOrderItem.quantity),
            revenue,
        )
        .join(MerchantOrder, MerchantOrder.id == MerchantOrderItem.order_id)
        .filter(
            MerchantOrder.merchant_id == merchant_id,
            MerchantOrder.status == MerchantOrderStatus.DELIVERED.value,
        )
        .group_by(MerchantOrderItem.product_id, MerchantOrderItem.name)
        .order_by(revenue.desc())
        .limit(top_limit)
        .all()
    )
    top_items = [
        {
            "product_id": product_id,
            "name": name,
            "quantity": int(quantity or 0),
            "revenue": str(Decimal(str(item_revenue or 0)).quantize(Decimal("0.01"))),
        }
        for product_id, name, quantity, item_revenue in rows
    ]
    return {
        "merchant_id": merchant_id,
        "order_count": order_count,
        "total_sales": str(total_sales.quantize(Decimal("0.01"))),
        "top_items": top_items,
    }


def dashboard_summary(merchant_id: int, now: datetime = None) -> dict:
    """Today's order count and revenue plus the orders still waiting to be accepted.

    "Today" is the UTC calendar day; cancelled orders count towards neither figure.
    """
    now = now or datetime.utcnow()
    start = datetime(now.year, now.month, now.day)
    today = MerchantOrder.query.filter(
        MerchantOrder.merchant_id == merchant_id,
        MerchantOrder.created_at >= start,
        MerchantOrder.created_at < start + timedelta(days=1),
        MerchantOrder.status != MerchantOrderStatus.CANCELLED.value,
    ).all()
    pending = MerchantOrder.query.filter_by(
        merchant_id=merchant_id, status=MerchantOrderStatus.PENDING.value
    ).count()
    revenue = sum((Decimal(o.total_amount) for o in today), Decimal("0.00"))
    return {
        "merchant_id": merchant_id,
        "date": start.date().isoformat(),
        "today_orders": len(today),
        "today_revenue": str(revenue.quantize(Decimal("0.01"))),
        "pending_orders": pending,
    }

import enum
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Numeric
from sqlalchemy.sql import func
from models import db, BIGINT


class MerchantOrderStatus(str, enum.Enum):
    """Fulfilment states of an order as the merchant handles it."""
    PENDING = "pending"
    PREPARING = "preparing"
    READY = "ready"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class MerchantOrder(db.Model):
    __tablename__ = "merchant_order"
    __table_args__ = (
        db.Index("ix_merchant_order_merchant_status", "merchant_id", "status"),
    )
    id = Column(BIGINT, primary_key=True)
    # Shared with the customer's local order number when the app submits one
    order_number = Column(String(40), nullable=True, index=True)
    customer_id = Column(BIGINT, ForeignKey("user.id"), nullable=False)
    merchant_id = Column(BIGINT, ForeignKey("merchant.id"), nullable=False)
    status = Column(String(20), default=MerchantOrderStatus.PENDING.value, nullable=False)
    total_amount = Column(Numeric(10, 2), nullable=False)
    delivery_address = Column(Text, nullable=True)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    customer = db.relationship("User", backref="orders", lazy=True)
    merchant = db.relationship("Merchant", backref="orders", lazy=True)
    items = db.relationship("MerchantOrderItem", backref="order", cascade="all, delete-orphan", lazy=True)

    def to_dict(self):
        return {
            "id": self.id,
            "order_number": self.order_number,
            "customer": {
                "id": self.customer.id,
                "name": self.customer.name,
                "email": self.customer.email,
            } if self.customer else None,
            "merchant_id": self.merchant_id,
            "status": self.status,
            "total_amount": str(self.total_amount),
            "delivery_address": self.delivery_address,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "items": [oi.to_dict() for oi in self.items],
        }


class MerchantOrderItem(db.Model):
    __tablename__ = "merchant_order_item"
    id = db.Column(BIGINT, primary_key=True)
    order_id = db.Column(BIGINT, db.ForeignKey("merchant_order.id"), nullable=False)
    product_id = db.Column(BIGINT, db.ForeignKey("product.id"), nullable=False)
    name = db.Column(db.String(100))
    quantity = db.Column(db.Integer, nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False)

    product = db.relationship("Product", lazy=True)

    def to_dict(self):
        return {
            "product_id": self.product_id,
            "name": self.name,
            "quantity": self.quantity,
            "price": str(self.price),
        }


class OrderStatusLog(db.Model):
    __tablename__ = "order_status_log"
    id = Column(BIGINT, primary_key=True)
    order_id = Column(BIGINT, ForeignKey("merchant_order.id"), nullable=False)
    status = Column(String(20), nullable=False)
    updated_by = Column(String(100), nullable=False)
    timestamp = Column(DateTime, default=func.now())

    def to_dict(self):
        return {
            "order_id": self.order_id,
            "status": self.status,
            "updated_by": self.updated_by,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }

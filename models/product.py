# --- models/product.py ---
from models import db, BIGINT
from datetime import datetime


class Product(db.Model):
    __tablename__ = "product"

    id = db.Column(BIGINT, primary_key=True)
    merchant_id = db.Column(BIGINT, db.ForeignKey("merchant.id"), nullable=False, index=True)

    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text, nullable=True)
    price = db.Column(db.Numeric(10, 2), nullable=False)
    category = db.Column(db.String(50), nullable=True)            # Meals, Pasta, Drinks
    image = db.Column(db.String(255), nullable=True)

    is_available = db.Column(db.Boolean, default=True)
    is_active = db.Column(db.Boolean, default=True)               # For soft delete

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "merchant_id": self.merchant_id,
            "name": self.name,
            "description": self.description,
            "price": str(self.price),
            "category": self.category,
            "image": self.image,
            "is_available": self.is_available,
        }

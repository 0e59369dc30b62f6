from models import db, BIGINT
from datetime import datetime


class Merchant(db.Model):
    __tablename__ = "merchant"

    id = db.Column(BIGINT, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    name = db.Column(db.String(100), nullable=False)
    business_name = db.Column(db.String(100), nullable=False)
    business_type = db.Column(db.String(50), nullable=True)    # restaurant, bakery, cafe
    address = db.Column(db.String(255), nullable=True)
    phone = db.Column(db.String(20), nullable=True)
    logo = db.Column(db.String(255), nullable=True)
    is_verified = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    products = db.relationship("Product", backref="merchant", lazy=True)

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "business_name": self.business_name,
            "business_type": self.business_type,
            "address": self.address,
            "phone": self.phone,
            "logo": self.logo,
            "is_verified": self.is_verified,
            "role": "merchant",
        }

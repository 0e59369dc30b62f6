from models import db
from models.merchant import Merchant
from models.product import Product
from app.services.errors import NotFoundError, ValidationError
from app.services.pricing import parse_price

PRODUCT_FIELDS = ("name", "description", "price", "category", "image", "is_available")
PROFILE_FIELDS = ("name", "business_name", "business_type", "address", "phone", "logo")


def register_merchant(data: dict) -> Merchant:
    if Merchant.query.filter_by(email=data["email"]).first():
        raise ValidationError("Email already registered")
    merchant = Merchant(
        email=data["email"],
        name=data["name"],
        business_name=data["business_name"],
        business_type=data.get("business_type"),
        address=data.get("address"),
        phone=data.get("phone"),
        logo=data.get("logo"),
    )
    db.session.add(merchant)
    db.session.flush()
    return merchant


def find_merchant_by_email(email: str) -> Merchant:
    merchant = Merchant.query.filter_by(email=email).first()
    if not merchant:
        raise NotFoundError("Merchant not found")
    return merchant


def get_merchant(merchant_id: int) -> Merchant:
    merchant = db.session.get(Merchant, merchant_id)
    if not merchant:
        raise NotFoundError("Merchant not found")
    return merchant


def update_profile(merchant: Merchant, data: dict) -> Merchant:
    """Apply the non-null profile fields in ``data``; email and verification stay put."""
    for field in PROFILE_FIELDS:
        if field in data and data[field] is not None:
            setattr(merchant, field, data[field])
    return merchant


def list_products(merchant_id: int, include_unavailable: bool = True):
    query = Product.query.filter_by(merchant_id=merchant_id, is_active=True)
    if not include_unavailable:
        query = query.filter_by(is_available=True)
    return query.order_by(Product.id).all()


def get_product(merchant_id: int, product_id: int) -> Product:
    product = Product.query.filter_by(id=product_id, merchant_id=merchant_id, is_active=True).first()
    if not product:
        raise NotFoundError("Product not found")
    return product


def create_product(merchant_id: int, data: dict) -> Product:
    product = Product(
        merchant_id=merchant_id,
        name=data["name"],
        description=data.get("description"),
        price=parse_price(data["price"]),
        category=data.get("category"),
        image=data.get("image"),
        is_available=data.get("is_available", True),
    )
    db.session.add(product)
    db.session.flush()
    return product


def update_product(product: Product, data: dict) -> Product:
    for field in PRODUCT_FIELDS:
        if field in data and data[field] is not None:
            value = parse_price(data[field]) if field == "price" else data[field]
            setattr(product, field, value)
    return product


def toggle_availability(product: Product) -> Product:
    product.is_available = not product.is_available
    return product


def delete_product(product: Product) -> None:
    # soft delete keeps order items pointing at a real row
    product.is_active = False
    product.is_available = False

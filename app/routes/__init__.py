from .auth import auth_bp
from .customer import customer_bp
from .merchant import merchant_bp, merchant_account_bp
from .orders import orders_bp


__all__ = [
    'auth_bp',
    'customer_bp',
    'merchant_bp',
    'merchant_account_bp',
    'orders_bp',
]

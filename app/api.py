from app.routes import (
    auth_bp,
    customer_bp,
    merchant_bp,
    merchant_account_bp,
    orders_bp,
)


def register_api_v1(app):
    """Register blueprint routes under the API version prefix."""
    app.register_blueprint(auth_bp)
    app.register_blueprint(customer_bp)
    app.register_blueprint(merchant_account_bp)
    app.register_blueprint(merchant_bp)
    app.register_blueprint(orders_bp)

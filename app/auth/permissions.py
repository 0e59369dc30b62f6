"""
Central registry of allowed actions per role.
"""
CUSTOMER = "customer"
MERCHANT = "merchant"

ROLE_SCOPES = {
    CUSTOMER: {"place_order"},
    MERCHANT: {"manage_products", "manage_orders", "view_reports"},
}

def role_has_scope(role: str, action: str) -> bool:
    scopes = ROLE_SCOPES.get(role, set())
    return "*" in scopes or action in scopes

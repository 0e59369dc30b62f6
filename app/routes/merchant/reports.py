from app.services.merchant.reports import sales_summary, dashboard_summary
from app.utils import ok
from . import merchant_bp, forbid_other_merchant


@merchant_bp.route("/<int:merchant_id>/reports/sales", methods=["GET"])
def sales_report(merchant_id):
    denied = forbid_other_merchant(merchant_id)
    if denied:
        return denied
    return ok(sales_summary(merchant_id))


@merchant_bp.route("/<int:merchant_id>/reports/dashboard", methods=["GET"])
def dashboard(merchant_id):
    denied = forbid_other_merchant(merchant_id)
    if denied:
        return denied
    return ok(dashboard_summary(merchant_id))

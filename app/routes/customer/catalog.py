from flask import current_app, request, g
from app.catalog import default_catalog
from app.services.errors import ServiceError
from app.services.customer.search import search, filter_results, sort_results, SearchHistory
from app.utils import ok, service_error
from . import customer_bp, dump


def _history():
    return SearchHistory(g.store, limit=current_app.config["SEARCH_HISTORY_LIMIT"])


@customer_bp.route("/shops", methods=["GET"])
def list_shops():
    shops = [{"id": shop_id, **shop} for shop_id, shop in default_catalog.iter_shops()]
    return ok(shops)


@customer_bp.route("/shops/<shop_id>", methods=["GET"])
def get_shop(shop_id):
    try:
        shop = default_catalog.get_shop(shop_id)
    except ServiceError as e:
        return service_error(e)
    return ok({"id": shop_id, **shop})


@customer_bp.route("/products/<product_id>", methods=["GET"])
def get_product(product_id):
    try:
        product = default_catalog.get_product(product_id)
    except ServiceError as e:
        return service_error(e)
    return ok({"id": product_id, **product})


@customer_bp.route("/search", methods=["GET"])
def search_catalog():
    """
    Search shops and menu items
    ---
    tags: [Customer]
    parameters:
      - in: header
        name: X-Device-ID
        required: true
        type: string
      - {in: query, name: q, type: string}
      - {in: query, name: type, type: string, enum: [all, restaurant, food]}
      - {in: query, name: price_range, type: string, enum: [all, under100, under200, under300, above300]}
      - {in: query, name: sort, type: string, enum: [relevance, price-low-high, price-high-low, distance, popularity]}
    responses:
      200:
        description: Matching results
    """
    text = request.args.get("q", "")
    try:
        results = search(text, default_catalog)
        results = filter_results(
            results,
            type=request.args.get("type", "all"),
            price_range=request.args.get("price_range", "all"),
        )
        results = sort_results(results, request.args.get("sort", "relevance"))
    except ServiceError as e:
        return service_error(e)
    if text.strip():
        _history().record(text)
    return ok(dump(results))


@customer_bp.route("/search/history", methods=["GET"])
def search_history():
    return ok(_history().entries())


@customer_bp.route("/search/history", methods=["DELETE"])
def clear_search_history():
    try:
        _history().clear()
    except ServiceError as e:
        return service_error(e)
    return ok(message="Search history cleared")

"""Read side for orders."""

from protean.utils.globals import current_domain

from storefront.order.order import Order
from storefront.shared.errors import load_or_not_found
from storefront.shared.pagination import DEFAULT_LIMIT, DEFAULT_PAGE, page_links, paginate


def list_orders(page=DEFAULT_PAGE, limit=DEFAULT_LIMIT):
    query = current_domain.repository_for(Order)._dao.query.order_by("created_at")
    results = paginate(query, page, limit)

    return {
        **page_links("/orders", page, limit),
        "total_orders": results.total,
        "orders": [order.to_dict() for order in results.items],
    }


def get_order(order_id):
    return load_or_not_found(Order, order_id, f"Order with id {order_id} not found")

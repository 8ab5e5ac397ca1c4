"""Read side for carts."""

from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.shared.errors import load_or_not_found
from storefront.shared.pagination import DEFAULT_LIMIT, DEFAULT_PAGE, page_links, paginate


def list_carts(page=DEFAULT_PAGE, limit=DEFAULT_LIMIT):
    query = current_domain.repository_for(Cart)._dao.query.order_by("created_at")
    results = paginate(query, page, limit)

    return {
        **page_links("/carts", page, limit),
        "total_carts": results.total,
        "carts": [cart.to_dict() for cart in results.items],
    }


def get_cart(cart_id):
    return load_or_not_found(Cart, cart_id, "Cart not found")

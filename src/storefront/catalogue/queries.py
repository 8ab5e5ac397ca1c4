"""Read side for products."""

from storefront.catalogue.product import Product
from storefront.shared.errors import load_or_not_found


def get_product(product_id):
    return load_or_not_found(Product, product_id, f"Product with id {product_id} not found")

"""Storefront API package."""

from storefront.api.errors import register_storefront_exception_handlers
from storefront.api.routes import cart_router, order_router, product_router, user_router

__all__ = [
    "cart_router",
    "order_router",
    "product_router",
    "user_router",
    "register_storefront_exception_handlers",
]

"""Storefront bounded context: shopping carts, orders, and checkout.

Carts keep their monetary aggregates in step with their line items and
reserve product stock as items are added. Orders are placed against a cart,
may be revised while unpaid, and end either paid or deleted.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")

"""Per-user state for the storefront load test journeys.

Each Locust user keeps the identifiers returned by creation endpoints so the
next step of its journey can address them. Nothing is shared across users.
"""

from dataclasses import dataclass, field


@dataclass
class CheckoutState:
    """One shopper walking from registration to a paid order."""

    user_id: str | None = None
    cart_id: str | None = None
    order_id: str | None = None
    product_ids: list[str] = field(default_factory=list)
    units_in_cart: int = 0

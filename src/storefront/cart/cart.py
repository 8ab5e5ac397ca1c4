"""Cart aggregate: one per user, holding line items and running money totals.

`subtotal`, `tax` and `total` are cached aggregates. Every mutation adjusts
them by the delta it causes instead of recomputing from the line items, so
each operation must subtract exactly what a matching add contributed.
"""

import math
from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer

from storefront.cart.events import (
    CartCreated,
    CartItemDecremented,
    ProductAddedToCart,
    ProductRemovedFromCart,
)
from storefront.domain import storefront
from storefront.shared.pricing import tax_for

PRODUCT_NOT_IN_CART = "Product in cart not found"


@storefront.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@storefront.aggregate
class Cart:
    user_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    subtotal = Float(default=0.0)
    tax = Float(default=0.0)
    total = Float(default=0.0)
    place_order = Boolean(default=False)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def total_is_subtotal_plus_tax(self):
        if not math.isclose(self.total or 0.0, (self.subtotal or 0.0) + (self.tax or 0.0), abs_tol=1e-6):
            raise ValidationError({"total": ["Cart total must equal subtotal plus tax"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        cart = cls(
            user_id=user_id,
            subtotal=0.0,
            tax=0.0,
            total=0.0,
            place_order=False,
            created_at=now,
            updated_at=now,
        )
        cart.raise_(CartCreated(cart_id=str(cart.id), user_id=str(user_id)))
        return cart

    # -------------------------------------------------------------------
    # Line items
    # -------------------------------------------------------------------
    def line_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def add_product(self, product_id, unit_price, quantity):
        """Add `quantity` units of a product, or top up its existing line."""
        existing = self.line_for(product_id)
        now = datetime.now(UTC)

        if existing:
            existing.quantity += quantity
            item = existing
        else:
            item = CartItem(product_id=product_id, quantity=quantity, added_at=now)
            self.add_items(item)

        self._adjust(quantity * unit_price, now)

        self.raise_(
            ProductAddedToCart(
                cart_id=str(self.id),
                item_id=str(item.id),
                product_id=str(product_id),
                quantity=quantity,
                line_quantity=item.quantity,
            )
        )
        return item

    def remove_one_unit(self, product_id, unit_price):
        """Take a single unit off a line. A line holding one unit is dropped."""
        item = self._require_line(product_id)

        if item.quantity <= 1:
            self.remove_items(item)
            remaining = 0
        else:
            item.quantity -= 1
            remaining = item.quantity

        self._adjust(-unit_price, datetime.now(UTC))

        self.raise_(
            CartItemDecremented(
                cart_id=str(self.id),
                product_id=str(product_id),
                remaining_quantity=remaining,
            )
        )

    def remove_product(self, product_id, unit_price):
        """Drop a whole line regardless of its quantity."""
        item = self._require_line(product_id)
        quantity = item.quantity

        self.remove_items(item)
        self._adjust(-quantity * unit_price, datetime.now(UTC))

        self.raise_(
            ProductRemovedFromCart(
                cart_id=str(self.id),
                product_id=str(product_id),
                quantity=quantity,
            )
        )

    def clear(self):
        """Detach every line item ahead of deleting the cart."""
        if self.items:
            self.remove_items(list(self.items))

    # -------------------------------------------------------------------
    # Checkout
    # -------------------------------------------------------------------
    def mark_order_placed(self):
        self.place_order = True
        self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    def _require_line(self, product_id):
        item = self.line_for(product_id)
        if item is None:
            raise ValidationError({"cart": [PRODUCT_NOT_IN_CART]})
        return item

    def _adjust(self, amount, now):
        with atomic_change(self):
            self.subtotal += amount
            self.tax += tax_for(amount)
            self.total = self.subtotal + self.tax
            self.updated_at = now

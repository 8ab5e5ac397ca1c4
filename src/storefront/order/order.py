"""Order aggregate: a checkout placed against a cart.

State Machine:
    CREATED (cart_id set) --revise*--> CREATED
    CREATED --pay--> PAID (cart_id cleared, paid_by set)   [terminal]
    CREATED --delete--> row removed                        [terminal]

The order holds on to its cart until payment. A null `cart_id` is what marks
an order as paid, and every guard below keys off it.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.order.events import OrderPaid, OrderPlaced, OrderUpdated
from storefront.shared.errors import InternalServerError
from storefront.shared.pricing import MAX_DISCOUNT, MIN_DISCOUNT, apply_discount, stored_discount


class OrderStatus(Enum):
    CREATED = "Created"
    PAID = "Paid"


_VALID_TRANSITIONS = {
    OrderStatus.CREATED: {OrderStatus.PAID},
    OrderStatus.PAID: set(),  # Terminal
}

ORDER_ALREADY_PAID = "Order already paid"
PAID_ORDER_NOT_DELETABLE = (
    "Order already paid, wait until the products arrive to the client and contact "
    "the DB Admin to delete the order. We recommend not delete any orders which was completed"
)


@storefront.aggregate
class Order:
    cart_id = Identifier(unique=True)  # Null once paid
    user_id = Identifier(required=True)
    discount = Integer(default=0, min_value=MIN_DISCOUNT, max_value=MAX_DISCOUNT)
    final_price = Float(default=0.0)
    items_in_order = Text()  # JSON: list of {name, quantity}
    status = String(choices=OrderStatus, default=OrderStatus.CREATED.value)
    created_at = DateTime()
    paid_by = Identifier()
    paid_at = DateTime()

    @invariant.post
    def paid_orders_are_detached_from_their_cart(self):
        if self.status == OrderStatus.PAID.value and (self.cart_id is not None or self.paid_by is None):
            raise ValidationError({"order": ["A paid order must have a payer and no cart"]})

    @invariant.post
    def final_price_cannot_be_negative(self):
        if self.final_price is not None and self.final_price < 0:
            raise ValidationError({"final_price": ["Final price cannot be negative"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, cart_id, user_id, cart_total, items, discount=0):
        """Create an order from a cart's current total and line snapshot."""
        order = cls(
            cart_id=cart_id,
            user_id=user_id,
            discount=stored_discount(discount),
            final_price=apply_discount(cart_total, discount),
            items_in_order=json.dumps(items),
            status=OrderStatus.CREATED.value,
            created_at=datetime.now(UTC),
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                cart_id=str(cart_id),
                user_id=str(user_id),
                discount=order.discount,
                final_price=order.final_price,
                items=order.items_in_order,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def is_paid(self):
        return self.cart_id is None

    @property
    def items(self):
        return json.loads(self.items_in_order) if self.items_in_order else []

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def revise(self, cart_total, items, discount=None):
        """Reprice against the live cart, keeping the stored discount unless a new one is given."""
        if self.is_paid:
            raise ValidationError({"order": [ORDER_ALREADY_PAID]})

        effective = self.discount if discount is None else discount
        with atomic_change(self):
            self.discount = stored_discount(effective)
            self.final_price = apply_discount(cart_total, effective)
            self.items_in_order = json.dumps(items)

        self.raise_(
            OrderUpdated(
                order_id=str(self.id),
                discount=self.discount,
                final_price=self.final_price,
                items=self.items_in_order,
            )
        )

    def pay(self, paid_by):
        # TODO: report a repeat payment as a conflict (409) once clients stop relying on the 500.
        if self.is_paid:
            raise InternalServerError("Order already paid!")
        self._assert_can_transition(OrderStatus.PAID)

        now = datetime.now(UTC)
        cart_id = self.cart_id
        with atomic_change(self):
            self.cart_id = None
            self.paid_by = paid_by
            self.paid_at = now
            self.status = OrderStatus.PAID.value

        self.raise_(
            OrderPaid(
                order_id=str(self.id),
                cart_id=str(cart_id),
                paid_by=str(paid_by),
                final_price=self.final_price,
                paid_at=now,
            )
        )

    def ensure_deletable(self):
        if self.is_paid:
            raise ValidationError({"order": [PAID_ORDER_NOT_DELETABLE]})

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

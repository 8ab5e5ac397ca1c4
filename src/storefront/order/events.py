"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, Text

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """An order was placed against a cart."""

    __version__ = 1

    order_id = Identifier(required=True)
    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    discount = Integer(required=True)
    final_price = Float(required=True)
    items = Text(required=True)  # JSON: list of {name, quantity}


@storefront.event(part_of="Order")
class OrderUpdated:
    """An unpaid order was repriced against its cart."""

    __version__ = 1

    order_id = Identifier(required=True)
    discount = Integer(required=True)
    final_price = Float(required=True)
    items = Text(required=True)


@storefront.event(part_of="Order")
class OrderPaid:
    """An order was paid; its cart no longer exists."""

    __version__ = 1

    order_id = Identifier(required=True)
    cart_id = Identifier(required=True)
    paid_by = Identifier(required=True)
    final_price = Float(required=True)
    paid_at = DateTime(required=True)

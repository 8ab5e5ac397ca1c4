"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer

from storefront.domain import storefront


@storefront.event(part_of="Cart")
class CartCreated:
    """A user opened their cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)


@storefront.event(part_of="Cart")
class ProductAddedToCart:
    """Units of a product were added to a cart line."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    line_quantity = Integer(required=True)


@storefront.event(part_of="Cart")
class CartItemDecremented:
    """One unit was taken off a cart line."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    remaining_quantity = Integer(required=True)  # 0 when the line was dropped


@storefront.event(part_of="Cart")
class ProductRemovedFromCart:
    """A whole line was removed from a cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)

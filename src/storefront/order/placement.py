"""Order placement and revision: commands and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.order.order import Order
from storefront.shared.errors import load_or_not_found, translate_unique_violation

logger = structlog.get_logger(__name__)

ONE_ORDER_PER_CART = "You only can make one order at time"
EMPTY_CART = "Insert products to your cart before make an order!"


@storefront.command(part_of="Order")
class CreateOrder:
    """Place an order for everything currently in a cart."""

    cart_id = Identifier(required=True)
    discount = Integer(default=0)


@storefront.command(part_of="Order")
class UpdateOrder:
    """Reprice an unpaid order against its cart's current contents."""

    order_id = Identifier(required=True)
    cart_id = Identifier(required=True)
    discount = Integer()  # Keeps the stored discount when absent


def snapshot_items(cart):
    """Name and quantity of every line in the cart, as stored on the order."""
    products = current_domain.repository_for(Product)
    snapshot = []
    for item in cart.items:
        product = products.get(item.product_id)
        snapshot.append({"name": product.name, "quantity": item.quantity})
    return snapshot


@storefront.command_handler(part_of=Order)
class OrderPlacementHandler:
    @handle(CreateOrder)
    def create_order(self, command):
        cart = load_or_not_found(Cart, command.cart_id, "Cart not found")
        orders = current_domain.repository_for(Order)

        if orders._dao.query.filter(cart_id=str(cart.id)).all().items:
            raise ValidationError({"order": [ONE_ORDER_PER_CART]})
        if not cart.items or cart.total <= 0:
            raise ValidationError({"order": [EMPTY_CART]})

        order = Order.place(
            cart_id=cart.id,
            user_id=cart.user_id,
            cart_total=cart.total,
            items=snapshot_items(cart),
            discount=command.discount or 0,
        )
        cart.mark_order_placed()
        current_domain.repository_for(Cart).add(cart)
        with translate_unique_violation("order", cart_id=ONE_ORDER_PER_CART):
            orders.add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            cart_id=str(cart.id),
            final_price=order.final_price,
        )
        return {"order": order.to_dict(), "user_id": str(cart.user_id)}

    @handle(UpdateOrder)
    def update_order(self, command):
        orders = current_domain.repository_for(Order)
        order = orders.get_or_none(command.order_id)
        cart = current_domain.repository_for(Cart).get_or_none(command.cart_id)
        if order is None or cart is None:
            raise ObjectNotFoundError("Order or cart not found")

        order.revise(
            cart_total=cart.total,
            items=snapshot_items(cart),
            discount=command.discount,
        )
        orders.add(order)

        logger.info("Order updated", order_id=str(order.id), final_price=order.final_price)
        return {"updated_order": order.to_dict()}

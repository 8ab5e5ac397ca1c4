"""Cart line-item management: commands and handler.

Each handler runs in a single unit of work. A failure anywhere, including the
stock check that follows the cart update, rolls back the cart, its lines and
the product together.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.shared.errors import load_or_bad_request

logger = structlog.get_logger(__name__)

PRODUCT_OR_CART_NOT_FOUND = "Product or cart not found"


@storefront.command(part_of="Cart")
class AddProductToCart:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(min_value=1, default=1)


@storefront.command(part_of="Cart")
class RemoveOneUnit:
    """Take one unit of a product off the cart."""

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="Cart")
class RemoveProductFromCart:
    """Drop a product's whole line from the cart."""

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)


def _load_cart_and_product(command):
    product = load_or_bad_request(Product, command.product_id, "cart", PRODUCT_OR_CART_NOT_FOUND)
    cart = load_or_bad_request(Cart, command.cart_id, "cart", PRODUCT_OR_CART_NOT_FOUND)
    return cart, product


@storefront.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddProductToCart)
    def add_product_to_cart(self, command):
        cart, product = _load_cart_and_product(command)
        quantity = command.quantity or 1

        cart.add_product(product_id=product.id, unit_price=product.price, quantity=quantity)
        current_domain.repository_for(Cart).add(cart)

        # Stock is checked only after the cart write; a shortfall aborts both.
        product.withdraw_stock(quantity)
        current_domain.repository_for(Product).add(product)

        logger.info(
            "Product added to cart",
            cart_id=str(cart.id),
            product_id=str(product.id),
            quantity=quantity,
            stock_left=product.stock,
        )
        return {"msg": "Cart Updated", "updated_cart": cart.to_dict()}

    @handle(RemoveOneUnit)
    def remove_one_unit(self, command):
        cart, product = _load_cart_and_product(command)
        cart.remove_one_unit(product_id=product.id, unit_price=product.price)
        current_domain.repository_for(Cart).add(cart)

        logger.info("Cart line decremented", cart_id=str(cart.id), product_id=str(product.id))
        return f"Quantity on product {command.product_id} from {command.cart_id} updated"

    @handle(RemoveProductFromCart)
    def remove_product_from_cart(self, command):
        cart, product = _load_cart_and_product(command)
        cart.remove_product(product_id=product.id, unit_price=product.price)
        current_domain.repository_for(Cart).add(cart)

        logger.info("Cart line removed", cart_id=str(cart.id), product_id=str(product.id))
        return f"Product {command.product_id} from {command.cart_id} deleted"

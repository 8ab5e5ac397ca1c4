"""Cart management: commands and handler.

Handles cart creation (one per user) and explicit deletion.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.account.user import User
from storefront.cart.cart import Cart
from storefront.domain import storefront
from storefront.shared.errors import load_or_not_found, translate_unique_violation

logger = structlog.get_logger(__name__)

ONE_CART_PER_USER = "An user can create only one cart"


@storefront.command(part_of="Cart")
class CreateCart:
    """Open the cart for a registered user."""

    user_id = Identifier(required=True)


@storefront.command(part_of="Cart")
class DeleteCart:
    """Delete a cart together with all of its line items."""

    cart_id = Identifier(required=True)


@storefront.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(CreateCart)
    def create_cart(self, command):
        load_or_not_found(User, command.user_id, f"User with id {command.user_id} not found")

        cart = Cart.create(user_id=command.user_id)
        with translate_unique_violation("cart", user_id=ONE_CART_PER_USER):
            current_domain.repository_for(Cart).add(cart)

        logger.info("Cart created", cart_id=str(cart.id), user_id=str(command.user_id))
        return {"msg": "Cart created!", "cart": cart.to_dict()}

    @handle(DeleteCart)
    def delete_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = load_or_not_found(Cart, command.cart_id, "Cart not found")

        cart.clear()
        repo.add(cart)
        repo._dao.delete(cart)

        logger.info("Cart deleted", cart_id=str(command.cart_id))
        return f"Cart with id {command.cart_id} was deleted"

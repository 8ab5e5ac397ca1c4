"""Order payment: command and handler.

Paying finalizes bookkeeping only: the cart and its lines are deleted and
the order is stamped with its payer. No money moves here.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.account.user import User
from storefront.cart.cart import Cart
from storefront.domain import storefront
from storefront.order.order import Order
from storefront.shared.errors import ForbiddenError, load_or_not_found

logger = structlog.get_logger(__name__)

ACCOUNT_NOT_VALIDATED = "Before making an order, you need to validate your account!"


@storefront.command(part_of="Order")
class PayOrder:
    order_id = Identifier(required=True)


@storefront.command_handler(part_of=Order)
class PayOrderHandler:
    @handle(PayOrder)
    def pay_order(self, command):
        order = load_or_not_found(Order, command.order_id, f"Order with id {command.order_id} not found")

        owner = current_domain.repository_for(User).get_or_none(order.user_id)
        if owner is None or not owner.is_validated:
            raise ForbiddenError(ACCOUNT_NOT_VALIDATED)

        cart_id = order.cart_id
        order.pay(paid_by=owner.id)

        carts = current_domain.repository_for(Cart)
        cart = load_or_not_found(Cart, cart_id, "Cart not found")
        cart.clear()
        carts.add(cart)
        carts._dao.delete(cart)

        current_domain.repository_for(Order).add(order)

        logger.info("Order paid", order_id=str(order.id), cart_id=str(cart_id), paid_by=str(owner.id))
        return {"msg": f"Order with id {order.id} paid!", "paid_order": order.to_dict()}

"""Order deletion: command and handler. Only unpaid orders can go."""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order
from storefront.shared.errors import load_or_not_found

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class DeleteOrder:
    order_id = Identifier(required=True)


@storefront.command_handler(part_of=Order)
class DeleteOrderHandler:
    @handle(DeleteOrder)
    def delete_order(self, command):
        order = load_or_not_found(Order, command.order_id, f"Order with id {command.order_id} not found")
        order.ensure_deletable()
        current_domain.repository_for(Order)._dao.delete(order)

        logger.info("Order deleted", order_id=str(command.order_id))
        return f"Order with id {command.order_id} was deleted"

"""Product stocking: command and handler."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Integer, String
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.shared.errors import translate_unique_violation

logger = structlog.get_logger(__name__)

_DUPLICATE_NAME = "Product with that name already exist"


@storefront.command(part_of="Product")
class AddProduct:
    name = String(required=True, max_length=255)
    price = Float(required=True)
    stock = Integer(min_value=0, default=0)
    category = String(max_length=100)


@storefront.command_handler(part_of=Product)
class AddProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        repo = current_domain.repository_for(Product)
        if repo._dao.query.filter(name=command.name).all().items:
            raise ValidationError({"product": [_DUPLICATE_NAME]})

        product = Product.create(
            name=command.name,
            price=command.price,
            stock=command.stock or 0,
            category=command.category,
        )
        with translate_unique_violation("product", name=_DUPLICATE_NAME):
            repo.add(product)

        logger.info("Product stocked", product_id=str(product.id), stock=product.stock)
        return str(product.id)

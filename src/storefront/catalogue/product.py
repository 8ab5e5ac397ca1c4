"""Product aggregate: a sellable item with a price and an on-hand stock count.

Stock only ever goes down here: adding to a cart withdraws units, and
taking them back out of a cart does not return them.
"""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String

from storefront.domain import storefront

LOW_STOCK_THRESHOLD = 5


@storefront.aggregate
class Product:
    name = String(required=True, max_length=255, unique=True)
    category = String(max_length=100)
    price = Float(required=True)
    stock = Integer(required=True, min_value=0, default=0)
    low_stock = Boolean(default=False)
    created_at = DateTime()

    @invariant.post
    def price_must_be_positive(self):
        if self.price is not None and self.price <= 0:
            raise ValidationError({"price": ["Price must be greater than 0"]})

    @invariant.post
    def low_stock_flag_tracks_stock(self):
        if self.low_stock != (self.stock < LOW_STOCK_THRESHOLD):
            raise ValidationError({"low_stock": ["Low stock flag is out of date"]})

    @classmethod
    def create(cls, name, price, stock=0, category=None):
        from storefront.catalogue.events import ProductStocked

        product = cls(
            name=name,
            category=category,
            price=price,
            stock=stock,
            low_stock=stock < LOW_STOCK_THRESHOLD,
            created_at=datetime.now(UTC),
        )
        product.raise_(
            ProductStocked(
                product_id=product.id,
                name=name,
                price=price,
                stock=stock,
            )
        )
        return product

    def ensure_available(self, quantity):
        """Reject a withdrawal the current stock cannot cover."""
        if self.stock == 0:
            raise ValidationError({"product": ["Product out of stock"]})
        if self.stock < quantity:
            raise ValidationError(
                {"product": [f"We only have {self.stock} units of {self.name}, change your quantity!"]}
            )

    def withdraw_stock(self, quantity):
        self.ensure_available(quantity)
        with atomic_change(self):
            self.stock -= quantity
            self.low_stock = self.stock < LOW_STOCK_THRESHOLD

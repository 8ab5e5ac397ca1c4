"""Tax and discount arithmetic shared by carts and orders."""

TAX_RATE = 0.21

MIN_DISCOUNT = 0
MAX_DISCOUNT = 99


def tax_for(amount: float) -> float:
    """Tax share of a pre-tax amount."""
    return amount * TAX_RATE


def discount_rate(discount: int | None) -> float:
    """Normalize an integer discount into a multiplier in [0, 1).

    Single digits are read as tenths of a percent (5 -> 0.005), two digits as
    whole percent (50 -> 0.50). Anything outside 0..99 counts as no discount.
    """
    if discount is None or discount < MIN_DISCOUNT or discount > MAX_DISCOUNT:
        return 0.0
    if discount >= 10:
        return discount / 100
    if discount >= 1:
        return discount / 1000
    return 0.0


def stored_discount(discount: int | None) -> int:
    """The discount value persisted on an order: raw when in range, else 0."""
    if discount is None or discount < MIN_DISCOUNT or discount > MAX_DISCOUNT:
        return 0
    return discount


def apply_discount(total: float, discount: int | None) -> float:
    return total * (1 - discount_rate(discount))

"""Faker-based payloads for the storefront load test journeys.

Field names match the API's request schemas. Product names carry a random
suffix because product names are unique across the catalogue, and emails do
the same because a user is registered once per address.
"""

import random
import uuid

from faker import Faker

fake = Faker()

CATEGORIES = ["Electronics", "Home", "Garden", "Books", "Toys"]


def unique_email() -> str:
    local = fake.user_name()[:20]
    return f"{local}.{uuid.uuid4().hex[:6]}@{fake.free_email_domain()}"


def user_data() -> dict:
    """RegisterUserRequest payload."""
    return {
        "first_name": fake.first_name()[:100],
        "last_name": fake.last_name()[:100],
        "email": unique_email(),
    }


def product_data(stock: int | None = None) -> dict:
    """StockProductRequest payload.

    Stock defaults high enough that a journey never runs the shelf dry on its
    own; pass a small value to exercise the out-of-stock path.
    """
    word = fake.word().capitalize()
    return {
        "name": f"{word} {uuid.uuid4().hex[:8]}",
        "price": round(random.uniform(5.0, 500.0), 2),
        "stock": stock if stock is not None else random.randint(50, 500),
        "category": random.choice(CATEGORIES),
    }


def cart_quantity() -> dict:
    return {"quantity": random.randint(1, 3)}


def order_discount() -> dict:
    """Mostly no discount, sometimes a whole-percent one, rarely a sub-percent one."""
    roll = random.random()
    if roll < 0.6:
        return {"discount": 0}
    if roll < 0.9:
        return {"discount": random.choice([10, 15, 20, 25])}
    return {"discount": random.randint(1, 9)}

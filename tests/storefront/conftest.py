import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield


# ---------------------------------------------------------------------------
# Seed helpers shared across layers
# ---------------------------------------------------------------------------
def process(command):
    return current_domain.process(command, asynchronous=False)


@pytest.fixture()
def register_user():
    from storefront.account.registration import RegisterUser, ValidateAccount

    counter = {"n": 0}

    def _register(validated=False, email=None):
        counter["n"] += 1
        user_id = process(
            RegisterUser(
                first_name="Ada",
                last_name="Lovelace",
                email=email or f"shopper{counter['n']}@example.com",
            )
        )
        if validated:
            process(ValidateAccount(user_id=user_id))
        return user_id

    return _register


@pytest.fixture()
def stock_product():
    from storefront.catalogue.stocking import AddProduct

    counter = {"n": 0}

    def _stock(price=1000.0, stock=10, name=None):
        counter["n"] += 1
        return process(
            AddProduct(
                name=name or f"Product {counter['n']}",
                price=price,
                stock=stock,
                category="General",
            )
        )

    return _stock


@pytest.fixture()
def open_cart(register_user):
    from storefront.cart.management import CreateCart

    def _open(user_id=None, validated=False):
        user_id = user_id or register_user(validated=validated)
        result = process(CreateCart(user_id=user_id))
        return result["cart"]["id"]

    return _open

"""Application tests for cart commands."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.cart.cart import Cart
from storefront.cart.items import AddProductToCart, RemoveOneUnit, RemoveProductFromCart
from storefront.cart.management import CreateCart, DeleteCart
from storefront.catalogue.product import Product


def _process(command):
    return current_domain.process(command, asynchronous=False)


def _cart(cart_id):
    return current_domain.repository_for(Cart).get(cart_id)


def _product(product_id):
    return current_domain.repository_for(Product).get(product_id)


class TestCreateCart:
    def test_new_cart_starts_at_zero(self, register_user):
        result = _process(CreateCart(user_id=register_user()))

        assert result["msg"] == "Cart created!"
        cart = _cart(result["cart"]["id"])
        assert (cart.subtotal, cart.tax, cart.total) == (0.0, 0.0, 0.0)
        assert len(cart.items) == 0

    def test_one_cart_per_user(self, register_user):
        user_id = register_user()
        _process(CreateCart(user_id=user_id))

        with pytest.raises(ValidationError) as exc:
            _process(CreateCart(user_id=user_id))
        assert exc.value.messages == {"cart": ["An user can create only one cart"]}
        assert len(current_domain.repository_for(Cart)._dao.query.filter(user_id=user_id).all().items) == 1

    def test_unknown_user(self):
        with pytest.raises(ObjectNotFoundError):
            _process(CreateCart(user_id="no-such-user"))


class TestAddProductToCart:
    def test_add_updates_cart_and_withdraws_stock(self, open_cart, stock_product):
        cart_id = open_cart()
        product_id = stock_product(price=1000.0, stock=10)

        result = _process(AddProductToCart(cart_id=cart_id, product_id=product_id, quantity=2))

        assert result["msg"] == "Cart Updated"
        assert result["updated_cart"]["total"] == pytest.approx(2420.0)
        cart = _cart(cart_id)
        assert cart.subtotal == pytest.approx(2000.0)
        assert cart.tax == pytest.approx(420.0)
        assert cart.total == pytest.approx(2420.0)
        assert _product(product_id).stock == 8

    def test_re_adding_increments_the_line(self, open_cart, stock_product):
        cart_id = open_cart()
        product_id = stock_product(price=10.0, stock=10)

        _process(AddProductToCart(cart_id=cart_id, product_id=product_id, quantity=1))
        _process(AddProductToCart(cart_id=cart_id, product_id=product_id, quantity=2))

        cart = _cart(cart_id)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 3
        assert cart.subtotal == pytest.approx(30.0)
        assert _product(product_id).stock == 7

    def test_quantity_defaults_to_one(self, open_cart, stock_product):
        cart_id = open_cart()
        product_id = stock_product(price=10.0, stock=10)

        _process(AddProductToCart(cart_id=cart_id, product_id=product_id))
        assert _cart(cart_id).items[0].quantity == 1

    def test_insufficient_stock_rolls_everything_back(self, open_cart, stock_product):
        cart_id = open_cart()
        product_id = stock_product(price=50.0, stock=3, name="Lamp")

        with pytest.raises(ValidationError) as exc:
            _process(AddProductToCart(cart_id=cart_id, product_id=product_id, quantity=5))
        assert exc.value.messages == {"product": ["We only have 3 units of Lamp, change your quantity!"]}

        cart = _cart(cart_id)
        assert len(cart.items) == 0
        assert cart.total == 0.0
        assert _product(product_id).stock == 3

    def test_insufficient_stock_keeps_existing_line_intact(self, open_cart, stock_product):
        cart_id = open_cart()
        product_id = stock_product(price=50.0, stock=3)
        _process(AddProductToCart(cart_id=cart_id, product_id=product_id, quantity=2))

        with pytest.raises(ValidationError):
            _process(AddProductToCart(cart_id=cart_id, product_id=product_id, quantity=2))

        cart = _cart(cart_id)
        assert cart.items[0].quantity == 2
        assert cart.subtotal == pytest.approx(100.0)
        assert _product(product_id).stock == 1

    def test_out_of_stock(self, open_cart, stock_product):
        cart_id = open_cart()
        product_id = stock_product(stock=0)

        with pytest.raises(ValidationError) as exc:
            _process(AddProductToCart(cart_id=cart_id, product_id=product_id, quantity=1))
        assert exc.value.messages == {"product": ["Product out of stock"]}
        assert len(_cart(cart_id).items) == 0

    def test_missing_product_or_cart(self, open_cart, stock_product):
        with pytest.raises(ValidationError) as exc:
            _process(AddProductToCart(cart_id=open_cart(), product_id="no-such-product", quantity=1))
        assert exc.value.messages == {"cart": ["Product or cart not found"]}

        with pytest.raises(ValidationError):
            _process(AddProductToCart(cart_id="no-such-cart", product_id=stock_product(), quantity=1))


class TestRemoveOneUnit:
    def test_decrements_and_subtracts_one_unit(self, open_cart, stock_product):
        cart_id = open_cart()
        product_id = stock_product(price=100.0, stock=10)
        _process(AddProductToCart(cart_id=cart_id, product_id=product_id, quantity=3))

        message = _process(RemoveOneUnit(cart_id=cart_id, product_id=product_id))

        assert message == f"Quantity on product {product_id} from {cart_id} updated"
        cart = _cart(cart_id)
        assert cart.items[0].quantity == 2
        assert cart.subtotal == pytest.approx(200.0)
        assert cart.tax == pytest.approx(42.0)
        assert cart.total == pytest.approx(242.0)

    def test_last_unit_drops_the_line(self, open_cart, stock_product):
        cart_id = open_cart()
        product_id = stock_product(price=100.0, stock=10)
        _process(AddProductToCart(cart_id=cart_id, product_id=product_id, quantity=1))

        _process(RemoveOneUnit(cart_id=cart_id, product_id=product_id))

        cart = _cart(cart_id)
        assert len(cart.items) == 0
        assert cart.total == pytest.approx(0.0)

    def test_stock_is_not_restored(self, open_cart, stock_product):
        cart_id = open_cart()
        product_id = stock_product(stock=10)
        _process(AddProductToCart(cart_id=cart_id, product_id=product_id, quantity=4))

        _process(RemoveOneUnit(cart_id=cart_id, product_id=product_id))
        assert _product(product_id).stock == 6

    def test_product_not_in_cart(self, open_cart, stock_product):
        with pytest.raises(ValidationError) as exc:
            _process(RemoveOneUnit(cart_id=open_cart(), product_id=stock_product()))
        assert exc.value.messages == {"cart": ["Product in cart not found"]}


class TestRemoveProductFromCart:
    def test_removes_whole_line(self, open_cart, stock_product):
        cart_id = open_cart()
        kept = stock_product(price=10.0, stock=10)
        dropped = stock_product(price=100.0, stock=10)
        _process(AddProductToCart(cart_id=cart_id, product_id=kept, quantity=1))
        _process(AddProductToCart(cart_id=cart_id, product_id=dropped, quantity=3))

        message = _process(RemoveProductFromCart(cart_id=cart_id, product_id=dropped))

        assert message == f"Product {dropped} from {cart_id} deleted"
        cart = _cart(cart_id)
        assert [str(i.product_id) for i in cart.items] == [kept]
        assert cart.subtotal == pytest.approx(10.0)
        assert cart.tax == pytest.approx(2.1)
        assert cart.total == pytest.approx(12.1)

    def test_stock_is_not_restored(self, open_cart, stock_product):
        cart_id = open_cart()
        product_id = stock_product(stock=10)
        _process(AddProductToCart(cart_id=cart_id, product_id=product_id, quantity=4))

        _process(RemoveProductFromCart(cart_id=cart_id, product_id=product_id))
        assert _product(product_id).stock == 6

    def test_product_not_in_cart(self, open_cart, stock_product):
        with pytest.raises(ValidationError):
            _process(RemoveProductFromCart(cart_id=open_cart(), product_id=stock_product()))


class TestDeleteCart:
    def test_deletes_cart_and_lines(self, open_cart, stock_product):
        cart_id = open_cart()
        _process(AddProductToCart(cart_id=cart_id, product_id=stock_product(), quantity=2))

        message = _process(DeleteCart(cart_id=cart_id))

        assert message == f"Cart with id {cart_id} was deleted"
        assert current_domain.repository_for(Cart).get_or_none(cart_id) is None

    def test_user_can_open_a_new_cart_after_deletion(self, register_user):
        user_id = register_user()
        cart_id = _process(CreateCart(user_id=user_id))["cart"]["id"]
        _process(DeleteCart(cart_id=cart_id))

        result = _process(CreateCart(user_id=user_id))
        assert result["cart"]["id"] != cart_id

    def test_unknown_cart(self):
        with pytest.raises(ObjectNotFoundError):
            _process(DeleteCart(cart_id="no-such-cart"))

"""Storefront load test scenarios.

Stateful SequentialTaskSet journeys over the cart and order endpoints:
a shopper who checks out and pays, a shopper who abandons the cart, and a
reader paging through carts and orders.
"""

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import cart_quantity, order_discount, product_data, user_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import CheckoutState


class _ShopperJourney(SequentialTaskSet):
    """Registration, validation, stocking and cart creation shared by every shopper."""

    validate_account = True

    def on_start(self):
        self.state = CheckoutState()
        self._register()
        if self.validate_account and self.state.user_id:
            self._validate()
        self._stock_products(count=2)
        if not self.state.product_ids:
            self.interrupt()
        self._open_cart()

    def _register(self):
        with self.client.post("/users", json=user_data(), catch_response=True, name="POST /users") as resp:
            if resp.status_code == 201:
                self.state.user_id = resp.json()["id"]
            else:
                resp.failure(f"Register user failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    def _validate(self):
        with self.client.post(
            f"/users/{self.state.user_id}/validate",
            catch_response=True,
            name="POST /users/{id}/validate",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Validate account failed: {resp.status_code}: {extract_error_detail(resp)}")

    def _stock_products(self, count):
        for _ in range(count):
            with self.client.post("/products", json=product_data(), catch_response=True, name="POST /products") as resp:
                if resp.status_code == 201:
                    self.state.product_ids.append(resp.json()["id"])
                else:
                    resp.failure(f"Add product failed: {resp.status_code}: {extract_error_detail(resp)}")

    def _open_cart(self):
        with self.client.post(
            "/carts",
            json={"user_id": self.state.user_id},
            catch_response=True,
            name="POST /carts",
        ) as resp:
            if resp.status_code == 201:
                self.state.cart_id = resp.json()["cart"]["id"]
            else:
                resp.failure(f"Create cart failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    def _add_to_cart(self, product_id):
        payload = cart_quantity()
        with self.client.put(
            f"/carts/{self.state.cart_id}/products/{product_id}",
            json=payload,
            catch_response=True,
            name="PUT /carts/{id}/products/{product_id}",
        ) as resp:
            if resp.status_code == 200:
                self.state.units_in_cart += payload["quantity"]
            else:
                resp.failure(f"Add to cart failed: {resp.status_code}: {extract_error_detail(resp)}")


class CheckoutJourney(_ShopperJourney):
    """Fill Cart -> Drop One Unit -> Place Order -> Revise -> Pay.

    The happy path. Paying consumes the cart, so the journey ends there.
    """

    @task
    def add_first_product(self):
        self._add_to_cart(self.state.product_ids[0])

    @task
    def add_second_product(self):
        self._add_to_cart(self.state.product_ids[-1])

    @task
    def drop_one_unit(self):
        with self.client.delete(
            f"/carts/{self.state.cart_id}/products/{self.state.product_ids[0]}/unit",
            catch_response=True,
            name="DELETE /carts/{id}/products/{product_id}/unit",
        ) as resp:
            if resp.status_code == 200:
                self.state.units_in_cart -= 1
            else:
                resp.failure(f"Remove unit failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def place_order(self):
        payload = {"cart_id": self.state.cart_id, **order_discount()}
        with self.client.post("/orders", json=payload, catch_response=True, name="POST /orders") as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["order"]["id"]
            else:
                resp.failure(f"Create order failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def revise_order(self):
        payload = {"cart_id": self.state.cart_id, **order_discount()}
        with self.client.put(
            f"/orders/{self.state.order_id}",
            json=payload,
            catch_response=True,
            name="PUT /orders/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update order failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def pay_order(self):
        with self.client.post(
            f"/orders/{self.state.order_id}/pay",
            catch_response=True,
            name="POST /orders/{id}/pay",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Pay order failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class AbandonedCartJourney(_ShopperJourney):
    """Fill Cart -> Remove Line -> Delete Cart.

    The shopper never validates the account and walks away before ordering.
    """

    validate_account = False

    @task
    def add_product(self):
        self._add_to_cart(self.state.product_ids[0])

    @task
    def remove_line(self):
        with self.client.delete(
            f"/carts/{self.state.cart_id}/products/{self.state.product_ids[0]}",
            catch_response=True,
            name="DELETE /carts/{id}/products/{product_id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Remove product failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def delete_cart(self):
        with self.client.delete(
            f"/carts/{self.state.cart_id}",
            catch_response=True,
            name="DELETE /carts/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Delete cart failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class StorefrontUser(HttpUser):
    """Locust user mixing storefront journeys with paged reads.

    Weighted distribution:
    - 50% Checkout through payment
    - 30% Abandoned cart
    - 20% Listing carts and orders
    """

    wait_time = between(0.5, 2.0)
    tasks = {
        CheckoutJourney: 5,
        AbandonedCartJourney: 3,
    }

    @task(2)
    def browse_listings(self):
        for path in ("/carts", "/orders"):
            self.client.get(f"{path}?page=1&limit=10", name=f"GET {path}")

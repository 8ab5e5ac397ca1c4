"""FastAPI routes for the Storefront domain: users, products, carts and orders."""

from fastapi import APIRouter, Query
from protean.utils.globals import current_domain

from storefront.account.registration import RegisterUser, ValidateAccount
from storefront.api.schemas import (
    AddProductToCartRequest,
    CartCreatedResponse,
    CartListResponse,
    CartResponse,
    CartUpdatedResponse,
    CreateCartRequest,
    CreateOrderRequest,
    IdResponse,
    MessageResponse,
    OrderCreatedResponse,
    OrderListResponse,
    OrderPaidResponse,
    OrderResponse,
    OrderUpdatedResponse,
    ProductResponse,
    RegisterUserRequest,
    StockProductRequest,
    UpdateOrderRequest,
    UserResponse,
)
from storefront.cart.items import AddProductToCart, RemoveOneUnit, RemoveProductFromCart
from storefront.cart.management import CreateCart, DeleteCart
from storefront.cart.queries import get_cart, list_carts
from storefront.catalogue.queries import get_product
from storefront.catalogue.stocking import AddProduct
from storefront.order.payment import PayOrder
from storefront.order.placement import CreateOrder, UpdateOrder
from storefront.order.queries import get_order, list_orders
from storefront.order.removal import DeleteOrder
from storefront.shared.pagination import DEFAULT_LIMIT, DEFAULT_PAGE


def _process(command):
    return current_domain.process(command, asynchronous=False)


# ---------------------------------------------------------------------------
# User Router
# ---------------------------------------------------------------------------
user_router = APIRouter(prefix="/users", tags=["users"])


@user_router.post("", status_code=201, response_model=IdResponse)
async def register_user(body: RegisterUserRequest) -> IdResponse:
    user_id = _process(
        RegisterUser(
            first_name=body.first_name,
            last_name=body.last_name,
            email=body.email,
        )
    )
    return IdResponse(id=user_id)


@user_router.post("/{user_id}/validate", response_model=UserResponse)
async def validate_account(user_id: str) -> UserResponse:
    return UserResponse(**_process(ValidateAccount(user_id=user_id)))


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.post("", status_code=201, response_model=IdResponse)
async def add_product(body: StockProductRequest) -> IdResponse:
    product_id = _process(
        AddProduct(
            name=body.name,
            price=body.price,
            stock=body.stock,
            category=body.category,
        )
    )
    return IdResponse(id=product_id)


@product_router.get("/{product_id}", response_model=ProductResponse)
async def read_product(product_id: str) -> ProductResponse:
    return ProductResponse(**get_product(product_id).to_dict())


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/carts", tags=["carts"])


@cart_router.get("", response_model=CartListResponse)
async def read_carts(
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1),
) -> CartListResponse:
    return CartListResponse(**list_carts(page=page, limit=limit))


@cart_router.get("/{cart_id}", response_model=CartResponse)
async def read_cart(cart_id: str) -> CartResponse:
    return CartResponse(**get_cart(cart_id).to_dict())


@cart_router.post("", status_code=201, response_model=CartCreatedResponse)
async def create_cart(body: CreateCartRequest) -> CartCreatedResponse:
    return CartCreatedResponse(**_process(CreateCart(user_id=body.user_id)))


@cart_router.delete("/{cart_id}", response_model=MessageResponse)
async def delete_cart(cart_id: str) -> MessageResponse:
    return MessageResponse(msg=_process(DeleteCart(cart_id=cart_id)))


@cart_router.put("/{cart_id}/products/{product_id}", response_model=CartUpdatedResponse)
async def add_product_to_cart(cart_id: str, product_id: str, body: AddProductToCartRequest) -> CartUpdatedResponse:
    command = AddProductToCart(
        cart_id=cart_id,
        product_id=product_id,
        quantity=body.quantity,
    )
    return CartUpdatedResponse(**_process(command))


@cart_router.delete("/{cart_id}/products/{product_id}/unit", response_model=MessageResponse)
async def remove_one_unit(cart_id: str, product_id: str) -> MessageResponse:
    return MessageResponse(msg=_process(RemoveOneUnit(cart_id=cart_id, product_id=product_id)))


@cart_router.delete("/{cart_id}/products/{product_id}", response_model=MessageResponse)
async def remove_product_from_cart(cart_id: str, product_id: str) -> MessageResponse:
    return MessageResponse(msg=_process(RemoveProductFromCart(cart_id=cart_id, product_id=product_id)))


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("", response_model=OrderListResponse)
async def read_orders(
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1),
) -> OrderListResponse:
    return OrderListResponse(**list_orders(page=page, limit=limit))


@order_router.get("/{order_id}", response_model=OrderResponse)
async def read_order(order_id: str) -> OrderResponse:
    return OrderResponse(**get_order(order_id).to_dict())


@order_router.post("", status_code=201, response_model=OrderCreatedResponse)
async def create_order(body: CreateOrderRequest) -> OrderCreatedResponse:
    return OrderCreatedResponse(**_process(CreateOrder(cart_id=body.cart_id, discount=body.discount)))


@order_router.put("/{order_id}", response_model=OrderUpdatedResponse)
async def update_order(order_id: str, body: UpdateOrderRequest) -> OrderUpdatedResponse:
    command = UpdateOrder(
        order_id=order_id,
        cart_id=body.cart_id,
        discount=body.discount,
    )
    return OrderUpdatedResponse(**_process(command))


@order_router.post("/{order_id}/pay", response_model=OrderPaidResponse)
async def pay_order(order_id: str) -> OrderPaidResponse:
    return OrderPaidResponse(**_process(PayOrder(order_id=order_id)))


@order_router.delete("/{order_id}", response_model=MessageResponse)
async def delete_order(order_id: str) -> MessageResponse:
    return MessageResponse(msg=_process(DeleteOrder(order_id=order_id)))

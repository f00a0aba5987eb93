"""
Order endpoints for API v1.

Orders are created under their owner (``/users/{user_id}/orders``)
and can also be looked up globally under ``/orders``.  This router
defines both paths itself, so it is included without a prefix.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from user_orders_api.app.core.config import Settings, get_settings
from user_orders_api.app.core.store import DataStore, get_store
from user_orders_api.app.schemas.common import Page
from user_orders_api.app.schemas.order import CreateOrderRequest, Order, OrderStatusUpdate
from user_orders_api.app.services.order_service import OrderService


router = APIRouter()


@router.get("/users/{user_id}/orders", response_model=List[Order])
async def list_user_orders(user_id: int, store: DataStore = Depends(get_store)) -> List[Order]:
    """Orders of a user; 404 when the user does not exist."""
    return OrderService.list_user_orders(store, user_id)


@router.post(
    "/users/{user_id}/orders",
    response_model=Order,
    status_code=status.HTTP_201_CREATED,
)
async def create_order(
    user_id: int,
    request: CreateOrderRequest,
    store: DataStore = Depends(get_store),
) -> Order:
    """Create a new order for a user.

    The order starts as ``PENDING`` and its total is the sum of
    ``price * quantity`` over the items.
    """
    return OrderService.create_order(store, user_id, request)


@router.get("/orders", response_model=Page[Order])
async def list_orders(
    page: int = Query(0),
    size: int = Query(10),
    order_status: Optional[str] = Query(None, alias="status"),
    search: Optional[str] = Query(None),
    store: DataStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> Page:
    """List all orders with the same paging rules as ``GET /users``.

    - **status** — `PENDING` or `COMPLETED`, case‑insensitive.
    - **search** — substring of any item name.
    """
    return OrderService.list_orders(
        store,
        page=page,
        size=size,
        status=order_status,
        search=search,
        default_size=settings.default_page_size,
        max_size=settings.max_page_size,
    )


@router.get("/orders/{order_id}", response_model=Order)
async def get_order(order_id: int, store: DataStore = Depends(get_store)) -> Order:
    return OrderService.get_order(store, order_id)


@router.patch("/orders/{order_id}/status", response_model=Order)
async def update_order_status(
    order_id: int,
    body: OrderStatusUpdate,
    store: DataStore = Depends(get_store),
) -> Order:
    """Change the status of an order (``PENDING`` or ``COMPLETED``)."""
    return OrderService.set_status(store, order_id, body)

"""
Business logic for orders.

Orders live in two places: the order ``EntityStore`` (lookup by order
id, global listing) and the user→orders ``RelationIndex`` (lookup by
owner).  Both are updated while holding ``DataStore.lock`` so they
never disagree.
"""

import logging
from decimal import Decimal
from typing import List, Optional

from ..core.errors import BadRequestError, NotFoundError, ValidationFailedError
from ..core.store import DataStore
from ..schemas.common import Page
from ..schemas.order import (
    CreateOrderRequest,
    Order,
    OrderItem,
    OrderStatus,
    OrderStatusUpdate,
)
from .query import QueryEngine, search_filter, status_filter
from .validation import is_representable_amount, validate_order_items, validate_order_status

logger = logging.getLogger(__name__)


def order_total(items: List[OrderItem]) -> Decimal:
    """Sum of ``price * quantity`` over all items."""
    return sum((item.price * item.quantity for item in items), Decimal("0"))


def order_total_revenue(store: DataStore) -> Decimal:
    return sum((order.total for order in store.orders.list()), Decimal("0"))


class OrderService:
    """Service class for creating and querying orders."""

    @classmethod
    def list_user_orders(cls, store: DataStore, user_id: int) -> List[Order]:
        """Orders of an existing user, oldest first.

        Raises ``NotFoundError`` when the user does not exist, even
        though an unknown user trivially has no orders.
        """
        with store.lock:
            if user_id not in store.users:
                raise NotFoundError(f"User {user_id} not found")
            return store.user_orders.list_by_parent(user_id)

    @classmethod
    def create_order(cls, store: DataStore, user_id: int, data: CreateOrderRequest) -> Order:
        """Create a PENDING order for ``user_id``.

        Checks, in order: the user exists (``NotFoundError``), the order
        has at least one item (``BadRequestError``), and every item is
        well formed (``ValidationFailedError``).  The total is computed
        here and stored with the order; an order that would push the
        revenue of all orders past the float range is rejected too.
        """
        with store.lock:
            if user_id not in store.users:
                raise NotFoundError(f"User {user_id} not found")
            if not data.items:
                logger.warning("Rejected empty order for user %s", user_id)
                raise BadRequestError("An order must contain at least one item")
            errors = validate_order_items(data.items)
            if errors:
                logger.warning("Rejected order for user %s: %s", user_id, "; ".join(errors))
                raise ValidationFailedError(errors)
            items = [
                OrderItem(name=item.name, quantity=item.quantity, price=item.price)
                for item in data.items
            ]
            order = Order(
                user_id=user_id,
                items=items,
                total=order_total(items),
                status=OrderStatus.PENDING,
            )
            revenue = order_total_revenue(store) + order.total
            if not is_representable_amount(revenue):
                logger.warning("Rejected order for user %s: revenue would leave the JSON number range", user_id)
                raise ValidationFailedError(["Total revenue is out of range"])
            store.orders.insert(order)
            store.user_orders.append(user_id, order)
        logger.info("Created order %s for user %s, total %s", order.id, user_id, order.total)
        return order

    @classmethod
    def list_orders(
        cls,
        store: DataStore,
        page: int = 0,
        size: Optional[int] = None,
        status: Optional[str] = None,
        search: Optional[str] = None,
        default_size: Optional[int] = None,
        max_size: Optional[int] = None,
    ) -> Page:
        """Return one page of all orders.

        ``search`` matches against item names.
        """
        filters = [
            status_filter(status),
            search_filter(search, lambda order: [item.name for item in order.items]),
        ]
        return QueryEngine.page(store.orders.list(), filters, page, size, default_size, max_size)

    @classmethod
    def get_order(cls, store: DataStore, order_id: int) -> Order:
        return store.orders.get(order_id)

    @classmethod
    def set_status(cls, store: DataStore, order_id: int, data: OrderStatusUpdate) -> Order:
        """Move an order to PENDING or COMPLETED.

        Only the status changes; items and total stay as created.
        """
        errors = validate_order_status(data.status)
        if errors:
            raise ValidationFailedError(errors)
        status = OrderStatus(data.status.upper())
        with store.lock:
            updated = store.orders.update(
                order_id, lambda order: order.model_copy(update={"status": status})
            )
            store.user_orders.replace(updated.user_id, lambda order: order.id == order_id, updated)
        logger.info("Order %s is now %s", order_id, status.value)
        return updated

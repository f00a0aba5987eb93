"""
Example dataset, reset and health reporting.

``seed`` turns an empty ``DataStore`` into the example dataset used by
demos and tests.  It goes through the regular store inserts, so after
seeding the counters point at the next free identifiers (user 4,
order 3).  ``reset`` clears everything and seeds again.
"""

import logging
import time
from datetime import datetime, timedelta
from decimal import Decimal

from ..core.store import DataStore
from ..schemas.common import HealthResponse
from ..schemas.order import Order, OrderItem, OrderStatus
from ..schemas.user import User, UserStatus
from .order_service import order_total

logger = logging.getLogger(__name__)


class DataService:
    """Maintenance operations on the whole store."""

    @classmethod
    def seed(cls, store: DataStore) -> None:
        """Load the example users and orders into an empty store."""
        now = datetime.now()
        with store.lock:
            for name, email, status, age_days in (
                ("Alice Dupont", "alice@example.com", UserStatus.ACTIVE, 30),
                ("Bob Martin", "bob@example.com", UserStatus.ACTIVE, 15),
                ("Claire Durand", "claire@example.com", UserStatus.INACTIVE, 5),
            ):
                store.users.insert(
                    User(name=name, email=email, status=status, created_at=now - timedelta(days=age_days))
                )

            for user_id, items, status, age_days in (
                (
                    1,
                    [
                        OrderItem(name="Laptop", quantity=1, price=Decimal("999.99")),
                        OrderItem(name="Mouse", quantity=1, price=Decimal("29.99")),
                    ],
                    OrderStatus.COMPLETED,
                    10,
                ),
                (
                    2,
                    [OrderItem(name="Keyboard", quantity=1, price=Decimal("89.99"))],
                    OrderStatus.PENDING,
                    2,
                ),
            ):
                order = Order(
                    user_id=user_id,
                    items=items,
                    total=order_total(items),
                    status=status,
                    created_at=now - timedelta(days=age_days),
                )
                store.orders.insert(order)
                store.user_orders.append(user_id, order)
        logger.info("Seeded %d users and %d orders", len(store.users), len(store.orders))

    @classmethod
    def reset(cls, store: DataStore) -> None:
        """Drop all data, restart identifiers and reload the example dataset."""
        with store.lock:
            store.clear()
            cls.seed(store)
        logger.info("Store reset")

    @classmethod
    def health(cls, store: DataStore, started_at: float) -> HealthResponse:
        checks = {
            "users_count": len(store.users),
            "orders_count": store.user_orders.count(),
            "uptime_seconds": round(time.monotonic() - started_at, 2),
        }
        return HealthResponse(status="OK", timestamp=datetime.now(), checks=checks)

"""
Service layer for statistics and reporting.

The aggregation functions work on plain snapshots (a list of users and a
mapping of user id to that user's orders) and never touch the store
themselves.  ``StatisticsService`` takes a consistent snapshot of the
store and hands it to them.

The top‑users ranking sorts by order count, highest first.  Users with
the same number of orders are ordered by ascending user id, so the
ranking does not depend on iteration order.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, List, Mapping, Sequence, Tuple

from ..core.store import DataStore
from ..schemas.order import Order
from ..schemas.statistics import StatsResponse, UserStats
from ..schemas.user import User, UserStatus

OrderIndex = Mapping[int, Sequence[Order]]


def _revenue(orders: Sequence[Order]) -> Decimal:
    return sum((order.total for order in orders), Decimal("0"))


def compute_stats(users: Sequence[User], order_index: OrderIndex) -> StatsResponse:
    """Counts of users and orders plus the revenue of every order."""
    active_users = sum(1 for user in users if user.status == UserStatus.ACTIVE)
    total_orders = sum(len(orders) for orders in order_index.values())
    total_revenue = sum((_revenue(orders) for orders in order_index.values()), Decimal("0"))
    return StatsResponse(
        total_users=len(users),
        active_users=active_users,
        total_orders=total_orders,
        total_revenue=total_revenue,
    )


def rank_users(users: Sequence[User], order_index: OrderIndex, limit: int) -> List[UserStats]:
    """At most ``limit`` users ranked by number of orders."""
    if limit <= 0:
        return []
    rows: List[Tuple[int, int, UserStats]] = []
    for user in users:
        orders = order_index.get(user.id, ())
        row = UserStats(user=user, order_count=len(orders), total_spent=_revenue(orders))
        rows.append((-row.order_count, user.id, row))
    rows.sort(key=lambda entry: (entry[0], entry[1]))
    return [row for _, _, row in rows[:limit]]


class StatisticsService:
    """Service providing aggregated statistics over the store."""

    @classmethod
    def _snapshot(cls, store: DataStore) -> Tuple[List[User], Dict[int, List[Order]]]:
        with store.lock:
            return store.users.list(), store.user_orders.snapshot()

    @classmethod
    def overview(cls, store: DataStore) -> StatsResponse:
        users, order_index = cls._snapshot(store)
        return compute_stats(users, order_index)

    @classmethod
    def top_users(cls, store: DataStore, limit: int) -> List[UserStats]:
        users, order_index = cls._snapshot(store)
        return rank_users(users, order_index, limit)

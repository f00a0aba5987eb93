"""
Unit tests for aggregate statistics and the top-users ranking.
"""

from decimal import Decimal

from user_orders_api.app.schemas.order import CreateOrderItem, CreateOrderRequest
from user_orders_api.app.schemas.user import User, UserStatus
from user_orders_api.app.services.order_service import OrderService
from user_orders_api.app.services.statistics_service import (
    StatisticsService,
    compute_stats,
    rank_users,
)


def order_for(store, user_id, price="10.00", quantity=1):
    request = CreateOrderRequest(
        items=[CreateOrderItem(name="Item", quantity=quantity, price=Decimal(price))]
    )
    return OrderService.create_order(store, user_id, request)


class TestStatistics:
    """Tests for compute_stats and StatisticsService.overview."""

    def test_seeded_overview(self, seeded_store):
        stats = StatisticsService.overview(seeded_store)

        assert stats.total_users == 3
        assert stats.active_users == 2
        assert stats.total_orders == 2
        assert stats.total_revenue == Decimal("1119.97")

    def test_empty_store(self, store):
        stats = StatisticsService.overview(store)

        assert (stats.total_users, stats.active_users, stats.total_orders) == (0, 0, 0)
        assert stats.total_revenue == Decimal("0")

    def test_plain_snapshots(self):
        users = [
            User(id=1, name="A", email="a@x.io", status=UserStatus.ACTIVE),
            User(id=2, name="B", email="b@x.io", status=UserStatus.INACTIVE),
        ]
        stats = compute_stats(users, {})
        assert stats.total_users == 2
        assert stats.active_users == 1

    def test_revenue_follows_new_orders(self, seeded_store):
        order_for(seeded_store, 3, price="5.50", quantity=2)

        stats = StatisticsService.overview(seeded_store)
        assert stats.total_orders == 3
        assert stats.total_revenue == Decimal("1130.97")


class TestRanking:
    """Tests for rank_users and StatisticsService.top_users."""

    def test_seeded_ranking(self, seeded_store):
        ranking = StatisticsService.top_users(seeded_store, 5)

        assert [row.user.id for row in ranking] == [1, 2, 3]
        assert [row.order_count for row in ranking] == [1, 1, 0]
        assert ranking[0].total_spent == Decimal("1029.98")
        assert ranking[2].total_spent == Decimal("0")

    def test_sorted_by_order_count(self, seeded_store):
        order_for(seeded_store, 3)
        order_for(seeded_store, 3)

        ranking = StatisticsService.top_users(seeded_store, 5)
        assert [row.user.id for row in ranking] == [3, 1, 2]
        assert ranking[0].order_count == 2
        assert ranking[0].total_spent == Decimal("20.00")

    def test_ties_break_on_user_id(self):
        users = [
            User(id=9, name="Late", email="late@x.io"),
            User(id=4, name="Early", email="early@x.io"),
        ]
        assert [row.user.id for row in rank_users(users, {}, 5)] == [4, 9]

    def test_limit(self, seeded_store):
        assert len(StatisticsService.top_users(seeded_store, 2)) == 2
        assert len(StatisticsService.top_users(seeded_store, 10)) == 3
        assert StatisticsService.top_users(seeded_store, 0) == []

"""
Pydantic models for aggregate statistics.
"""

from pydantic import Field

from .common import ApiModel, Money
from .user import User


class StatsResponse(ApiModel):
    total_users: int = Field(..., example=3)
    active_users: int = Field(..., example=2)
    total_orders: int = Field(..., example=2)
    total_revenue: Money = Field(..., example=1119.97)


class UserStats(ApiModel):
    """One row of the top‑users ranking."""

    user: User
    order_count: int = Field(..., example=1)
    total_spent: Money = Field(..., example=1029.98)

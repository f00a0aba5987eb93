"""
Pydantic models for orders and their items.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from .common import ApiModel, Money
from .user import User


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"


class OrderItem(ApiModel):
    name: str = Field(..., example="Laptop")
    quantity: int = Field(..., example=1)
    price: Money = Field(..., example=999.99)


class Order(ApiModel):
    """A stored order.

    ``total`` is computed once from the items when the order is
    created and never recomputed.
    """

    id: Optional[int] = Field(None, example=1)
    user_id: int = Field(..., example=1)
    items: List[OrderItem]
    total: Money = Field(..., example=1029.98)
    status: OrderStatus = Field(OrderStatus.PENDING, example="PENDING")
    created_at: datetime = Field(default_factory=datetime.now)


class CreateOrderItem(ApiModel):
    """An item as submitted by the client; checked by the validator."""

    name: Optional[str] = Field(None, example="Phone")
    quantity: Optional[int] = Field(None, example=1)
    price: Optional[Money] = Field(None, example=599.99)


class CreateOrderRequest(ApiModel):
    """Body of ``POST /users/{id}/orders``."""

    items: Optional[List[CreateOrderItem]] = None


class OrderStatusUpdate(ApiModel):
    status: Optional[str] = Field(None, example="COMPLETED")


class UserWithOrders(ApiModel):
    """Result of ``GET /users/{id}``."""

    user: User
    orders: List[Order]

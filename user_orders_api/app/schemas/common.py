"""
Shared pydantic models: the camelCase base class, money type, pages
and the generic response envelopes (errors, messages, health).
"""

import time
from decimal import Decimal
from datetime import datetime
from typing import Annotated, Any, Dict, Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

T = TypeVar("T")

# Amounts are kept as ``Decimal`` so sums stay exact, and are written
# to JSON as plain numbers.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


def epoch_millis() -> int:
    """Current time as milliseconds since the Unix epoch."""
    return int(time.time() * 1000)


class ApiModel(BaseModel):
    """Base for every payload: snake_case in Python, camelCase in JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Page(ApiModel, Generic[T]):
    """A bounded slice of a filtered result set plus pagination metadata."""

    content: List[T]
    page: int = Field(..., example=0)
    size: int = Field(..., example=10)
    total_elements: int = Field(..., example=3)
    total_pages: int = Field(..., example=1)


class ErrorResponse(ApiModel):
    error: str = Field(..., example="User 42 not found")
    timestamp: int = Field(default_factory=epoch_millis)


class ValidationErrorResponse(ApiModel):
    errors: List[str] = Field(..., example=["Name is required", "Invalid email format"])
    timestamp: int = Field(default_factory=epoch_millis)


class MessageResponse(ApiModel):
    message: str = Field(..., example="Data reset")
    timestamp: int = Field(default_factory=epoch_millis)


class CountResponse(ApiModel):
    count: int = Field(..., example=3)


class HealthResponse(ApiModel):
    """Result of ``GET /health``.

    ``checks`` is a free‑form mapping; its keys are kept verbatim
    (``users_count``, ``orders_count``, ``uptime_seconds``).
    """

    status: str = Field(..., example="OK")
    timestamp: datetime
    checks: Dict[str, Any]

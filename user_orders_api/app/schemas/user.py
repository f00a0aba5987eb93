"""
Pydantic models for user data.

``CreateUserRequest`` deliberately declares every field as optional:
missing or blank values are reported by the validator together with
any other problems instead of being rejected one at a time by request
parsing.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from .common import ApiModel


class UserStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class User(ApiModel):
    """A stored user.  ``id`` is assigned by the store on insert."""

    id: Optional[int] = Field(None, example=1)
    name: str = Field(..., example="Alice Dupont")
    email: str = Field(..., example="alice@example.com")
    status: UserStatus = Field(UserStatus.ACTIVE, example="ACTIVE")
    created_at: datetime = Field(default_factory=datetime.now)


class CreateUserRequest(ApiModel):
    """Body of ``POST /users``."""

    name: Optional[str] = Field(None, example="Jean Dupont")
    email: Optional[str] = Field(None, example="jean@example.com")


class UpdateUserRequest(ApiModel):
    """Body of ``PUT /users/{id}``.

    All fields are optional; only provided fields will be updated.
    """

    name: Optional[str] = None
    email: Optional[str] = None


class UserStatusUpdate(ApiModel):
    """Body of ``PATCH /users/{id}/status``.

    Kept as free text so an unknown status becomes a validation message
    rather than a parsing error.
    """

    status: Optional[str] = Field(None, example="INACTIVE")

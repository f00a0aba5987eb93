"""
Validation of inbound creation and update requests.

Validators are pure functions: they read the request and return a list
of human‑readable violation messages, empty when the request is valid.
They never stop at the first problem, and they never look at the store;
uniqueness is checked by the caller once validation has passed.
"""

import math
from decimal import Decimal
from typing import List, Optional, Sequence

from ..schemas.order import CreateOrderItem, OrderStatus
from ..schemas.user import CreateUserRequest, UpdateUserRequest, UserStatus

NAME_MAX_LENGTH = 100


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def is_valid_email(email: str) -> bool:
    """Minimal structural check: the address contains ``@`` and ``.``.

    This is intentionally permissive and is not RFC 5322 validation.
    """
    return "@" in email and "." in email


def is_representable_amount(value: Decimal) -> bool:
    """Amounts are written to JSON as floats, so they must stay finite there."""
    return value.is_finite() and math.isfinite(float(value))


def _name_violations(name: Optional[str]) -> List[str]:
    if _is_blank(name):
        return ["Name is required"]
    if len(name) > NAME_MAX_LENGTH:
        return [f"Name must not exceed {NAME_MAX_LENGTH} characters"]
    return []


def _email_violations(email: Optional[str]) -> List[str]:
    if _is_blank(email):
        return ["Email is required"]
    if not is_valid_email(email):
        return ["Invalid email format"]
    return []


def validate_user_request(request: CreateUserRequest) -> List[str]:
    """Check a user creation request; both fields are required."""
    return _name_violations(request.name) + _email_violations(request.email)


def validate_user_update(request: UpdateUserRequest) -> List[str]:
    """Check a partial update; only the supplied fields are examined."""
    errors: List[str] = []
    if request.name is not None:
        errors.extend(_name_violations(request.name))
    if request.email is not None:
        errors.extend(_email_violations(request.email))
    return errors


def validate_order_items(items: Sequence[CreateOrderItem]) -> List[str]:
    """Check every item of an order; positions in messages are 1‑based."""
    errors: List[str] = []
    for position, item in enumerate(items, start=1):
        if _is_blank(item.name):
            errors.append(f"Item {position}: name is required")
        if item.quantity is None or item.quantity < 1:
            errors.append(f"Item {position}: quantity must be at least 1")
        if item.price is None:
            errors.append(f"Item {position}: price is required")
        elif not is_representable_amount(item.price):
            errors.append(f"Item {position}: price is out of range")
        elif item.price < 0:
            errors.append(f"Item {position}: price must not be negative")
        elif (
            item.quantity is not None
            and item.quantity >= 1
            and not is_representable_amount(item.price * item.quantity)
        ):
            errors.append(f"Item {position}: amount is out of range")
    if not errors:
        total = sum((item.price * item.quantity for item in items), Decimal("0"))
        if not is_representable_amount(total):
            errors.append("Order total is out of range")
    return errors


def validate_user_status(status: Optional[str]) -> List[str]:
    if _is_blank(status):
        return ["Status is required"]
    if status.upper() not in UserStatus.__members__:
        return [f"Invalid status '{status}', expected one of: {', '.join(UserStatus.__members__)}"]
    return []


def validate_order_status(status: Optional[str]) -> List[str]:
    if _is_blank(status):
        return ["Status is required"]
    if status.upper() not in OrderStatus.__members__:
        return [f"Invalid status '{status}', expected one of: {', '.join(OrderStatus.__members__)}"]
    return []

"""
Business logic for users.

``UserService`` works on the ``DataStore`` passed by the caller.  Every
write validates first and only then touches the store, so a rejected
request leaves the collections unchanged.
"""

import logging
from typing import List, Optional

from ..core.errors import ConflictError, NotFoundError, ValidationFailedError
from ..core.store import DataStore
from ..schemas.common import Page
from ..schemas.order import UserWithOrders
from ..schemas.user import (
    CreateUserRequest,
    UpdateUserRequest,
    User,
    UserStatus,
    UserStatusUpdate,
)
from .query import QueryEngine, search_filter, status_filter
from .validation import validate_user_request, validate_user_status, validate_user_update

logger = logging.getLogger(__name__)


class UserService:
    """Сервис для работы с пользователями."""

    @classmethod
    def list_users(
        cls,
        store: DataStore,
        page: int = 0,
        size: Optional[int] = None,
        status: Optional[str] = None,
        search: Optional[str] = None,
        default_size: Optional[int] = None,
        max_size: Optional[int] = None,
    ) -> Page:
        """Return one page of users, optionally filtered.

        - ``status`` — exact, case‑insensitive status match.
        - ``search`` — substring of the name or the email.
        """
        filters = [
            status_filter(status),
            search_filter(search, lambda user: user.name, lambda user: user.email),
        ]
        return QueryEngine.page(store.users.list(), filters, page, size, default_size, max_size)

    @classmethod
    def search_by_name(cls, store: DataStore, name: Optional[str]) -> List[User]:
        """Users whose name contains ``name``; every user for a blank term."""
        predicate = search_filter(name, lambda user: user.name)
        users = store.users.list()
        if predicate is None:
            return users
        return [user for user in users if predicate(user)]

    @classmethod
    def count_users(cls, store: DataStore) -> int:
        return len(store.users)

    @classmethod
    def create_user(cls, store: DataStore, data: CreateUserRequest) -> User:
        """Validate and store a new ACTIVE user.

        Raises ``ValidationFailedError`` with every violation found, or
        ``ConflictError`` when the email (compared case‑insensitively)
        already belongs to a user.
        """
        errors = validate_user_request(data)
        if errors:
            logger.warning("Rejected user creation: %s", "; ".join(errors))
            raise ValidationFailedError(errors)
        user = User(name=data.name, email=data.email, status=UserStatus.ACTIVE)
        try:
            store.users.insert(user)
        except ConflictError:
            logger.warning("Email %s is already in use", data.email)
            raise
        logger.info("Created user %s <%s>", user.id, user.email)
        return user

    @classmethod
    def get_user(cls, store: DataStore, user_id: int) -> User:
        return store.users.get(user_id)

    @classmethod
    def get_user_with_orders(cls, store: DataStore, user_id: int) -> UserWithOrders:
        with store.lock:
            user = store.users.get(user_id)
            orders = store.user_orders.list_by_parent(user_id)
        return UserWithOrders(user=user, orders=orders)

    @classmethod
    def update_user(cls, store: DataStore, user_id: int, data: UpdateUserRequest) -> User:
        """Apply a partial update of name and/or email.

        The same rules as for creation apply to the supplied fields, and
        a new email must not belong to another user.
        """
        errors = validate_user_update(data)
        if errors:
            raise ValidationFailedError(errors)
        changes = data.model_dump(exclude_none=True)
        updated = store.users.update(user_id, lambda user: user.model_copy(update=changes))
        logger.info("Updated user %s: %s", user_id, ", ".join(sorted(changes)) or "no changes")
        return updated

    @classmethod
    def set_status(cls, store: DataStore, user_id: int, data: UserStatusUpdate) -> User:
        """Move a user to ACTIVE or INACTIVE."""
        errors = validate_user_status(data.status)
        if errors:
            raise ValidationFailedError(errors)
        status = UserStatus(data.status.upper())
        updated = store.users.update(user_id, lambda user: user.model_copy(update={"status": status}))
        logger.info("User %s is now %s", user_id, status.value)
        return updated

    @classmethod
    def delete_user(cls, store: DataStore, user_id: int) -> None:
        """Remove a user together with all of their orders.

        Raises ``NotFoundError`` if the user does not exist.
        """
        with store.lock:
            if not store.users.delete(user_id):
                raise NotFoundError(f"User {user_id} not found")
            orders = store.user_orders.remove_parent(user_id)
            for order in orders:
                store.orders.delete(order.id)
        logger.info("Deleted user %s and %d order(s)", user_id, len(orders))

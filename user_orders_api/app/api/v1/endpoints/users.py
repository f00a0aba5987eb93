"""
User endpoints for API v1.

Listing with filters and pagination, creation with validation and
email uniqueness, lookup together with the user's orders, partial
updates, status transitions, deletion, name search, count and the
top‑users ranking.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from user_orders_api.app.core.config import Settings, get_settings
from user_orders_api.app.core.store import DataStore, get_store
from user_orders_api.app.schemas.common import CountResponse, Page
from user_orders_api.app.schemas.order import UserWithOrders
from user_orders_api.app.schemas.statistics import UserStats
from user_orders_api.app.schemas.user import (
    CreateUserRequest,
    UpdateUserRequest,
    User,
    UserStatusUpdate,
)
from user_orders_api.app.services.statistics_service import StatisticsService
from user_orders_api.app.services.user_service import UserService


router = APIRouter()


@router.get("", response_model=Page[User])
async def list_users(
    page: int = Query(0),
    size: int = Query(10),
    user_status: Optional[str] = Query(None, alias="status"),
    search: Optional[str] = Query(None),
    store: DataStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> Page:
    """Получить список пользователей с фильтрами и пагинацией.

    - **page** — номер страницы, начиная с 0; отрицательные значения дают 0.
    - **size** — размер страницы (1–100), иначе используется 10.
    - **status** — фильтр по статусу (`ACTIVE`/`INACTIVE`), без учёта регистра.
    - **search** — подстрока имени или e‑mail, без учёта регистра.
    """
    return UserService.list_users(
        store,
        page=page,
        size=size,
        status=user_status,
        search=search,
        default_size=settings.default_page_size,
        max_size=settings.max_page_size,
    )


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(
    request: CreateUserRequest,
    store: DataStore = Depends(get_store),
) -> User:
    """Create a user.

    Returns 400 with every validation message when the payload is
    invalid and 409 when the email is already used by another user.
    """
    return UserService.create_user(store, request)


# Fixed paths are registered before ``/{user_id}`` so they are not
# captured by it.

@router.get("/search", response_model=List[User])
async def search_users(
    name: Optional[str] = Query(None),
    store: DataStore = Depends(get_store),
) -> List[User]:
    """Users whose name contains ``name`` (all users when it is blank)."""
    return UserService.search_by_name(store, name)


@router.get("/count", response_model=CountResponse)
async def count_users(store: DataStore = Depends(get_store)) -> CountResponse:
    return CountResponse(count=UserService.count_users(store))


@router.get("/top", response_model=List[UserStats])
async def top_users(
    limit: Optional[int] = Query(None),
    store: DataStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> List[UserStats]:
    """Users with the most orders, highest first.

    Ties are ordered by ascending user id.  ``limit`` defaults to
    ``TOP_USERS_LIMIT`` and cannot exceed the maximum page size.
    """
    if limit is None:
        limit = settings.top_users_limit
    return StatisticsService.top_users(store, min(limit, settings.max_page_size))


@router.get("/{user_id}", response_model=UserWithOrders)
async def get_user(user_id: int, store: DataStore = Depends(get_store)) -> UserWithOrders:
    """Retrieve a user together with their orders; 404 if absent."""
    return UserService.get_user_with_orders(store, user_id)


@router.put("/{user_id}", response_model=User)
async def update_user(
    user_id: int,
    updates: UpdateUserRequest,
    store: DataStore = Depends(get_store),
) -> User:
    """Update a user's name and/or email.

    Unspecified fields remain unchanged.
    """
    return UserService.update_user(store, user_id, updates)


@router.patch("/{user_id}/status", response_model=User)
async def update_user_status(
    user_id: int,
    body: UserStatusUpdate,
    store: DataStore = Depends(get_store),
) -> User:
    return UserService.set_status(store, user_id, body)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: int, store: DataStore = Depends(get_store)) -> Response:
    """Удалить пользователя по ID вместе с его заказами."""
    UserService.delete_user(store, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""
Top‑level router for version 1 of the API.

This router aggregates the domain routers under a unified prefix.
When new endpoints are added, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import orders, statistics, system, users

router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
# The orders router defines both ``/users/{id}/orders`` and ``/orders``
# paths itself, so it is included without a prefix.
router.include_router(orders.router, tags=["orders"])
router.include_router(statistics.router, tags=["statistics"])
router.include_router(system.router, tags=["system"])

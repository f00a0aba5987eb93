"""
Statistics endpoint for API v1.
"""

from fastapi import APIRouter, Depends

from user_orders_api.app.core.store import DataStore, get_store
from user_orders_api.app.schemas.statistics import StatsResponse
from user_orders_api.app.services.statistics_service import StatisticsService


router = APIRouter()


@router.get("/stats", response_model=StatsResponse)
async def get_stats(store: DataStore = Depends(get_store)) -> StatsResponse:
    """Global counts of users, active users and orders, plus total revenue."""
    return StatisticsService.overview(store)

"""
Maintenance endpoints for API v1: health check and data reset.

``DELETE /reset`` wipes every collection and reloads the example
dataset.  It is meant for development and demo environments.
"""

from fastapi import APIRouter, Depends, Request

from user_orders_api.app.core.store import DataStore, get_store
from user_orders_api.app.schemas.common import HealthResponse, MessageResponse
from user_orders_api.app.services.data_service import DataService


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(request: Request, store: DataStore = Depends(get_store)) -> HealthResponse:
    return DataService.health(store, request.app.state.started_at)


@router.delete("/reset", response_model=MessageResponse)
async def reset_data(store: DataStore = Depends(get_store)) -> MessageResponse:
    """Reset all data to the example dataset."""
    DataService.reset(store)
    return MessageResponse(message="Data reset")

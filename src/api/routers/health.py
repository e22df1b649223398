"""Health check endpoints."""
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.dependencies import get_store
from services.store import Store

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    store: str


@router.get("/health", response_model=HealthResponse)
async def health_check(
    store: Store = Depends(get_store),
) -> HealthResponse:
    """Check application and store health. Does not require authentication."""
    store_status = "healthy" if await store.ping() else "unhealthy"
    return HealthResponse(
        status="healthy" if store_status == "healthy" else "degraded",
        store=store_status,
    )

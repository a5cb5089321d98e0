"""Health check endpoints."""

from fastapi import APIRouter

from core.config import get_settings
from schemas import HealthResponse

router = APIRouter(tags=["health"])

SERVICE_NAME = "certificates-api"


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        service=SERVICE_NAME,
        offline=get_settings().is_offline,
    )

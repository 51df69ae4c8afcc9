from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from app.api.dependencies import get_settings
from app.core.config import Settings
from app.schemas.chat import HealthResponse

router = APIRouter()

@router.get("/health", response_model=HealthResponse, summary="Health Check", description="Check the health status of the application.")
async def health_check(cfg: Settings = Depends(get_settings)):
    return HealthResponse(
        status="healthy",
        service=cfg.service_name,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )

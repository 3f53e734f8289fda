from datetime import UTC, datetime

from fastapi import APIRouter

from issue_gateway.config.config import settings
from issue_gateway.schemas.issues import HealthResponse

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="OK",
        message="GitHub Issue Tool is running",
        version=settings.app_version,
        timestamp=datetime.now(UTC),
    )

"""Health and readiness endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from polai.core.config import Settings, get_settings
from polai.schemas.common import HealthResponse

router = APIRouter(tags=["health"])

ANALYSIS_ENDPOINTS = {
    "analyze_url": "/api/analyze",
    "analyze_text": "/api/analyze-text",
    "batch_analyze": "/api/analyze/batch",
    "scan_app": "/api/scan-app",
}


@router.get("/health", response_model=HealthResponse)
def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """Return service health and which analysis providers are configured."""
    return HealthResponse(
        status="healthy",
        service=f"{settings.app_name} v{settings.service_version}",
        environment=settings.environment,
        ai_provider=settings.ai_provider,
        mistral_configured=bool(settings.mistral_api_key),
        openai_configured=bool(settings.openai_api_key),
        endpoints=ANALYSIS_ENDPOINTS,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )

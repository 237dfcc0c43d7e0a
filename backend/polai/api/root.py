"""Service index: name, version and where to find the analysis routes."""

from fastapi import APIRouter, Depends

from polai.api.health import ANALYSIS_ENDPOINTS
from polai.core.config import Settings, get_settings
from polai.schemas.common import ServiceInfoResponse

router = APIRouter(tags=["root"])


@router.get("/", response_model=ServiceInfoResponse)
def service_info(settings: Settings = Depends(get_settings)) -> ServiceInfoResponse:
    return ServiceInfoResponse(
        message=f"{settings.app_name} is running. Use /docs for Swagger UI.",
        version=settings.service_version,
        ai_provider=settings.ai_provider,
        endpoints=ANALYSIS_ENDPOINTS,
    )

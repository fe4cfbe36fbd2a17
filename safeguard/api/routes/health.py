"""Health probe reporting how the service is wired."""

from fastapi import APIRouter, Depends

from ...core.config import AppSettings, get_settings

router = APIRouter()


@router.get("/", summary="Service health probe")
def read_health(settings: AppSettings = Depends(get_settings)) -> dict[str, object]:
    """Report service status along with the environment and analyzer mode."""
    return {
        "status": "ok",
        "service": settings.app_name,
        "environment": settings.environment,
        "analysisMode": settings.analysis_mode,
        "gatewayConfigured": bool(settings.ai_gateway_api_key),
    }

"""Tests for the health probe."""
from fastapi.testclient import TestClient

from ..api.routes.health import read_health
from ..core.config import AnalysisMode, AppSettings, Environment, get_settings
from ..main import app


def test_health_reports_environment_and_mode() -> None:
    settings = AppSettings(
        environment=Environment.PRODUCTION,
        analysis_mode=AnalysisMode.LIVE,
        ai_gateway_api_key=None,
    )

    payload = read_health(settings)

    assert payload == {
        "status": "ok",
        "service": settings.app_name,
        "environment": "production",
        "analysisMode": "live",
        "gatewayConfigured": False,
    }


def test_health_route_uses_injected_settings() -> None:
    settings = AppSettings(
        environment=Environment.TEST,
        analysis_mode=AnalysisMode.MOCK,
        ai_gateway_api_key="test-key",
    )
    app.dependency_overrides[get_settings] = lambda: settings
    try:
        response = TestClient(app).get("/health/")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    body = response.json()
    assert body["environment"] == "test"
    assert body["analysisMode"] == "mock"
    assert body["gatewayConfigured"] is True

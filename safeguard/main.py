"""FastAPI application entrypoint."""
from __future__ import annotations

from fastapi import FastAPI, Request, Response

from .api.routes.analysis import router as analysis_router
from .api.routes.dashboard import router as dashboard_router
from .api.routes.health import router as health_router
from .core.config import get_settings
from .core.errors import AnalysisError, analysis_error_handler
from .core.logging import configure_logging


def create_app() -> FastAPI:
    """Application factory used by ASGI servers."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title=settings.app_name)

    cors_headers = {
        "Access-Control-Allow-Origin": settings.cors_allow_origin,
        "Access-Control-Allow-Headers": settings.cors_allow_headers,
    }

    @app.middleware("http")
    async def add_cors_headers(request: Request, call_next) -> Response:  # type: ignore[no-untyped-def]
        response = await call_next(request)
        response.headers.update(cors_headers)
        return response

    app.add_exception_handler(AnalysisError, analysis_error_handler)

    app.include_router(health_router, prefix=f"{settings.api_prefix}/health", tags=["health"])
    app.include_router(analysis_router, prefix=settings.api_prefix)
    app.include_router(dashboard_router, prefix=settings.api_prefix)

    return app


app = create_app()

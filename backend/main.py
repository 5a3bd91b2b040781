from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from hikeclub.api.router import router as api_router
from hikeclub.core.config import Settings, get_settings, log_startup_checks, logger
from hikeclub.core.errors import register_exception_handlers
from hikeclub.services.gemini_proxy import GeminiProxyService
from hikeclub.site.router import router as site_router

def create_app(
    settings: Optional[Settings] = None,
    proxy_service: Optional[GeminiProxyService] = None,
) -> FastAPI:
    """
    Builds the club site. Configuration is validated once here and the proxy
    service receives its credential at construction.
    """
    settings = settings or get_settings()
    log_startup_checks(settings)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0",
        description="Minto Hiking Club site with an AI trail finder powered by Gemini and FastAPI.",
    )
    app.state.settings = settings
    app.state.proxy_service = proxy_service or GeminiProxyService.from_settings(settings)

    # Set up CORS so a separately hosted frontend can reach the proxy.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_V1_STR)
    app.include_router(site_router)

    logger.info(f"{settings.PROJECT_NAME} application created.")
    return app

app = create_app()

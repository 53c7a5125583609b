from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.router import router as api_v1_router
from app.config.settings import Settings, settings
from app.core.logging import get_logger, setup_logging
from app.core.middleware import register_exception_handlers, register_middlewares
from app.db.init_db import init_db

logger = get_logger(__name__)


def create_app(config: Optional[Settings] = None) -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures title, version, debug mode from Settings.
    - Registers CORS, core middleware, and exception handlers.
    - Includes the versioned API router under API_V1_STR.
    """
    config = config or settings
    setup_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Schema creation for dev/demo; production schemas are managed externally
        if not config.is_production():
            init_db()
        logger.info(
            "Application started",
            extra={"environment": config.ENVIRONMENT, "version": config.API_VERSION},
        )
        yield
        logger.info("Application shutdown")

    app = FastAPI(
        title=config.APP_NAME,
        debug=config.DEBUG,
        version=config.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS or ["*"],
        allow_credentials="*" not in (config.CORS_ORIGINS or ["*"]),
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )

    register_middlewares(app)
    register_exception_handlers(app)

    app.include_router(api_v1_router, prefix=config.API_V1_STR)

    return app


app = create_app()

# wordbrowser/main.py
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from wordbrowser.adapters.api.routers import favorites, health, words
from wordbrowser.shared.config import AppEnv, settings
from wordbrowser.shared.container import Container
from wordbrowser.shared.logging_setup import init_logging

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application Lifecycle Manager."""
    logger.info("app_starting", name=settings.APP_NAME, env=settings.APP_ENV.value)

    container: Container = app.state.container
    app.state.load_result = container.load_dataset().execute()
    if not app.state.load_result.ok:
        logger.warning("app_started_degraded", error=app.state.load_result.error)

    yield

    logger.info("app_stopping")


def create_app(container: Optional[Container] = None) -> FastAPI:
    """Factory function to create the FastAPI application."""
    init_logging()

    container = container or Container()
    container.wire()

    app = FastAPI(
        title=settings.APP_NAME,
        version="0.1.0",
        description="Search, filter and edit a JSON word list",
        docs_url="/docs" if settings.APP_ENV != AppEnv.PRODUCTION else None,
        redoc_url="/redoc" if settings.APP_ENV != AppEnv.PRODUCTION else None,
        lifespan=lifespan,
    )
    app.state.container = container
    app.state.load_result = None

    origins = ["*"] if settings.DEBUG else []
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Global Exception Handlers
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"status": "error", "code": exc.status_code, "message": exc.detail},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error("unhandled_exception", error=str(exc), exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "status": "error",
                "code": 500,
                "message": str(exc) if settings.DEBUG else "Internal Server Error",
            },
        )

    app.include_router(health.router, prefix="/api/v1")
    app.include_router(words.router, prefix="/api/v1")
    app.include_router(words.collection_router, prefix="/api/v1")
    app.include_router(favorites.router, prefix="/api/v1")

    return app

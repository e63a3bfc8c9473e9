"""Reimburse API — FastAPI application factory."""


import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from reimburse.core.config import settings
from reimburse.core.exceptions import register_exception_handlers
from reimburse.db.base import create_schema, engine
from reimburse.middleware.request_log import RequestLogMiddleware
from reimburse.schemas.common import HealthResponse

from reimburse.routers.v1.categories import router as categories_router
from reimburse.routers.v1.expenses import router as expenses_router
from reimburse.routers.v1.groups import router as groups_router
from reimburse.routers.v1.messages import router as messages_router
from reimburse.routers.v1.organizations import router as organizations_router
from reimburse.routers.v1.policies import router as policies_router
from reimburse.routers.v1.users import router as users_router


def _configure_logging() -> None:
    """Set up structured logging for the application."""
    level = logging.DEBUG if settings.is_development else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    # Quiet noisy libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI):
    if settings.auto_create_schema:
        logger.info("AUTO_CREATE_SCHEMA set, creating missing tables")
        await create_schema()
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    _configure_logging()

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        lifespan=_lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # --- Request logging ---
    app.add_middleware(RequestLogMiddleware)

    # --- Global exception handlers ---
    register_exception_handlers(app)

    # --- v1 API routes (/api/v1/*) ---
    for router in (
        users_router,
        organizations_router,
        messages_router,
        categories_router,
        policies_router,
        expenses_router,
        groups_router,
    ):
        app.include_router(router, prefix="/api/v1")

    # --- Health check ---
    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health():
        return HealthResponse(
            app=settings.app_name, env=settings.app_env, database=engine.dialect.name
        )

    return app


app = create_app()

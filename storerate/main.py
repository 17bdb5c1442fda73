"""
Store Rating Platform — application entry point.

This is the **only** file that assembles the app.  All business logic
lives in the `api/`, `services/`, `models/`, and `core/` packages.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storerate.api.api import api_router
from storerate.core.config import settings
from storerate.core.exceptions import Conflict, register_exception_handlers
from storerate.db.base import Base
from storerate.db.session import async_session_factory, engine

# Ensure all models are imported so metadata.create_all can see them
from storerate.models.rating import Rating  # noqa: F401
from storerate.models.store import Store  # noqa: F401
from storerate.models.user import ROLE_ADMIN
from storerate.services import credentials

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


# ── Lifespan ────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(_app: FastAPI):
    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialised")

    # Seed default admin user on first run
    async with async_session_factory() as session:
        if await credentials.get_user_by_email(session, settings.FIRST_ADMIN_EMAIL) is None:
            try:
                await credentials.create_user(
                    session,
                    name=settings.FIRST_ADMIN_NAME,
                    email=settings.FIRST_ADMIN_EMAIL,
                    password=settings.FIRST_ADMIN_PASSWORD,
                    role=ROLE_ADMIN,
                )
                logger.info(
                    "Default admin created: %s (password: <redacted>)",
                    settings.FIRST_ADMIN_EMAIL,
                )
            except Conflict:
                logger.info("Default admin already created by another worker")

    logger.info("Store Rating Platform v%s started (%s)", settings.VERSION, settings.ENVIRONMENT)
    yield
    await engine.dispose()
    logger.info("Shutdown complete")


# ── App factory ─────────────────────────────────────────────────────
def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.PROJECT_NAME,
        description="Role-based store rating service",
        version=settings.VERSION,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Global exception handlers (prevent stack-trace leakage)
    register_exception_handlers(application)

    application.include_router(api_router, prefix=settings.API_PREFIX)

    return application


app = create_app()

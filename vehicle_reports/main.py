"""
FastAPI application entry point.
Challenge: Mount routes, middleware (Prometheus), error mapping, engine cleanup on shutdown.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from vehicle_reports.api.v1.router import api_router
from vehicle_reports.config import get_settings
from vehicle_reports.core.error_handlers import register_exception_handlers
from vehicle_reports.core.logging_config import setup_logging
from vehicle_reports.db.session import engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: log the target database. Shutdown: release pooled connections."""
    logger.info("Starting %s (database dialect=%s)", app.title, engine.dialect.name)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level)
    app = FastAPI(
        title=settings.app_name,
        description="Users and vehicle condition reports: CRUD, soft delete, filters and price statistics.",
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS for frontend/API consumers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Prometheus metrics at /metrics (monitoring & observability)
    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api")

    return app


app = create_app()

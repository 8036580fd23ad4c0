"""
Fintrack API server.

Stores each user's income and expense records, checks them against
monthly category budgets, and proxies AI requests (spending summaries,
bill scanning, chat, budget suggestions) to a generative model.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from fintrack import __version__
from fintrack.core.config import settings
from fintrack.core.logging import setup_logging
from fintrack.core.metrics import get_metrics, get_metrics_content_type
from fintrack.infrastructure.database import db_manager
from fintrack.presentation.api import api_router
from fintrack.presentation.middleware import (
    LoggingMiddleware,
    RequestContextMiddleware,
    error_handler_middleware,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open the database pool on startup and dispose of it on shutdown."""
    setup_logging()
    db_manager.init()
    if settings.db_create_tables:
        await db_manager.create_tables()

    if not settings.ai_configured:
        logger.warning("ai_api_key_missing", detail="AI endpoints will fail until AI_API_KEY is set")
    logger.info("application_started", version=__version__, ai_model=settings.ai_model)

    try:
        yield
    finally:
        await db_manager.close()
        logger.info("application_stopped")


async def metrics() -> Response:
    """Prometheus scrape endpoint."""
    if not settings.metrics_enabled:
        return Response(status_code=404)
    return Response(content=get_metrics(), media_type=get_metrics_content_type())


async def root() -> RedirectResponse:
    return RedirectResponse(url="/docs")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Fintrack",
        description="Personal finance tracker with AI-assisted insights",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)
    # Added last, so outermost: the request id is bound before access logging runs
    app.add_middleware(RequestContextMiddleware)

    error_handler_middleware(app)

    app.include_router(api_router)
    app.add_api_route("/metrics", metrics, methods=["GET"], include_in_schema=False)
    app.add_api_route("/", root, methods=["GET"], include_in_schema=False)

    return app


app = create_app()


def run() -> None:
    """Console entry point."""
    import uvicorn

    uvicorn.run(
        "fintrack.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )

"""Tapecalc API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TapecalcError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Logging configured once on startup via lifespan context manager
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tapecalc.api.error_handlers import register_error_handlers
from tapecalc.api.routes import calculator_sessions, health
from tapecalc.config import get_settings
from tapecalc.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info("Tapecalc API started")
    yield
    logger.info("Tapecalc API shutting down")


app = FastAPI(
    title="Tapecalc API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(calculator_sessions.router)

register_error_handlers(app)

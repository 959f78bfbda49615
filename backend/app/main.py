"""SkinSense API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map SkinSenseError → standard error envelope
    - CORS configured from settings (not hardcoded)
    - Database and AI client initialized on startup, released on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Middleware order (outermost first): security headers, CORS, rate limit,
      request log, catch-all 500
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import app.infrastructure.ai_client as ai_client_module
from app.api.error_handlers import register_error_handlers
from app.api.middleware import (
    CatchAllErrorMiddleware, RateLimitMiddleware, RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)
from app.api.routes import analyze, auth, chat, conditions, consent, health
from app.config import get_settings
from app.infrastructure.database import init_db
from app.infrastructure.observability import setup_logging
from app.services.education_service import get_education_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_url.startswith("sqlite"):
        await manager.create_all()
    client = ai_client_module.init_ai_client(settings)
    get_education_service()
    logger.info(f"Server running on port {settings.port}")
    logger.info(f"Frontend URL {settings.frontend_url}")
    logger.info(f"AI Predict URL {settings.ai_predict_url}")
    logger.info(f"AI Chat URL {settings.ai_chat_url}")
    yield
    logger.info("SkinSense API shutting down")
    await client.close()
    await manager.dispose()


app = FastAPI(title="SkinSense API", version="1.0.0", lifespan=lifespan)

settings = get_settings()

# Added last = runs first
app.add_middleware(CatchAllErrorMiddleware)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    RateLimitMiddleware,
    max_requests=settings.rate_limit_max_requests,
    window_seconds=settings.rate_limit_window_ms / 1000,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
    allow_credentials=True,
)
app.add_middleware(SecurityHeadersMiddleware)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(analyze.router)
app.include_router(chat.router)
app.include_router(consent.router)
app.include_router(conditions.router)

register_error_handlers(app)

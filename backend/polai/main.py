"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from polai.api.router import api_router
from polai.core.config import get_settings

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown events."""
    settings = get_settings()
    logger.info("=== %s started ===", settings.app_name)
    logger.info("AI provider: %s", settings.ai_provider)
    logger.info("Mistral API key: %s", "configured" if settings.mistral_api_key else "missing")
    logger.info("OpenAI API key: %s", "configured" if settings.openai_api_key else "missing")
    if settings.ai_provider == "mistral" and not settings.mistral_api_key:
        logger.warning("MISTRAL_API_KEY not set; analyses will use the rule-based fallback")
    if settings.ai_provider == "openai" and not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY not set; analyses will use the rule-based fallback")
    yield


def create_application() -> FastAPI:
    """Create and configure the FastAPI app."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="Privacy policy analysis API for web and mobile clients.",
        version=settings.service_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
    app.include_router(api_router, prefix="/api")
    return app


app = create_application()

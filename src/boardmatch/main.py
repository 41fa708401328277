"""FastAPI application for surfboard duplicate review and linking."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .api.router import api_router
from .config import settings
from .database import init_db

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Creating database tables...")
    init_db()
    config = settings.matcher_config
    logger.info(
        "boardmatch started (tolerance=%sin, model>=%.2f, auto-link>=%.2f)",
        config.length_tolerance_inches,
        config.model_similarity_threshold,
        config.min_confidence_to_auto_link,
    )
    yield
    logger.info("boardmatch stopped")


app = FastAPI(
    title="boardmatch",
    description="Cross-retailer surfboard listing duplicate detection",
    version="0.1.0",
    lifespan=lifespan,
)
if settings.api_key:
    from .auth import ApiKeyMiddleware
    app.add_middleware(ApiKeyMiddleware)

app.include_router(api_router)

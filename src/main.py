# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""FastAPI application entry point."""

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.middleware import VisitorCookieMiddleware
from src.config import settings
from src.schemas.common import HealthResponse
from src.services.memory_cache import (
    currencies_cache,
    response_cache,
    run_cleanup_loop,
)

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown events."""
    # Startup: periodic purge of expired in-memory cache entries
    logger.info("Starting cache cleanup task...")
    cleanup_task = asyncio.create_task(
        run_cleanup_loop(
            [response_cache, currencies_cache],
            settings.cache_cleanup_interval_seconds,
        )
    )

    yield

    # Shutdown: Cleanup
    logger.info("Stopping cache cleanup task...")
    cleanup_task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await cleanup_task


app = FastAPI(
    title="Currency Rates Proxy",
    description="Currency exchange rates with caching and visitor preferences",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(VisitorCookieMiddleware)

# CORS middleware for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy")


# Import and include API router after it's created
from src.api.v1.router import api_router  # noqa: E402

app.include_router(api_router, prefix="/api/v1")

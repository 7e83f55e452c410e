"""
Resource Booking API - Main Application Entry Point

A booking backend for institutions and their resources:
- Day-granular scheduling with per-resource overlap protection
- Lifecycle cascades (resource delete, institution update) that clean up
  future bookings and open error reports
- Redis read cache for per-resource day views
- Structured logging with request correlation and Prometheus metrics
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import get_settings
from app.core.logging import setup_logging, get_logger
from app.core.metrics import metrics_endpoint
from app.api.deps import get_booking_cache
from app.api.router import api_router
from app.api.middleware import RequestLoggingMiddleware
from app.db.session import dispose_engine
from app.infrastructure.redis_client import create_redis
from app.services.cache_service import BookingCache
from app.services.strategy_factory import get_blob_storage_strategy

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown hooks."""
    setup_logging()
    logger = get_logger(__name__)

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
    )

    redis_client = await create_redis(settings)
    if redis_client:
        logger.info("redis_ready")
    else:
        logger.warning("redis_unavailable", message="Running without cache")

    app.state.booking_cache = BookingCache(redis_client, ttl=settings.REDIS_CACHE_TTL)
    app.state.blob_storage = get_blob_storage_strategy(settings)
    logger.info("blob_storage_ready", strategy=type(app.state.blob_storage).__name__)

    yield

    await app.state.booking_cache.close()
    await dispose_engine()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Resource booking API with lifecycle cascades and day-granular scheduling",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Custom middleware
app.add_middleware(RequestLoggingMiddleware)

# Routes
app.include_router(api_router)


@app.get("/health", tags=["Health"])
async def health_check(request: Request):
    """Health check endpoint for Docker and load balancers."""
    cache_stats = await get_booking_cache(request).stats()
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "cache": cache_stats,
    }


@app.get("/metrics", tags=["Health"], include_in_schema=False)
def metrics():
    return metrics_endpoint()


@app.get("/", tags=["Root"])
async def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/docs",
    }

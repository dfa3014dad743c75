# main.py
"""
CoachHub API - Main Application.

FastAPI app over MongoDB with a Redis read cache.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from database import Database
from settings import settings
from coachhub.middleware.db_middleware import LazyDatabaseMiddleware
from coachhub.utils.errors import CoachHubException

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Initialize Sentry for error tracking
if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.SENTRY_ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        integrations=[
            FastApiIntegration(),
            LoggingIntegration(
                level=logging.INFO,
                event_level=logging.ERROR
            ),
        ],
    )
    logger.info(f"Sentry initialized ({settings.SENTRY_ENVIRONMENT})")
else:
    logger.warning("Sentry DSN not configured - error tracking disabled")

# Import routers
from coachhub.routes import (
    athletes,
    history,
    training,
    routines,
    exercises,
    notifications,
    users,
    dashboard,
    media,
    measurements,
    analytics,
    schedule,
)
from coachhub.services.cache import cache_service

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting CoachHub API...")
    # If initialization fails, lazy initialization will be used as fallback
    try:
        await Database.connect_db(settings.DATABASE_URL, settings.DATABASE_NAME)
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.warning(f"Failed to initialize database at startup: {e}")
        logger.warning("Database will be initialized lazily on first request")

    yield

    await Database.close_db()
    logger.info("CoachHub API shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="CoachHub API",
    version=API_VERSION,
    description="Data layer for coaches and athletes: routines, exercise library, training logs and statistics",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Lazy database connection middleware
app.add_middleware(LazyDatabaseMiddleware)


@app.exception_handler(CoachHubException)
async def coachhub_exception_handler(request: Request, exc: CoachHubException):
    logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Last resort: never leak internals to the client."""
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"error": "Error interno del servidor"})


# Health check
@app.get("/health")
async def health_check():
    """Health check endpoint - fast response without database dependency."""
    return {
        "status": "ok",
        "environment": settings.ENV,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": API_VERSION
    }


@app.get("/health/detailed")
async def health_check_detailed():
    """Detailed health check with MongoDB connectivity test."""
    try:
        mongo_ok = await Database.ping()
        return {
            "status": "ok" if mongo_ok else "degraded",
            "database": "mongodb",
            "database_connected": mongo_ok,
            "environment": settings.ENV,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": API_VERSION
        }
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        return {
            "status": "error",
            "database": "mongodb",
            "database_connected": False,
            "environment": settings.ENV,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "error": str(e)
        }


@app.get("/health/redis")
async def redis_health_check():
    """Redis connectivity and hit-rate health check."""
    try:
        is_healthy = await cache_service.healthcheck()

        if not is_healthy:
            return {
                "status": "unhealthy",
                "redis_connected": False,
                "timestamp": datetime.now(timezone.utc).isoformat()
            }

        stats = await cache_service.get_stats()

        hits = stats.get("keyspace_hits", 0)
        misses = stats.get("keyspace_misses", 0)
        total = hits + misses
        hit_rate = (hits / total * 100) if total > 0 else 0

        return {
            "status": "healthy",
            "redis_connected": True,
            "memory_used": stats.get("used_memory_human"),
            "connected_clients": stats.get("connected_clients"),
            "cache_hit_rate": f"{hit_rate:.2f}%",
            "cache_hits": hits,
            "cache_misses": misses,
            "evicted_keys": stats.get("evicted_keys"),
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

    except Exception as e:
        logger.error(f"Redis health check failed: {str(e)}")
        return {
            "status": "error",
            "redis_connected": False,
            "error": str(e),
            "timestamp": datetime.now(timezone.utc).isoformat()
        }


# Include routers
app.include_router(athletes.router, prefix="/api/athletes", tags=["Athletes"])
app.include_router(history.router, prefix="/api/history", tags=["History"])
app.include_router(training.router, prefix="/api/training", tags=["Training"])
app.include_router(routines.router, prefix="/api/routines", tags=["Routines"])
app.include_router(exercises.router, prefix="/api/exercises", tags=["Exercises"])
app.include_router(notifications.router, prefix="/api/notifications", tags=["Notifications"])
app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["Dashboard"])
app.include_router(media.router, prefix="/api", tags=["Media"])
app.include_router(measurements.router, prefix="/api/measurements", tags=["Measurements"])
app.include_router(analytics.router, prefix="/api/analytics", tags=["Analytics"])
app.include_router(schedule.router, prefix="/api/schedule", tags=["Schedule"])


# Root endpoint
@app.get("/")
async def root():
    """API root endpoint."""
    return {
        "message": "CoachHub API",
        "version": API_VERSION,
        "docs": "/docs",
        "health": "/health"
    }

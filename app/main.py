# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the AI Ships API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    AiShipsException,
    aiships_exception_handler,
    validation_exception_handler,
)
from app.routers import (
    completions,
    cron,
    generation,
    health,
    ideas,
    leaderboard,
    stats,
    tasks,
    trends,
    users,
    visitor,
    votes,
)
from lib.kv import KVClient, KVStoreError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: log configuration, create the KV store
    - Shutdown: log
    """
    logger.info(f"Starting AI Ships API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    try:
        KVClient.get_store()
    except KVStoreError as e:
        # Requests will retry store creation; health/ready reports the failure
        logger.error(f"KV store unavailable at startup: {e}")

    yield

    logger.info("Shutting down AI Ships API")


# Create FastAPI application
app = FastAPI(
    title="AI Ships API",
    description="""
## AI Ships

A daily-task site: a new small interactive task ships every day, visitors
complete tasks for points, and the community votes on what to build next.

### Key Features

- **Completions & Leaderboard**: points decay with time spent and attempts
- **Task Ideas**: submit (one per hour) and vote
- **AI Generation**: task ideas generated from HackerNews trends
- **Daily Maintenance**: cleanup, idea seeding and release via cron or Celery beat
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Stats", "description": "Site statistics and visitor tracking"},
        {"name": "Users", "description": "User preferences"},
        {"name": "Completions", "description": "Task completions and points"},
        {"name": "Leaderboard", "description": "Ranked users"},
        {"name": "Tasks", "description": "Task catalogue and task stats"},
        {"name": "Ideas", "description": "Task idea submission and voting"},
        {"name": "Cron", "description": "Scheduled jobs (bearer-secret protected)"},
        {"name": "Generation", "description": "AI task idea generation"},
        {"name": "Trends", "description": "HackerNews trends"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(AiShipsException)
async def handle_aiships_exception(request: Request, exc: AiShipsException):
    """Handle custom AI Ships exceptions."""
    return await aiships_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Missing or malformed request fields."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

app.include_router(health.router, prefix="/api", tags=["Health"])
app.include_router(stats.router, prefix="/api", tags=["Stats"])
app.include_router(visitor.router, prefix="/api", tags=["Stats"])
app.include_router(users.router, prefix="/api", tags=["Users"])
app.include_router(completions.router, prefix="/api", tags=["Completions"])
app.include_router(leaderboard.router, prefix="/api", tags=["Leaderboard"])
app.include_router(ideas.router, prefix="/api", tags=["Ideas"])
app.include_router(votes.router, prefix="/api", tags=["Ideas"])
app.include_router(cron.router, prefix="/api", tags=["Cron"])
app.include_router(tasks.router, prefix="/api", tags=["Tasks"])
app.include_router(generation.router, prefix="/api", tags=["Generation"])
app.include_router(trends.router, prefix="/api", tags=["Trends"])


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "AI Ships API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/health",
    }

# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the RitmoHub API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    RitmoHubException,
    ritmohub_exception_handler,
    validation_exception_handler,
)
from app.routers import clients, financial, health, packages, videos
from app.auth import routes as auth_routes

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

    Logs the active configuration on startup and shutdown.
    """
    logger.info(f"Starting RitmoHub API in {settings.ENVIRONMENT} mode")
    logger.info(f"Storage backend: {settings.STORAGE_BACKEND}")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    yield

    logger.info("Shutting down RitmoHub API")


# Create FastAPI application
app = FastAPI(
    title="RitmoHub API",
    description="""
## Music Promotion Agency Backend

RitmoHub tracks engagement packages sold to music clients, the videos each
package covers, and the money each contract moves.

### How It Works

1. **Register a Client** - Artist or agency buying promotion
2. **Create a Package or Post** - Commissions and costs are calculated on creation
3. **Advance Videos** - briefing_sent -> video_posted -> sent_to_group -> engaged
4. **Automatic Completion** - The package completes when every video is engaged
5. **Track Payments** - Tick receivables and payables per package

### Roles

| Role | Can |
|------|-----|
| **admin** | Everything |
| **video_manager** | Move videos from video_posted to sent_to_group |
| **financial** | Reports, CSV export and payment checklist |
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Authentication endpoints for verifying JWT tokens",
        },
        {
            "name": "Clients",
            "description": "Register and manage clients",
        },
        {
            "name": "Packages",
            "description": "Packages, posts, their videos and payments",
        },
        {
            "name": "Videos",
            "description": "Engagement workflow transitions",
        },
        {
            "name": "Financial",
            "description": "Cost preview, reports, CSV export and dashboard",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
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

@app.exception_handler(RitmoHubException)
async def handle_ritmohub_exception(request: Request, exc: RitmoHubException):
    """Handle domain exceptions."""
    return await ritmohub_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_request_validation(request: Request, exc: RequestValidationError):
    """Handle malformed request bodies and query parameters."""
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

# Authentication endpoints
app.include_router(
    auth_routes.router,
    prefix="/api/v1/auth",
    tags=["Auth"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# Client endpoints
app.include_router(
    clients.router,
    prefix="/api/v1/clients",
    tags=["Clients"]
)

# Package and post endpoints
app.include_router(
    packages.router,
    prefix="/api/v1/packages",
    tags=["Packages"]
)

# Video workflow endpoints
app.include_router(
    videos.router,
    prefix="/api/v1/videos",
    tags=["Videos"]
)

# Financial endpoints
app.include_router(
    financial.router,
    prefix="/api/v1/financial",
    tags=["Financial"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "RitmoHub API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )

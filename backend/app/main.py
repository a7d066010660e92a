"""
Application Phase Tracker - FastAPI Application

Main entry point for the backend API.
Provides endpoints for phase changes, reopening, country tracks and progress.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config.settings import settings
from app.infrastructure.exceptions import (
    PhaseTrackerError,
    ValidationError,
    MissingRequiredDocumentsError,
    NotFoundError,
    DuplicateError,
)

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info(f"Application Phase Tracker starting in {settings.environment} mode...")

    if settings.database_url:
        try:
            from app.infrastructure.db.database import init_db
            await init_db()
            logger.info("SQLModel database connection pool initialized")
        except Exception as e:
            logger.warning(f"SQLModel database initialization skipped: {e}")

    yield

    if settings.database_url:
        try:
            from app.infrastructure.db.database import close_db
            await close_db()
            logger.info("SQLModel database connection pool closed")
        except Exception as e:
            logger.warning(f"SQLModel database shutdown error: {e}")

    logger.info("Application Phase Tracker shutting down...")


app = FastAPI(
    title="Application Phase Tracker",
    description="Phase and progress tracking for study-abroad counselors",
    version="1.0.0",
    lifespan=lifespan,
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Exception Handlers
# ============================================================================

@app.exception_handler(MissingRequiredDocumentsError)
async def missing_documents_handler(request: Request, exc: MissingRequiredDocumentsError):
    """Blocked phase change: remediation text plus the structured rejection."""
    return JSONResponse(
        status_code=400,
        content={
            "error": exc.__class__.__name__,
            "message": exc.message,
            **exc.rejection,
        },
    )


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    """Handle validation errors."""
    return JSONResponse(
        status_code=400,
        content=exc.to_dict(),
    )


@app.exception_handler(NotFoundError)
async def not_found_error_handler(request: Request, exc: NotFoundError):
    """Handle not found errors."""
    return JSONResponse(
        status_code=404,
        content=exc.to_dict(),
    )


@app.exception_handler(DuplicateError)
async def duplicate_error_handler(request: Request, exc: DuplicateError):
    return JSONResponse(
        status_code=409,
        content=exc.to_dict(),
    )


@app.exception_handler(PhaseTrackerError)
async def general_error_handler(request: Request, exc: PhaseTrackerError):
    """Handle all other application errors."""
    logger.error(f"Unhandled tracker error on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=500,
        content=exc.to_dict(),
    )


# ============================================================================
# Health Check
# ============================================================================

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "application-phase-tracker"}


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Application Phase Tracker API",
        "version": "1.0.0",
        "docs": "/docs",
    }


# ============================================================================
# Import and register routers
# ============================================================================

from app.api.routes import phases, progress, country_profiles, applications  # noqa: E402

app.include_router(phases.router, prefix="/api", tags=["Phases"])
app.include_router(progress.router, prefix="/api", tags=["Progress"])
app.include_router(country_profiles.router, prefix="/api", tags=["Country Profiles"])
app.include_router(applications.router, prefix="/api", tags=["Applications"])

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
from pathlib import Path
import logging
import structlog
from typing import AsyncGenerator

from app.config import settings
from app.api import content, jobs, outputs, transformations, research, system
from app.core.database import engine, Base
from app.core.exceptions import MissingAPIKeyError, RepurposerError
from app import models  # noqa: F401  registers tables on Base.metadata

logging.basicConfig(format="%(message)s", level=settings.log_level)

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer()
        if settings.is_production else structlog.dev.ConsoleRenderer(),
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifecycle management"""
    logger.info("Starting Content Repurposer API", env=settings.app_env)

    # Create database tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database initialized")

    yield

    await engine.dispose()
    logger.info("Shutting down API")


# Initialize FastAPI app
app = FastAPI(
    title="Content Repurposer API",
    description="Turn articles, videos and podcasts into new formats with AI",
    version="1.0.0",
    lifespan=lifespan,
    debug=settings.debug
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.is_development else settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(MissingAPIKeyError)
async def missing_api_key_handler(request: Request, exc: MissingAPIKeyError):
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": str(exc)}
    )


@app.exception_handler(RepurposerError)
async def repurposer_error_handler(request: Request, exc: RepurposerError):
    logger.warning("Request failed", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc)}
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception", exc_info=exc, path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An internal error occurred. Please try again later."}
    )


# Health check endpoint
@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "environment": settings.app_env,
        "version": "1.0.0"
    }


# Include API routers
app.include_router(content.router, prefix="/api/v1/content", tags=["Content"])
app.include_router(jobs.router, prefix="/api/v1/jobs", tags=["Jobs"])
app.include_router(outputs.router, prefix="/api/v1/outputs", tags=["Outputs"])
app.include_router(
    transformations.router,
    prefix="/api/v1/transformations",
    tags=["Transformations"]
)
app.include_router(research.router, prefix="/api/v1/research", tags=["Research"])
app.include_router(system.router, prefix="/api/v1/system", tags=["System"])

# Uploaded files and generated audio for the local storage backend
if settings.storage_type == "local":
    media_root = Path(settings.local_storage_path)
    media_root.mkdir(parents=True, exist_ok=True)
    app.mount("/media", StaticFiles(directory=media_root), name="media")


@app.get("/")
async def root():
    return {
        "message": "Content Repurposer API",
        "docs": "/docs",
        "health": "/health"
    }

"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from loguru import logger

from whereabouts.api.v1.router import api_router
from whereabouts.core.config import settings
from whereabouts.core.errors import (
    NotFoundError,
    PartialBatchFailure,
    QuarterExistsError,
    StoreError,
    ValidationError,
    WhereaboutsError,
)
from whereabouts.core.logger import setup_logger
from whereabouts.schemas.results import ErrorInfo, OperationResult

setup_logger(level=settings.LOG_LEVEL, log_file=settings.LOG_FILE)

ERROR_STATUS = {
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    QuarterExistsError: status.HTTP_409_CONFLICT,
    StoreError: status.HTTP_502_BAD_GATEWAY,
    PartialBatchFailure: status.HTTP_207_MULTI_STATUS,
}

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Quarterly whereabouts filing: weekly patterns expanded into daily 60-minute slots.",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json")

# Include API router
app.include_router(api_router, prefix="/api/v1")


@app.exception_handler(WhereaboutsError)
async def whereabouts_error_handler(request: Request, exc: WhereaboutsError):
    """Render service errors as ``{success: false, error: {...}}``."""
    status_code = ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500 or isinstance(exc, PartialBatchFailure):
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc}")

    body = OperationResult(success=False, error=ErrorInfo(code=exc.code, message=exc.message, details=exc.details))
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {
        "message": "Whereabouts API",
        "version": settings.VERSION,
        "status": "healthy"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {
        "status": "healthy",
        "service": "whereabouts-api",
        "version": settings.VERSION
    }


@app.get("/info")
async def info():
    return {
        "project name": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "authors": settings.AUTHORS,
        "project url": settings.PROJECT_URL
    }

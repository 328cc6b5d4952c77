"""Main entry point for the SecureZone application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from securezone.api.v1 import (
    admin_router,
    auth_router,
    comments_router,
    moderation_router,
    reports_router,
    users_router,
    votes_router,
)
from securezone.core.errors import SecureZoneError
from securezone.core.settings import settings
from securezone.services.locks import ReportLockRegistry
from securezone.services.tags import TagSynchronizer
from securezone.services.votes import VoteLedger

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="SecureZone API",
    description="Community incident reporting API",
    version=settings.app_version,
)

# Vote casts and tag replacements on the same report share one lock registry.
report_locks = ReportLockRegistry()
app.state.vote_ledger = VoteLedger(report_locks)
app.state.tag_synchronizer = TagSynchronizer(report_locks, max_length=settings.tag_max_length)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(auth_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")
app.include_router(reports_router, prefix="/api/v1")
app.include_router(votes_router, prefix="/api/v1")
app.include_router(comments_router, prefix="/api/v1")
app.include_router(moderation_router, prefix="/api/v1")


@app.exception_handler(SecureZoneError)
async def handle_domain_error(request: Request, exc: SecureZoneError) -> JSONResponse:
    """Render domain errors as ``{kind, message}`` with the mapped status code."""
    return JSONResponse(
        status_code=exc.status_code,
        content={**exc.to_dict(), "detail": exc.message},
    )


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={
            "kind": "Internal",
            "message": "Internal server error",
            "detail": "Internal server error",
        },
    )


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "SecureZone API",
        "version": settings.app_version,
        "description": "Community incident reporting API",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("securezone.main:app", host="0.0.0.0", port=8000, reload=settings.debug)

"""Meta endpoints for the vtrack API."""

import logging

from fastapi import APIRouter, Depends

from .. import __version__
from ..models import HealthResponse, VersionResponse
from ..services import RepositoryService, get_repository_service

router = APIRouter(tags=["meta"])

logger = logging.getLogger(__name__)


@router.get("/health", response_model=HealthResponse)
def health_check(
    service: RepositoryService = Depends(get_repository_service),
) -> HealthResponse:
    """Health check endpoint."""
    records_present = service.records_present()
    logger.info("Health check invoked", extra={"records_present": records_present})
    return HealthResponse(
        status="healthy",
        version=__version__,
        root=str(service.config.root),
        records_present=records_present,
    )


@router.get("/version", response_model=VersionResponse)
def version_info(
    service: RepositoryService = Depends(get_repository_service),
) -> VersionResponse:
    """Version information endpoint."""
    logger.info("Version endpoint invoked")
    return VersionResponse(
        version=__version__,
        api_version="v1",
        storage_dir=service.config.storage_dir,
    )


@router.get("/", include_in_schema=False)
def root() -> dict:
    """Root endpoint providing basic API metadata."""
    logger.debug("Root endpoint served")
    return {
        "name": "vtrack API",
        "version": __version__,
        "description": "Content-addressed version tracking API",
        "endpoints": {
            "init": "POST /init - Track every non-empty file",
            "status": "GET /status - Modified and unmodified files",
            "record": "POST /files - Record a new file version",
            "history": "GET /files/history?path= - Versions of a file",
            "objects": "GET /objects/{digest} - Stored content",
            "health": "GET /health - Health check",
            "version": "GET /version - Version information",
            "docs": "GET /docs - API documentation",
        },
    }

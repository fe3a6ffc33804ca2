"""Repository routes for the vtrack API."""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Query

from ..models import RecordRequest
from ..services import RepositoryService, get_repository_service

router = APIRouter(tags=["files"])

logger = logging.getLogger(__name__)


@router.post("/init")
def initialize_repository(
    service: RepositoryService = Depends(get_repository_service),
) -> Dict[str, Any]:
    """Track every non-empty file in the repository."""
    logger.info("Received init request")
    return {"ok": True, "data": service.initialize()}


@router.get("/status")
def repository_status(
    service: RepositoryService = Depends(get_repository_service),
) -> Dict[str, Any]:
    """List modified and unmodified tracked files."""
    result = service.status()
    logger.info(
        "Status request completed",
        extra={"modified": len(result["modified"]), "unmodified": len(result["unmodified"])},
    )
    return {"ok": True, "data": result}


@router.post("/files")
def record_file(
    request: RecordRequest,
    service: RepositoryService = Depends(get_repository_service),
) -> Dict[str, Any]:
    """Record the current content of a file as its newest version."""
    logger.info("Received record request", extra={"path": request.path})
    result = service.record(request.path)
    logger.info(
        "Record request completed",
        extra={"path": result["path"], "status": result["status"]},
    )
    return {"ok": True, "data": result}


@router.get("/files/history")
def file_history(
    path: str = Query(..., min_length=1, description="File path relative to the root"),
    service: RepositoryService = Depends(get_repository_service),
) -> Dict[str, Any]:
    """Return the versions recorded for a file, oldest first."""
    return {"ok": True, "data": service.history(path)}


@router.get("/objects/{digest}")
def get_object(
    digest: str,
    service: RepositoryService = Depends(get_repository_service),
) -> Dict[str, Any]:
    """Return the base64 content stored for a digest."""
    return {"ok": True, "data": service.get_object(digest)}

"""API route registration for vtrack."""

from fastapi import APIRouter

from . import files, meta

router = APIRouter()
router.include_router(meta.router)
router.include_router(files.router)

__all__ = ["router"]

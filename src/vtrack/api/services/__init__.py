"""Service layer for the vtrack API."""

from .repository import RepositoryService, get_repository_service

__all__ = ["RepositoryService", "get_repository_service"]

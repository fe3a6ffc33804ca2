"""Repository service for the vtrack API."""

import logging
import threading
from functools import lru_cache
from typing import Any, Dict, Optional

from ... import codec
from ...config import RepositoryConfig
from ...discovery import to_repository_path
from ...errors import EmptyContentError
from ...repository import RepositoryManager

logger = logging.getLogger(__name__)


class RepositoryService:
    """Serializes API calls into a single repository manager.

    FastAPI runs sync endpoints on a worker thread pool, while the manager
    assumes one caller at a time. Every access to the manager, including the
    first one that opens it, happens under ``_lock``.
    """

    def __init__(self, config: Optional[RepositoryConfig] = None):
        """Initialize with configuration, defaulting to environment settings."""
        self.config = config or RepositoryConfig.from_settings()
        self._lock = threading.Lock()
        self._manager: Optional[RepositoryManager] = None

    def _open_manager(self) -> RepositoryManager:
        """Return the manager, loading it on first use. Caller holds the lock."""
        if self._manager is None:
            logger.info("Opening repository", extra={"root": str(self.config.root)})
            self._manager = RepositoryManager.open(self.config)
        return self._manager

    def records_present(self) -> bool:
        """Check whether the repository has persisted records."""
        with self._lock:
            return self._open_manager().storage.exists()

    def initialize(self) -> Dict[str, Any]:
        """Track every non-empty file under the root."""
        with self._lock:
            summary = self._open_manager().initialize()
        logger.info("Repository initialized", extra=summary.to_dict())
        return summary.to_dict()

    def record(self, path: str) -> Dict[str, Any]:
        """Record the current content of a file."""
        with self._lock:
            outcome = self._open_manager().record_file(path)
        if not outcome.ok:
            raise EmptyContentError(outcome.path)
        return outcome.to_dict()

    def status(self) -> Dict[str, Any]:
        """Partition tracked files into modified and unmodified."""
        with self._lock:
            report = self._open_manager().status()
        return report.to_dict()

    def history(self, path: str) -> Dict[str, Any]:
        """Return the digests recorded for a path, oldest first."""
        repo_path = to_repository_path(self.config.root, path)
        with self._lock:
            digests = self._open_manager().history(repo_path)
        return {"path": repo_path, "versions": digests}

    def get_object(self, digest: str) -> Dict[str, Any]:
        """Return stored content for a digest in its base64 form."""
        with self._lock:
            content = self._open_manager().get_content(digest)
        return {"digest": digest, "size": len(content), "content": codec.encode(content)}


@lru_cache(maxsize=1)
def get_repository_service() -> RepositoryService:
    """Return the process-wide repository service."""
    return RepositoryService()

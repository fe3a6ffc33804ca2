"""Repository orchestration for vtrack."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from .config import RepositoryConfig
from .discovery import FileScanner, read_content, to_repository_path
from .errors import RepositoryNotLoadedError
from .hasher import compute_digest
from .history import ChangeKind, FileHistoryIndex
from .persistence import LoadResult, RecordStorage
from .store import ContentStore

logger = logging.getLogger(__name__)

ContentReader = Callable[[Path], bytes]


class RecordStatus(str, Enum):
    """Outcome of recording a single file."""

    ADDED = "added"
    UNCHANGED = "unchanged"
    EMPTY = "empty"


@dataclass
class RecordOutcome:
    """Result of RepositoryManager.record_file."""

    path: str
    status: RecordStatus
    digest: Optional[str] = None
    versions: int = 0

    @property
    def ok(self) -> bool:
        """Whether the file was accepted (added or already current)."""
        return self.status is not RecordStatus.EMPTY

    def to_dict(self) -> Dict[str, Any]:
        """Convert outcome to dictionary for reporting."""
        return {
            "path": self.path,
            "status": self.status.value,
            "digest": self.digest,
            "versions": self.versions,
        }


@dataclass
class InitializeSummary:
    """Aggregate result of a full repository scan."""

    tracked: int = 0
    skipped: int = 0
    objects: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert summary to dictionary for reporting."""
        return {"tracked": self.tracked, "skipped": self.skipped, "objects": self.objects}


@dataclass
class StatusReport:
    """Tracked paths partitioned by whether their content changed."""

    modified: List[str] = field(default_factory=list)
    unmodified: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert report to dictionary for reporting."""
        return {"modified": self.modified, "unmodified": self.unmodified}


class RepositoryManager:
    """Owns one repository's content store and file history."""

    def __init__(
        self,
        config: RepositoryConfig,
        scanner: Optional[FileScanner] = None,
        reader: Optional[ContentReader] = None,
    ):
        """Initialize with configuration and optional I/O collaborators."""
        self.config = config
        self.scanner = scanner or FileScanner(config)
        self.reader = reader or read_content
        self.store = ContentStore()
        self.index = FileHistoryIndex()
        self.storage = RecordStorage(config)
        self._loaded = False

    @classmethod
    def open(cls, config: RepositoryConfig, **kwargs: Any) -> "RepositoryManager":
        """Create a manager and load its persisted state."""
        manager = cls(config, **kwargs)
        manager.load()
        return manager

    def load(self) -> LoadResult:
        """Reload persisted records into fresh in-memory structures."""
        self.store = ContentStore()
        self.index = FileHistoryIndex()
        result = self.storage.load(self.store, self.index)
        self._loaded = True
        return result

    def save(self) -> None:
        """Write both records to disk."""
        self._require_loaded()
        self.storage.save(self.store, self.index)

    def initialize(self) -> InitializeSummary:
        """Track every non-empty file in the repository as a single version."""
        self._require_loaded()
        summary = InitializeSummary()

        for path, content in self.scanner.iter_contents():
            if not content:
                summary.skipped += 1
                continue

            digest = compute_digest(content)
            self.store.put(digest, content)
            self.index.start_chain(path, digest)
            summary.tracked += 1

        self.save()
        summary.objects = len(self.store)
        logger.info("Scanned and stored initial file versions", extra=summary.to_dict())
        return summary

    def record_file(self, path: Union[str, Path]) -> RecordOutcome:
        """Record the current content of path as its newest version."""
        self._require_loaded()
        repo_path = to_repository_path(self.config.root, path)
        content = self.reader(self.config.root / repo_path)

        if not content:
            logger.warning("No content in the file", extra={"path": repo_path})
            return RecordOutcome(path=repo_path, status=RecordStatus.EMPTY)

        digest = compute_digest(content)
        change = self.index.record_change(repo_path, digest)
        versions = len(self.index.chain(repo_path))

        if change is ChangeKind.UNCHANGED:
            logger.info("File has no changes", extra={"path": repo_path})
            return RecordOutcome(
                path=repo_path,
                status=RecordStatus.UNCHANGED,
                digest=digest,
                versions=versions,
            )

        self.store.put(digest, content)
        self.save()
        logger.info(
            "Added file version",
            extra={"path": repo_path, "digest": digest, "change": change.value},
        )
        return RecordOutcome(
            path=repo_path,
            status=RecordStatus.ADDED,
            digest=digest,
            versions=versions,
        )

    def is_modified(self, path: Union[str, Path]) -> bool:
        """Check whether the file on disk differs from its latest recorded version."""
        self._require_loaded()
        repo_path = to_repository_path(self.config.root, path)
        content = self.reader(self.config.root / repo_path)
        return self.index.is_modified(repo_path, content)

    def status(self) -> StatusReport:
        """Classify every tracked path as modified or unmodified."""
        self._require_loaded()
        report = StatusReport()

        for path in self.index.paths():
            if self.is_modified(path):
                report.modified.append(path)
            else:
                report.unmodified.append(path)

        logger.debug(
            "Computed status",
            extra={"modified": len(report.modified), "unmodified": len(report.unmodified)},
        )
        return report

    def latest(self, path: Union[str, Path]) -> Optional[str]:
        """Return the latest recorded digest of path, or None if untracked."""
        self._require_loaded()
        return self.index.latest(to_repository_path(self.config.root, path))

    def history(self, path: Union[str, Path]) -> List[str]:
        """Return every digest recorded for path in this process, oldest first."""
        self._require_loaded()
        return list(self.index.chain(to_repository_path(self.config.root, path)))

    def get_content(self, digest: str) -> bytes:
        """Return the stored content for digest."""
        self._require_loaded()
        return self.store.get(digest)

    def _require_loaded(self) -> None:
        if not self._loaded:
            raise RepositoryNotLoadedError(str(self.config.root))

"""File discovery and content reading for vtrack."""

import logging
import os
from pathlib import Path, PurePosixPath
from typing import Iterator, List, Tuple, Union

from .config import RepositoryConfig
from .errors import PathOutsideRepositoryError

logger = logging.getLogger(__name__)


def read_content(path: Union[str, Path]) -> bytes:
    """Read a file's bytes, returning empty bytes if it cannot be read."""
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as exc:
        logger.debug("Unable to read file", extra={"path": str(path), "error": str(exc)})
        return b""


def to_repository_path(root: Path, path: Union[str, Path]) -> str:
    """Normalize a path to the POSIX form stored in the history record."""
    candidate = Path(path)
    if candidate.is_absolute():
        try:
            candidate = candidate.resolve().relative_to(root.resolve())
        except ValueError:
            raise PathOutsideRepositoryError(str(path), str(root)) from None

    parts = PurePosixPath(candidate.as_posix()).parts
    normalized = [part for part in parts if part not in ("", ".")]
    if not normalized or ".." in normalized:
        raise PathOutsideRepositoryError(str(path), str(root))
    return "/".join(normalized)


class FileScanner:
    """Walks the repository tree, skipping the record storage directory."""

    def __init__(self, config: RepositoryConfig):
        """Initialize with configuration."""
        self.config = config

    def scan(self) -> List[str]:
        """Return the repository paths of all regular files, sorted."""
        root = self.config.root
        excluded = self.config.storage_path.resolve()
        found = []

        for dirpath, dirnames, filenames in os.walk(root):
            current = Path(dirpath)
            dirnames[:] = sorted(
                name for name in dirnames if (current / name).resolve() != excluded
            )
            for name in filenames:
                file_path = current / name
                if file_path.is_file():
                    found.append(file_path.relative_to(root).as_posix())

        found.sort()
        logger.debug("Scanned repository tree", extra={"root": str(root), "files": len(found)})
        return found

    def iter_contents(self) -> Iterator[Tuple[str, bytes]]:
        """Yield (path, content) for every scanned file."""
        for path in self.scan():
            yield path, read_content(self.config.root / path)

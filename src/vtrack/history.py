"""Per-file version history for vtrack."""

import logging
from enum import Enum
from typing import Dict, Iterator, List, Optional

from .errors import PathNotTrackedError
from .hasher import compute_digest

logger = logging.getLogger(__name__)


class ChangeKind(str, Enum):
    """Effect of recording a digest against a path."""

    CREATED = "created"
    APPENDED = "appended"
    UNCHANGED = "unchanged"


class VersionChain:
    """Append-only sequence of digests for one path, oldest first."""

    def __init__(self, first_digest: str):
        """Start a chain holding a single version."""
        self._digests: List[str] = [first_digest]

    @property
    def head(self) -> str:
        """Digest of the oldest recorded version."""
        return self._digests[0]

    @property
    def tail(self) -> str:
        """Digest of the latest recorded version."""
        return self._digests[-1]

    def append(self, digest: str) -> None:
        """Add a newer version after the current tail."""
        self._digests.append(digest)

    def __iter__(self) -> Iterator[str]:
        return iter(self._digests)

    def __len__(self) -> int:
        return len(self._digests)

    def __repr__(self) -> str:
        return f"VersionChain(length={len(self._digests)}, tail={self.tail!r})"


class FileHistoryIndex:
    """Maps each tracked path to its version chain."""

    def __init__(self):
        """Initialize an empty index."""
        self._chains: Dict[str, VersionChain] = {}

    def latest(self, path: str) -> Optional[str]:
        """Return the latest digest recorded for path, or None if untracked."""
        chain = self._chains.get(path)
        return chain.tail if chain else None

    def record_change(self, path: str, digest: str) -> ChangeKind:
        """Record digest as the newest version of path if it differs from the latest."""
        chain = self._chains.get(path)

        if chain is None:
            self._chains[path] = VersionChain(digest)
            logger.debug("Started chain", extra={"path": path, "digest": digest})
            return ChangeKind.CREATED

        if chain.tail == digest:
            logger.debug("Digest matches latest version", extra={"path": path})
            return ChangeKind.UNCHANGED

        chain.append(digest)
        logger.debug(
            "Appended version",
            extra={"path": path, "digest": digest, "versions": len(chain)},
        )
        return ChangeKind.APPENDED

    def start_chain(self, path: str, digest: str) -> None:
        """Replace any history of path with a single-version chain."""
        self._chains[path] = VersionChain(digest)

    def chain(self, path: str) -> VersionChain:
        """Return the chain for path."""
        try:
            return self._chains[path]
        except KeyError:
            raise PathNotTrackedError(path) from None

    def is_modified(self, path: str, content: bytes) -> bool:
        """Check whether content differs from the latest recorded version of path."""
        return compute_digest(content) != self.latest(path)

    def paths(self) -> List[str]:
        """Return all tracked paths in sorted order."""
        return sorted(self._chains)

    def __contains__(self, path: object) -> bool:
        return path in self._chains

    def __len__(self) -> int:
        return len(self._chains)

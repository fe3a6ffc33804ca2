"""Deduplicated digest to content storage."""

import logging
from typing import Dict, Iterator, List, Tuple

from .errors import ContentNotFoundError

logger = logging.getLogger(__name__)


class ContentStore:
    """Maps digests to the original bytes they were computed from.

    Entries are inserted once and never replaced or removed.
    """

    def __init__(self):
        """Initialize an empty store."""
        self._objects: Dict[str, bytes] = {}

    def put(self, digest: str, content: bytes) -> bool:
        """Store content under digest unless the digest is already present.

        Returns:
            True if a new entry was created.
        """
        if digest in self._objects:
            logger.debug("Content already stored", extra={"digest": digest})
            return False

        self._objects[digest] = content
        logger.debug(
            "Stored content",
            extra={"digest": digest, "size": len(content)},
        )
        return True

    def get(self, digest: str) -> bytes:
        """Return the content stored under digest."""
        try:
            return self._objects[digest]
        except KeyError:
            raise ContentNotFoundError(digest) from None

    def digests(self) -> List[str]:
        """Return all stored digests in sorted order."""
        return sorted(self._objects)

    def items(self) -> Iterator[Tuple[str, bytes]]:
        """Iterate over (digest, content) pairs sorted by digest."""
        for digest in self.digests():
            yield digest, self._objects[digest]

    def __contains__(self, digest: object) -> bool:
        return digest in self._objects

    def __len__(self) -> int:
        return len(self._objects)

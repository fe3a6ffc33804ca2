"""Disk persistence for the content store and file history.

Two independent JSON records are kept under the repository's storage
directory:

* the history record maps each tracked path to its latest digest only, so
  earlier versions of a path do not survive a reload;
* the content record maps every stored digest to its base64 content.

Each record is replaced atomically on its own, but the pair is not written
transactionally: a crash between the two writes can leave a history digest
without content (reported by ``load`` as a dangling digest) or content no
history entry refers to.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import codec
from .config import RepositoryConfig
from .errors import RecordCorruptError
from .hasher import is_digest
from .history import FileHistoryIndex
from .store import ContentStore

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """Outcome of reloading persisted records."""

    loaded: bool
    reason: Optional[str] = None
    paths: int = 0
    objects: int = 0
    dangling_digests: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary for reporting."""
        result: Dict[str, Any] = {
            "loaded": self.loaded,
            "paths": self.paths,
            "objects": self.objects,
        }
        if self.reason:
            result["reason"] = self.reason
        if self.dangling_digests:
            result["dangling_digests"] = self.dangling_digests
        return result


class RecordStorage:
    """Reads and writes the history and content records of one repository."""

    def __init__(self, config: RepositoryConfig):
        """Initialize with configuration."""
        self.config = config

    def exists(self) -> bool:
        """Check whether both records are present on disk."""
        return self.config.history_path.is_file() and self.config.content_path.is_file()

    def save(self, store: ContentStore, index: FileHistoryIndex) -> None:
        """Write both records, history first."""
        history = {path: index.latest(path) for path in index.paths()}
        content = {digest: codec.encode(data) for digest, data in store.items()}

        self.config.storage_path.mkdir(parents=True, exist_ok=True)
        self._write_record(self.config.history_path, history)
        self._write_record(self.config.content_path, content)

        logger.info(
            "Saved repository records",
            extra={"paths": len(history), "objects": len(content)},
        )

    def load(self, store: ContentStore, index: FileHistoryIndex) -> LoadResult:
        """Populate store and index from disk.

        Missing or unreadable records are not an error: the structures are
        left untouched and the result reports why nothing was loaded.
        """
        history_text = self._read_record_text(self.config.history_path)
        content_text = self._read_record_text(self.config.content_path)
        if history_text is None or content_text is None:
            reason = "No previous repository data found"
            logger.warning(reason, extra={"storage": str(self.config.storage_path)})
            return LoadResult(loaded=False, reason=reason)

        history = self._parse_record(self.config.history_path, history_text)
        content = self._parse_record(self.config.content_path, content_text)

        for digest, encoded in content.items():
            store.put(digest, codec.decode(encoded))

        dangling = []
        for path, digest in history.items():
            index.start_chain(path, digest)
            if digest not in store:
                dangling.append(digest)

        nonstandard = [digest for digest in history.values() if not is_digest(digest)]
        if nonstandard:
            logger.warning(
                "History contains digests that are not 64-character SHA-256 hex",
                extra={"count": len(nonstandard)},
            )

        if dangling:
            logger.warning(
                "History refers to digests missing from the content record",
                extra={"dangling": len(dangling)},
            )

        logger.info(
            "Loaded repository data from disk",
            extra={"paths": len(history), "objects": len(content)},
        )
        return LoadResult(
            loaded=True,
            paths=len(history),
            objects=len(content),
            dangling_digests=sorted(set(dangling)),
        )

    def _write_record(self, path: Path, data: Dict[str, str]) -> None:
        """Replace a record with pretty-printed JSON."""
        text = json.dumps(
            data,
            ensure_ascii=False,
            sort_keys=True,
            indent=self.config.indent,
        )
        tmp = path.with_name(path.name + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            f.write(text)
            f.write("\n")
        os.replace(tmp, path)
        logger.debug("Wrote record", extra={"record": str(path), "entries": len(data)})

    def _read_record_text(self, path: Path) -> Optional[str]:
        """Return the raw text of a record, or None if it cannot be opened."""
        try:
            with open(path, "rb") as f:
                raw = f.read()
        except OSError as exc:
            logger.debug("Record unavailable", extra={"record": str(path), "error": str(exc)})
            return None

        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise RecordCorruptError(str(path), "record is not valid UTF-8") from exc

    def _parse_record(self, path: Path, text: str) -> Dict[str, str]:
        """Parse a record as a JSON object mapping strings to strings."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise RecordCorruptError(str(path), f"invalid JSON: {exc.msg}") from exc

        if not isinstance(data, dict):
            raise RecordCorruptError(str(path), "record must be a JSON object")

        for key, value in data.items():
            if not isinstance(value, str):
                raise RecordCorruptError(
                    str(path), f"value for {key!r} must be a string"
                )
        return data

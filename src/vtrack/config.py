"""Configuration management for vtrack."""

from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any, Dict, Optional, Union

from . import settings

DEFAULT_STORAGE_DIR = "data/.vcs"


@dataclass(frozen=True)
class RepositoryConfig:
    """Location and format of a repository's persisted records."""

    # Required parameters
    root: Path

    # Record locations, relative to root
    storage_dir: str = DEFAULT_STORAGE_DIR
    history_filename: str = "file_history.json"
    content_filename: str = "hash_map.json"

    # Output options
    indent: int = 4

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        object.__setattr__(self, "root", Path(self.root))
        if not self.storage_dir:
            raise ValueError("storage_dir cannot be empty")
        if Path(self.storage_dir).is_absolute():
            raise ValueError("storage_dir must be relative to the repository root")
        if ".." in PurePosixPath(self.storage_dir).parts:
            raise ValueError("storage_dir cannot leave the repository root")
        if not [part for part in PurePosixPath(self.storage_dir).parts if part != "."]:
            raise ValueError("storage_dir cannot be the repository root itself")
        if not self.history_filename or not self.content_filename:
            raise ValueError("record filenames cannot be empty")
        if self.history_filename == self.content_filename:
            raise ValueError("history and content records must be different files")
        if self.indent < 0:
            raise ValueError("indent cannot be negative")

    @classmethod
    def from_settings(
        cls, root: Optional[Union[str, Path]] = None, **overrides: Any
    ) -> "RepositoryConfig":
        """Build a configuration from environment settings and explicit overrides."""
        storage_dir = settings.get_storage_dir()
        if storage_dir and "storage_dir" not in overrides:
            overrides["storage_dir"] = storage_dir
        return cls(root=Path(root or settings.get_repository_root()), **overrides)

    @property
    def storage_path(self) -> Path:
        """Absolute directory holding both records."""
        return self.root / self.storage_dir

    @property
    def history_path(self) -> Path:
        """Path of the history record (path -> latest digest)."""
        return self.storage_path / self.history_filename

    @property
    def content_path(self) -> Path:
        """Path of the content record (digest -> encoded content)."""
        return self.storage_path / self.content_filename

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to a dictionary for reporting."""
        return {
            "root": str(self.root),
            "storage_dir": self.storage_dir,
            "records": {
                "history": str(self.history_path),
                "content": str(self.content_path),
            },
        }

"""Pytest configuration and fixtures for vtrack tests."""

import shutil
import tempfile
from pathlib import Path
from typing import Generator, Union

import pytest

from vtrack import settings
from vtrack.config import RepositoryConfig
from vtrack.repository import RepositoryManager


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp(prefix="vtrack_test_"))
    try:
        yield temp_path
    finally:
        if temp_path.exists():
            shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch) -> Generator[None, None, None]:
    """Keep environment-derived settings from leaking between tests."""
    monkeypatch.delenv("VTRACK_ROOT", raising=False)
    monkeypatch.delenv("VTRACK_STORAGE_DIR", raising=False)
    settings.get_repository_root.cache_clear()
    settings.get_storage_dir.cache_clear()
    yield
    settings.get_repository_root.cache_clear()
    settings.get_storage_dir.cache_clear()


class RepoHelper:
    """Helper class for working-tree operations in tests."""

    def __init__(self, root: Path):
        self.root = root
        self.config = RepositoryConfig(root=root)

    def write(self, path: str, content: Union[str, bytes]) -> Path:
        """Create or overwrite a file with content."""
        file_path = self.root / path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            file_path.write_text(content)
        else:
            file_path.write_bytes(content)
        return file_path

    def delete(self, path: str) -> None:
        """Delete a file."""
        file_path = self.root / path
        if file_path.exists():
            file_path.unlink()

    def open_manager(self) -> RepositoryManager:
        """Create a manager and load whatever records exist."""
        return RepositoryManager.open(self.config)

    @property
    def history_path(self) -> Path:
        return self.config.history_path

    @property
    def content_path(self) -> Path:
        return self.config.content_path


@pytest.fixture
def repo(temp_dir: Path) -> RepoHelper:
    """Create a working-tree helper rooted in a temporary directory."""
    root = temp_dir / "work"
    root.mkdir()
    return RepoHelper(root)


@pytest.fixture
def manager(repo: RepoHelper) -> RepositoryManager:
    """Create a loaded manager for the temporary working tree."""
    return repo.open_manager()

"""Tests for repository module."""

import json

import pytest

from vtrack.config import RepositoryConfig
from vtrack.errors import (
    ContentNotFoundError,
    PathNotTrackedError,
    PathOutsideRepositoryError,
    RepositoryNotLoadedError,
)
from vtrack.hasher import compute_digest
from vtrack.repository import RecordStatus, RepositoryManager

HELLO = compute_digest(b"hello")


class TestInitialize:
    """Test RepositoryManager.initialize."""

    def test_identical_files_share_one_entry(self, repo, manager):
        """Test that duplicate content is stored once and referenced twice."""
        repo.write("a.txt", "hello")
        repo.write("b.txt", "hello")

        summary = manager.initialize()

        assert summary.tracked == 2
        assert summary.objects == 1
        assert manager.latest("a.txt") == HELLO
        assert manager.latest("b.txt") == HELLO
        assert len(manager.store) == 1

        history = json.loads(repo.history_path.read_text())
        content = json.loads(repo.content_path.read_text())
        assert history == {"a.txt": HELLO, "b.txt": HELLO}
        assert list(content) == [HELLO]

    def test_empty_and_unreadable_files_are_skipped(self, repo, manager):
        """Test that empty files are counted but not tracked."""
        repo.write("a.txt", "hello")
        repo.write("empty.txt", "")

        summary = manager.initialize()

        assert summary.tracked == 1
        assert summary.skipped == 1
        assert "empty.txt" not in manager.index

    def test_records_are_not_tracked(self, repo, manager):
        """Test that a second scan does not pick up the storage directory."""
        repo.write("a.txt", "hello")
        manager.initialize()

        manager.initialize()

        assert manager.index.paths() == ["a.txt"]

    def test_initialize_on_empty_tree(self, repo, manager):
        """Test that an empty tree still writes both records."""
        summary = manager.initialize()

        assert summary.to_dict() == {"tracked": 0, "skipped": 0, "objects": 0}
        assert json.loads(repo.history_path.read_text()) == {}
        assert json.loads(repo.content_path.read_text()) == {}


class TestRecordFile:
    """Test RepositoryManager.record_file."""

    def test_new_path_creates_one_version(self, repo, manager):
        """Test recording an untracked file."""
        repo.write("a.txt", "hello")

        outcome = manager.record_file("a.txt")

        assert outcome.status is RecordStatus.ADDED
        assert outcome.digest == HELLO
        assert outcome.versions == 1
        assert manager.history("a.txt") == [HELLO]
        assert len(manager.store) == 1
        assert json.loads(repo.history_path.read_text()) == {"a.txt": HELLO}

    def test_unchanged_content_is_noop(self, repo, manager):
        """Test that recording unchanged content writes nothing."""
        repo.write("a.txt", "hello")
        manager.record_file("a.txt")
        repo.history_path.unlink()
        repo.content_path.unlink()

        outcome = manager.record_file("a.txt")

        assert outcome.status is RecordStatus.UNCHANGED
        assert outcome.ok is True
        assert outcome.versions == 1
        assert not repo.history_path.exists()
        assert not repo.content_path.exists()

    def test_empty_file_is_rejected(self, repo, manager):
        """Test that an empty file creates no chain and no records."""
        repo.write("a.txt", "")

        outcome = manager.record_file("a.txt")

        assert outcome.status is RecordStatus.EMPTY
        assert outcome.ok is False
        assert outcome.digest is None
        assert "a.txt" not in manager.index
        assert len(manager.store) == 0
        assert not repo.history_path.exists()

    def test_missing_file_is_rejected(self, repo, manager):
        """Test that an unreadable file is treated like an empty one."""
        outcome = manager.record_file("missing.txt")

        assert outcome.status is RecordStatus.EMPTY
        assert "missing.txt" not in manager.index

    def test_new_content_after_initialize_appends(self, repo, manager):
        """Test that changed content extends the chain."""
        repo.write("a.txt", "hello")
        manager.initialize()
        repo.write("a.txt", "hello, world")

        outcome = manager.record_file("a.txt")

        new_digest = compute_digest(b"hello, world")
        assert outcome.status is RecordStatus.ADDED
        assert outcome.versions == 2
        assert manager.history("a.txt") == [HELLO, new_digest]
        assert manager.latest("a.txt") == new_digest
        assert manager.get_content(HELLO) == b"hello"

    def test_duplicate_content_elsewhere_is_not_stored_twice(self, repo, manager):
        """Test that a digest already in the store is reused."""
        repo.write("a.txt", "hello")
        repo.write("b.txt", "hello")
        manager.record_file("a.txt")

        outcome = manager.record_file("b.txt")

        assert outcome.status is RecordStatus.ADDED
        assert len(manager.store) == 1
        assert len(json.loads(repo.content_path.read_text())) == 1

    def test_binary_content(self, repo, manager):
        """Test recording content that is not valid text."""
        content = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\xff"
        repo.write("image.png", content)

        outcome = manager.record_file("image.png")

        assert manager.get_content(outcome.digest) == content

    def test_absolute_path_is_normalized(self, repo, manager):
        """Test that absolute paths inside the root are stored relatively."""
        path = repo.write("docs/a.txt", "hello")

        outcome = manager.record_file(path)

        assert outcome.path == "docs/a.txt"
        assert manager.latest("docs/a.txt") == HELLO

    def test_path_outside_root_is_rejected(self, repo, manager):
        """Test that files outside the repository cannot be recorded."""
        with pytest.raises(PathOutsideRepositoryError):
            manager.record_file("../outside.txt")

    def test_injected_reader(self, repo):
        """Test that file reads go through the configured reader."""
        reads = []

        def reader(path):
            reads.append(path)
            return b"from reader"

        manager = RepositoryManager.open(repo.config, reader=reader)
        outcome = manager.record_file("virtual.txt")

        assert reads == [repo.root / "virtual.txt"]
        assert outcome.digest == compute_digest(b"from reader")


class TestStatus:
    """Test RepositoryManager.status and is_modified."""

    def test_partitions_tracked_files(self, repo, manager):
        """Test modified and unmodified partitions."""
        repo.write("a.txt", "hello")
        repo.write("b.txt", "world")
        repo.write("c.txt", "unchanged")
        manager.initialize()
        repo.write("a.txt", "hello again")
        repo.delete("b.txt")

        report = manager.status()

        assert report.modified == ["a.txt", "b.txt"]
        assert report.unmodified == ["c.txt"]

    def test_untracked_files_are_not_listed(self, repo, manager):
        """Test that status only covers tracked paths."""
        repo.write("a.txt", "hello")
        manager.record_file("a.txt")
        repo.write("new.txt", "new")

        report = manager.status()

        assert report.to_dict() == {"modified": [], "unmodified": ["a.txt"]}

    def test_is_modified_follows_record_file(self, repo, manager):
        """Test is_modified right after recording and after an edit."""
        repo.write("a.txt", "hello")
        manager.record_file("a.txt")
        assert manager.is_modified("a.txt") is False

        repo.write("a.txt", "changed")
        assert manager.is_modified("a.txt") is True

        manager.record_file("a.txt")
        assert manager.is_modified("a.txt") is False

    def test_untracked_path_is_modified(self, repo, manager):
        """Test that content for a never-recorded path counts as modified."""
        repo.write("a.txt", "hello")
        assert manager.is_modified("a.txt") is True


class TestReload:
    """Test persistence through RepositoryManager."""

    def test_state_survives_restart(self, repo, manager):
        """Test that a new manager sees the saved latest digests and content."""
        repo.write("a.txt", "hello")
        repo.write("b.bin", bytes(range(256)))
        manager.initialize()
        repo.write("a.txt", "second")
        manager.record_file("a.txt")

        reloaded = repo.open_manager()

        second = compute_digest(b"second")
        assert reloaded.latest("a.txt") == second
        assert reloaded.history("a.txt") == [second]
        assert reloaded.get_content(second) == b"second"
        assert reloaded.get_content(HELLO) == b"hello"
        assert reloaded.get_content(compute_digest(bytes(range(256)))) == bytes(range(256))
        assert reloaded.status().unmodified == ["a.txt", "b.bin"]

    def test_load_replaces_in_memory_state(self, repo, manager):
        """Test that load discards unsaved structures."""
        repo.write("a.txt", "hello")
        manager.index.record_change("a.txt", HELLO)

        result = manager.load()

        assert result.loaded is False
        assert len(manager.index) == 0

    def test_custom_storage_dir(self, repo):
        """Test a repository whose records live elsewhere under the root."""
        config = RepositoryConfig(root=repo.root, storage_dir=".vtrack")
        repo.write("a.txt", "hello")

        RepositoryManager.open(config).initialize()

        assert (repo.root / ".vtrack" / "file_history.json").is_file()
        assert RepositoryManager.open(config).latest("a.txt") == HELLO


class TestLookups:
    """Test lookup helpers and guards."""

    def test_unknown_digest(self, manager):
        """Test that unknown digests raise rather than returning empty content."""
        with pytest.raises(ContentNotFoundError):
            manager.get_content(compute_digest(b"nothing"))

    def test_history_of_untracked_path(self, manager):
        """Test history lookup on an untracked path."""
        with pytest.raises(PathNotTrackedError):
            manager.history("missing.txt")

    def test_latest_of_untracked_path(self, manager):
        """Test latest lookup on an untracked path."""
        assert manager.latest("missing.txt") is None

    def test_operations_require_load(self, repo):
        """Test that a manager refuses work before its records are loaded."""
        manager = RepositoryManager(repo.config)

        with pytest.raises(RepositoryNotLoadedError) as exc_info:
            manager.record_file("a.txt")

        assert exc_info.value.code == "REPOSITORY_NOT_LOADED"

"""Error definitions and handling for vtrack."""

from typing import Any, Dict, Optional


class VTrackError(Exception):
    """Base exception for vtrack errors."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize error with code, message, and optional details."""
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for JSON serialization."""
        result = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class ContentNotFoundError(VTrackError):
    """No content is stored under the requested digest."""

    def __init__(self, digest: str):
        super().__init__(
            code="CONTENT_NOT_FOUND",
            message=f"No content stored for digest {digest}",
            details={"digest": digest},
        )


class EmptyContentError(VTrackError):
    """File content is empty or could not be read."""

    def __init__(self, path: str):
        super().__init__(
            code="EMPTY_CONTENT",
            message=f"No content in the file: {path}",
            details={"path": path},
        )


class PathNotTrackedError(VTrackError):
    """Path has no recorded history."""

    def __init__(self, path: str):
        super().__init__(
            code="PATH_NOT_TRACKED",
            message=f"Path is not tracked: {path}",
            details={"path": path},
        )


class PathOutsideRepositoryError(VTrackError):
    """Path does not resolve to a location inside the repository root."""

    def __init__(self, path: str, root: str):
        super().__init__(
            code="PATH_OUTSIDE_REPOSITORY",
            message=f"Path {path} is outside the repository root {root}",
            details={"path": path, "root": root},
        )


class InvalidEncodingError(VTrackError):
    """Encoded content contains characters outside the codec alphabet."""

    def __init__(self, position: int, character: str):
        super().__init__(
            code="INVALID_ENCODING",
            message=f"Invalid character {character!r} at position {position}",
            details={"position": position, "character": character},
        )


class RecordCorruptError(VTrackError):
    """A persisted record exists but cannot be parsed."""

    def __init__(self, record_path: str, reason: str):
        super().__init__(
            code="RECORD_CORRUPT",
            message=f"Corrupt record {record_path}: {reason}",
            details={"record_path": record_path, "reason": reason},
        )


class RepositoryNotLoadedError(VTrackError):
    """Repository state was used before being loaded."""

    def __init__(self, root: str):
        super().__init__(
            code="REPOSITORY_NOT_LOADED",
            message=f"Repository state for {root} has not been loaded",
            details={"root": root},
        )

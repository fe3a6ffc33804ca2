"""Pydantic models for vtrack API requests and responses."""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class RecordRequest(BaseModel):
    """Request model for recording a file version."""

    path: str = Field(
        ...,
        description="File path relative to the repository root",
        examples=["docs/notes.md"],
    )

    @field_validator("path")
    @classmethod
    def path_must_be_relative(cls, v):
        """Basic validation for repository paths."""
        v = v.strip()
        if not v:
            raise ValueError("path cannot be empty")
        if v.startswith("/") or (len(v) > 2 and v[1] == ":"):
            raise ValueError("path must be relative to the repository root")
        return v


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str = Field(..., examples=["healthy"])
    version: str = Field(..., examples=["1.0.0"])
    root: str = Field(..., examples=["/srv/project"])
    records_present: bool = Field(..., examples=[True])


class VersionResponse(BaseModel):
    """Response model for version endpoint."""

    version: str = Field(..., examples=["1.0.0"])
    api_version: str = Field(..., examples=["v1"])
    digest_algorithm: str = Field("sha256", examples=["sha256"])
    content_encoding: str = Field("base64", examples=["base64"])
    supported_features: List[str] = Field(
        default_factory=lambda: [
            "content_deduplication",
            "per_file_history",
            "binary_safe_records",
            "status",
        ]
    )
    storage_dir: Optional[str] = Field(None, examples=["data/.vcs"])

"""Data models for pull request discovery and summarization."""
from __future__ import annotations
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

UNKNOWN = "unknown"
UNKNOWN_TITLE = "Unknown title"
TITLE_NOT_AVAILABLE = "Title not available"


class RepositoryIdentity(BaseModel):
    """Owner and name of a GitHub repository."""

    model_config = ConfigDict(frozen=True)

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


class FileChange(BaseModel):
    """A single file touched by a pull request."""

    filename: str
    status: str
    additions: int = Field(default=0, ge=0)
    deletions: int = Field(default=0, ge=0)
    changes: int = Field(default=0, ge=0)


class PullRequest(BaseModel):
    """An open pull request as presented to the user.

    `created_at` is either an ISO-8601 timestamp as returned by GitHub or the
    literal "unknown" when the PR was only seen in the ref listing.
    """

    # serialized as filesChanged, totalFilesChanged, createdAt
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    number: str
    title: str
    author: str = UNKNOWN
    created_at: str = UNKNOWN
    files_changed: List[FileChange] = Field(default_factory=list)
    total_files_changed: Optional[int] = None

    @property
    def created_datetime(self) -> Optional[datetime]:
        """Creation time as an aware datetime, or None when unknown."""
        if not self.created_at or self.created_at == UNKNOWN:
            return None
        try:
            dt = datetime.fromisoformat(self.created_at.replace("Z", "+00:00"))
        except ValueError:
            return None
        return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)

    def with_files(self, files: List[FileChange]) -> "PullRequest":
        """Return a copy augmented with the changed-file list."""
        return self.model_copy(
            update={"files_changed": list(files), "total_files_changed": len(files)}
        )

    def to_prompt_json(self) -> str:
        return self.model_dump_json(by_alias=True)

"""Change records - per-file changes and repository-level totals."""

from dataclasses import dataclass, field
from enum import Enum


class FileStatus(str, Enum):
    """How a staged path changed relative to HEAD."""
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"


@dataclass
class FileChange:
    """Represents a single file's staged changes."""
    path: str
    status: FileStatus = FileStatus.MODIFIED
    insertions: int = 0
    deletions: int = 0
    changes: str = ""
    old_path: str | None = None

    @property
    def change_lines(self) -> list[str]:
        return self.changes.split('\n') if self.changes else []


@dataclass
class DiffSummary:
    """Complete picture of what's staged for commit."""
    files: list[FileChange] = field(default_factory=list)
    insertions: int = 0
    deletions: int = 0

    @property
    def total_changes(self) -> int:
        return self.insertions + self.deletions

    @property
    def total_files(self) -> int:
        return len(self.files)

    @property
    def is_empty(self) -> bool:
        return len(self.files) == 0


def aggregate_changes(files: list[FileChange]) -> DiffSummary:
    """Fold per-file records into totals. An empty list is a valid summary."""
    files = list(files)
    return DiffSummary(
        files=files,
        insertions=sum(f.insertions for f in files),
        deletions=sum(f.deletions for f in files),
    )

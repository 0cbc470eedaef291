"""Git Operations Package"""

from gitraven.git.analyzer import GitAnalyzer, GitError, NoStagedChangesError, RepoStatus
from gitraven.git.changes import DiffSummary, FileChange, FileStatus, aggregate_changes
from gitraven.git.diff_processor import DiffProcessor, ProcessorConfig

__all__ = [
    "GitAnalyzer",
    "GitError",
    "NoStagedChangesError",
    "RepoStatus",
    "DiffSummary",
    "FileChange",
    "FileStatus",
    "aggregate_changes",
    "DiffProcessor",
    "ProcessorConfig",
]

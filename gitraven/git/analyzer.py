"""Git Analyzer - Read staged changes from git and run commit/push."""

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from gitraven.git.changes import DiffSummary, aggregate_changes
from gitraven.git.diff_processor import DiffProcessor

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Raised when git operations fail."""
    pass


class NoStagedChangesError(GitError):
    """Nothing is staged. Recoverable: stage changes and try again."""

    def __init__(self, message: str = 'No staged changes found. Please stage your changes with "git add" first.'):
        super().__init__(message)


@dataclass
class RepoStatus:
    """Paths from ``git status --porcelain``, grouped the way the CLI needs them."""
    staged: list[str] = field(default_factory=list)
    created: list[str] = field(default_factory=list)
    modified: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    renamed: list[str] = field(default_factory=list)
    untracked: list[str] = field(default_factory=list)
    unstaged: list[str] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not (self.staged or self.unstaged)


def parse_porcelain_status(output: str) -> RepoStatus:
    status = RepoStatus()

    for line in output.split('\n'):
        if len(line) < 4:
            continue
        index, worktree, path = line[0], line[1], line[3:]
        if ' -> ' in path:
            path = path.split(' -> ', 1)[1]

        if index == '?' and worktree == '?':
            status.untracked.append(path)
            status.unstaged.append(path)
            continue

        if index not in (' ', '?'):
            status.staged.append(path)
        if worktree != ' ':
            status.unstaged.append(path)

        if index == 'A':
            status.created.append(path)
        if 'M' in (index, worktree):
            status.modified.append(path)
        if 'D' in (index, worktree):
            status.deleted.append(path)
        if index == 'R':
            status.renamed.append(path)

    return status


class GitAnalyzer:
    """Extracts staged changes from git and performs commit/push."""

    def __init__(self, working_dir: str | Path | None = None, processor: DiffProcessor | None = None):
        self.working_dir = Path(working_dir) if working_dir else Path.cwd()
        self.processor = processor or DiffProcessor()
        self._verify_git_available()

    def _run_git(self, *args: str) -> str:
        """Run a git command and return stdout.

        Paths are printed verbatim (no octal quoting of non-ASCII names) so
        they match HEAD lookups and diff headers.
        """
        logger.debug("Running: git %s", ' '.join(args))
        try:
            result = subprocess.run(
                ['git', '-c', 'core.quotePath=false', *args],
                cwd=self.working_dir,
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace'
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise GitError(f"Git command failed: git {' '.join(args)}\n{e.stderr.strip()}")
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_git_available(self) -> None:
        """Fail fast if git isn't available."""
        try:
            self._run_git('--version')
        except GitError:
            raise GitError("Git is not installed or not in PATH")

    def is_git_repository(self) -> bool:
        try:
            self._run_git('rev-parse', '--git-dir')
            return True
        except GitError:
            return False

    def current_status(self) -> RepoStatus:
        return parse_porcelain_status(self._run_git('status', '--porcelain'))

    def staged_numstat_diff(self) -> str:
        return self._run_git('diff', '--cached', '--numstat')

    def staged_detailed_diff(self) -> str:
        return self._run_git('diff', '--cached')

    def file_exists_at_head(self, path: str) -> bool:
        try:
            self._run_git('cat-file', '-e', f'HEAD:{path}')
            return True
        except GitError:
            return False

    def get_staged_changes(self) -> DiffSummary:
        """Normalize and aggregate staged changes.

        Raises NoStagedChangesError when nothing is staged, GitError when git
        itself fails or only binary files are staged.
        """
        try:
            status = self.current_status()
            if not status.staged:
                raise NoStagedChangesError()

            numstat = self.staged_numstat_diff()
            detailed = self.staged_detailed_diff()
        except NoStagedChangesError:
            raise
        except GitError as e:
            raise GitError(f"Failed to analyze git changes: {e}") from e

        files = self.processor.process(numstat, detailed, self.file_exists_at_head)
        if not files and numstat.strip():
            raise GitError("Only binary files are staged. There are no text changes to describe.")
        summary = aggregate_changes(files)
        logger.debug("Staged: %d files, +%d -%d", summary.total_files, summary.insertions, summary.deletions)
        return summary

    def has_unstaged_changes(self) -> bool:
        try:
            return bool(self.current_status().unstaged)
        except GitError:
            return False

    def get_last_commit_message(self) -> str:
        try:
            return self._run_git('log', '-1', '--pretty=%B').strip()
        except GitError:
            return ''

    def stage_all(self) -> None:
        try:
            self._run_git('add', '--all')
        except GitError as e:
            raise GitError(f"Failed to stage changes: {e}") from e

    def commit(self, message: str) -> None:
        try:
            self._run_git('commit', '-m', message)
        except GitError as e:
            raise GitError(f"Failed to commit changes: {e}") from e

    def push(self) -> None:
        try:
            self._run_git('push')
        except GitError as e:
            raise GitError(f"Failed to push changes: {e}") from e

    def current_branch_name(self) -> str:
        return self._run_git('rev-parse', '--abbrev-ref', 'HEAD').strip()

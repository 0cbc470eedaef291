"""Diff Processor - Turn raw git numstat/patch output into FileChange records."""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from gitraven.git.changes import FileChange, FileStatus

logger = logging.getLogger(__name__)

DIFF_HEADER = "diff --git "
REMOVED_MARKER = "[REMOVED]"
BINARY_SENTINEL = "-"


@dataclass
class ProcessorConfig:
    """Tunable settings for diff processing."""
    max_change_lines: int = 20


@dataclass
class DiffSegment:
    """One file's block inside the full patch text, as [start, end) offsets."""
    start: int
    end: int
    old_path: str


def split_rename_path(path: str) -> tuple[str | None, str]:
    """Resolve numstat rename notation into (old_path, new_path).

    git prints renames either as ``old => new`` or with a shared prefix and
    suffix, e.g. ``src/{old.py => new.py}``. Plain paths return ``(None, path)``.
    """
    if ' => ' not in path:
        return None, path

    if '{' in path and '}' in path:
        prefix, rest = path.split('{', 1)
        inner, suffix = rest.split('}', 1)
        old_inner, new_inner = inner.split(' => ', 1)
        old = (prefix + old_inner + suffix).replace('//', '/').lstrip('/')
        new = (prefix + new_inner + suffix).replace('//', '/').lstrip('/')
        return old, new

    old, new = path.split(' => ', 1)
    return old, new


class DiffProcessor:
    """Normalizes staged diff output into per-file change records."""

    def __init__(self, config: ProcessorConfig | None = None):
        self.config = config or ProcessorConfig()

    def process(
        self,
        numstat: str,
        detailed_diff: str,
        exists_at_head: Callable[[str], bool],
    ) -> list[FileChange]:
        """Main entry point: numstat + patch text -> FileChange list in git's order."""
        files = []

        for line in numstat.strip().split('\n'):
            if not line.strip():
                continue

            parts = line.split('\t')
            if len(parts) < 3 or not parts[2]:
                continue

            raw_insertions, raw_deletions, raw_path = parts[0], parts[1], '\t'.join(parts[2:])
            if raw_insertions == BINARY_SENTINEL and raw_deletions == BINARY_SENTINEL:
                logger.debug("Skipping binary file: %s", raw_path)
                continue

            numstat_old_path, path = split_rename_path(raw_path)
            segment = self.find_segment(detailed_diff, path)

            status, old_path = self._classify(path, detailed_diff, segment, exists_at_head)
            if status is FileStatus.MODIFIED and numstat_old_path and numstat_old_path != path:
                status, old_path = FileStatus.RENAMED, numstat_old_path

            files.append(FileChange(
                path=path,
                status=status,
                insertions=self._parse_count(raw_insertions),
                deletions=self._parse_count(raw_deletions),
                changes=self.extract_changes(detailed_diff, segment),
                old_path=old_path,
            ))

        return files

    def _parse_count(self, value: str) -> int:
        try:
            return max(int(value), 0)
        except ValueError:
            return 0

    def _classify(
        self,
        path: str,
        detailed_diff: str,
        segment: DiffSegment | None,
        exists_at_head: Callable[[str], bool],
    ) -> tuple[FileStatus, str | None]:
        if segment and segment.old_path != path:
            return FileStatus.RENAMED, segment.old_path

        if not exists_at_head(path):
            return FileStatus.ADDED, None

        if segment:
            block = detailed_diff[segment.start:segment.end]
            if re.search(r'^deleted file mode ', block, re.MULTILINE):
                return FileStatus.DELETED, None

        return FileStatus.MODIFIED, None

    def find_segment(self, detailed_diff: str, path: str) -> DiffSegment | None:
        """Locate the patch block whose new side is ``path``.

        The block runs from its ``diff --git`` header up to the next header or
        the end of the text, so scans never leak into another file.
        """
        if not detailed_diff:
            return None

        pattern = re.compile(rf'^diff --git a/(.+) b/{re.escape(path)}$', re.MULTILINE)
        match = pattern.search(detailed_diff)
        if not match:
            return None

        next_header = detailed_diff.find('\n' + DIFF_HEADER, match.end())
        end = len(detailed_diff) if next_header == -1 else next_header + 1
        return DiffSegment(start=match.start(), end=end, old_path=match.group(1))

    def extract_changes(self, detailed_diff: str, segment: DiffSegment | None) -> str:
        """Collect added/removed lines from one segment, capped at max_change_lines."""
        if segment is None:
            return ""

        changes = []
        for line in detailed_diff[segment.start:segment.end].split('\n'):
            if len(changes) >= self.config.max_change_lines:
                break
            if line.startswith('+') and not line.startswith('+++'):
                changes.append(line[1:].strip())
            elif line.startswith('-') and not line.startswith('---'):
                changes.append(f"{REMOVED_MARKER} {line[1:].strip()}")

        return '\n'.join(changes)

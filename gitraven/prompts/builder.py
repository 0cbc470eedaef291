"""Prompt Builder - Construct LLM prompts for change analysis and commit generation."""

from dataclasses import dataclass

from gitraven import COMMIT_TYPES, COMMIT_TYPE_NAMES, MAX_DESCRIPTION_LENGTH
from gitraven.commit.models import AnalysisResult
from gitraven.git.changes import DiffSummary, FileChange, FileStatus

# Preview caps keep prompt size (and model cost) bounded
PREVIEW_FILES = 3
ANALYSIS_PREVIEW_LINES = 5
COMMIT_PREVIEW_LINES = 10

ANALYSIS_SYSTEM_PROMPT = (
    "You are an expert software engineer who analyzes git changes and provides structured analysis."
)


def commit_system_prompt(max_length: int = MAX_DESCRIPTION_LENGTH) -> str:
    return f"""You are an expert at writing conventional commit messages. You must follow these rules strictly:

1. Use conventional commit format: type(scope): description
2. Keep description under {max_length} characters
3. Use present tense, imperative mood ("add" not "added" or "adds")
4. Don't capitalize first letter of description
5. No period at the end of description
6. Available types: {', '.join(COMMIT_TYPE_NAMES)}
7. Scope should be concise (e.g., auth, api, ui, docs)
8. Body should explain what and why, not how
9. Use BREAKING CHANGE: prefix for breaking changes

Examples:
- feat(auth): implement JWT token validation
- fix(api): resolve null pointer exception in user service
- docs(readme): update installation instructions
- style(components): fix indentation in Button component"""


@dataclass
class PromptOverrides:
    """User-provided hints that shape the generation prompt."""
    hint: str | None = None
    forced_type: str | None = None
    forced_scope: str | None = None


class PromptBuilder:
    """Renders DiffSummary data into the analysis and generation prompts."""

    def __init__(self, max_description_length: int = MAX_DESCRIPTION_LENGTH):
        self.max_description_length = max_description_length

    def build_analysis_prompt(self, diff: DiffSummary) -> str:
        return f"""Analyze these git changes and respond with ONLY a JSON object:

Files changed:
{self._file_listing(diff, show_rename_source=True)}

Changes preview:
{self._content_preview(diff, ANALYSIS_PREVIEW_LINES)}

Respond with JSON only:
{{
  "summary": "Brief description of what changed",
  "suggestedType": "one of: {', '.join(COMMIT_TYPES)}",
  "suggestedScope": "optional scope like auth, api, ui",
  "breakingChange": true/false,
  "confidence": 0.0-1.0
}}"""

    def build_commit_prompt(
        self,
        diff: DiffSummary,
        analysis: AnalysisResult,
        overrides: PromptOverrides | None = None,
    ) -> str:
        overrides = overrides or PromptOverrides()
        sections = [
            self._build_analysis_section(analysis),
            f"Files changed ({diff.total_files}):\n{self._file_listing(diff)}",
            f"Key changes:\n{self._content_preview(diff, COMMIT_PREVIEW_LINES)}",
            *self._build_override_lines(overrides),
            self._build_commit_format_section(),
        ]
        return "\n\n".join(sections)

    def _build_analysis_section(self, analysis: AnalysisResult) -> str:
        lines = [
            "Generate a conventional commit message for these changes:",
            "",
            f"Analysis: {analysis.summary}",
            f"Suggested type: {analysis.suggested_type}",
        ]
        if analysis.suggested_scope:
            lines.append(f"Suggested scope: {analysis.suggested_scope}")
        lines.append(f"Breaking change: {str(analysis.breaking_change).lower()}")
        return "\n".join(lines)

    def _build_override_lines(self, overrides: PromptOverrides) -> list[str]:
        lines = []
        if overrides.hint:
            lines.append(f"Additional context: {overrides.hint}")
        if overrides.forced_type:
            lines.append(f"Required type: {overrides.forced_type}")
        if overrides.forced_scope:
            lines.append(f"Required scope: {overrides.forced_scope}")
        return lines

    def _build_commit_format_section(self) -> str:
        return f"""Generate commit message in this JSON format:
{{
  "type": "commit type",
  "scope": "optional scope",
  "description": "description under {self.max_description_length} chars",
  "body": "optional detailed explanation",
  "breakingChange": true/false,
  "footer": "optional footer for issues/breaking changes"
}}"""

    def _file_listing(self, diff: DiffSummary, show_rename_source: bool = False) -> str:
        return "\n".join(self._file_line(f, show_rename_source) for f in diff.files)

    def _file_line(self, file: FileChange, show_rename_source: bool) -> str:
        status = file.status.value
        if show_rename_source and file.status is FileStatus.RENAMED:
            status = f"renamed from {file.old_path}"
        return f"- {file.path} ({status}, +{file.insertions}/-{file.deletions})"

    def _content_preview(self, diff: DiffSummary, max_lines: int) -> str:
        return "\n\n".join(
            f"{file.path}:\n" + "\n".join(file.change_lines[:max_lines])
            for file in diff.files[:PREVIEW_FILES]
        )

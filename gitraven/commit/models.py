"""Structured analysis and commit message records."""

from dataclasses import dataclass


@dataclass
class AnalysisResult:
    """Model's structured read of a DiffSummary."""
    summary: str
    suggested_type: str = "chore"
    suggested_scope: str | None = None
    breaking_change: bool = False
    confidence: float = 0.5


@dataclass
class CommitMessage:
    """A conventional commit, ready to be formatted."""
    type: str
    description: str
    scope: str | None = None
    body: str | None = None
    footer: str | None = None
    breaking_change: bool = False

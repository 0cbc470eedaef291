"""Commit Message Package"""

from gitraven.commit.formatter import format_commit_message, format_header
from gitraven.commit.models import AnalysisResult, CommitMessage
from gitraven.commit.parser import (
    parse_analysis_response,
    parse_commit_response,
    truncate_description,
)

__all__ = [
    "AnalysisResult",
    "CommitMessage",
    "format_commit_message",
    "format_header",
    "parse_analysis_response",
    "parse_commit_response",
    "truncate_description",
]

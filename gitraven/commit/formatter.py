"""Render CommitMessage records as conventional commit text."""

from gitraven import BREAKING_CHANGE_MARKER
from gitraven.commit.models import CommitMessage


def format_header(commit: CommitMessage) -> str:
    """The one-line ``type(scope)!: description`` summary."""
    header = commit.type
    if commit.scope:
        header += f"({commit.scope})"
    if commit.breaking_change:
        header += "!"
    return f"{header}: {commit.description}"


def format_commit_message(commit: CommitMessage) -> str:
    message = format_header(commit)

    if commit.body:
        message += f"\n\n{commit.body}"

    if commit.footer:
        message += f"\n\n{commit.footer}"

    if commit.breaking_change and BREAKING_CHANGE_MARKER not in (commit.footer or ""):
        message += f"\n\n{BREAKING_CHANGE_MARKER} {commit.description}"

    return message

"""Response Parser - Turn untrusted model output into complete records.

Model responses are expected to be JSON objects but are never trusted: every
field is optional, and anything that fails to parse falls back to values
derived from what we already know. Parsing never raises.
"""

import json
import logging
import re

from gitraven import COMMIT_TYPE_NAMES, MAX_DESCRIPTION_LENGTH
from gitraven.commit.models import AnalysisResult, CommitMessage

logger = logging.getLogger(__name__)

DEFAULT_SUMMARY = "Code changes detected"
DEFAULT_TYPE = "chore"
DEFAULT_BODY = "Update code to reflect the staged changes."

# Two-tier confidence floor: an object that parsed but omitted confidence is
# less uncertain than a response that could not be parsed at all.
CONFIDENCE_MISSING = 0.5
CONFIDENCE_PARSE_FAILURE = 0.3

ELLIPSIS = "..."
WORD_BOUNDARY_MIN_RATIO = 0.7

_FENCE_RE = re.compile(r'^```[a-zA-Z]*\s*\n?(.*?)\n?```$', re.DOTALL)


def load_json_object(content: str | None) -> dict | None:
    """Parse content as a JSON object. Returns None for anything else."""
    if not content:
        return None

    text = content.strip()
    fenced = _FENCE_RE.match(text)
    if fenced:
        text = fenced.group(1).strip()

    try:
        parsed = json.loads(text)
    except (json.JSONDecodeError, ValueError) as e:
        logger.debug("Model response is not valid JSON: %s", e)
        return None

    if not isinstance(parsed, dict):
        logger.debug("Model response is JSON but not an object: %s", type(parsed).__name__)
        return None
    return parsed


def _text(value) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _commit_type(value) -> str | None:
    text = _text(value)
    if text and text.lower() in COMMIT_TYPE_NAMES:
        return text.lower()
    return None


def _flag(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ('true', 'yes', '1')
    return bool(value)


def _confidence(value) -> float:
    if isinstance(value, bool) or not value:
        return CONFIDENCE_MISSING
    try:
        number = float(value)
    except (TypeError, ValueError):
        return CONFIDENCE_MISSING
    if number != number:  # NaN
        return CONFIDENCE_MISSING
    return min(max(number, 0.0), 1.0)


def truncate_description(description: str, limit: int = MAX_DESCRIPTION_LENGTH) -> str:
    """Shorten description to at most ``limit`` characters, ending in an ellipsis.

    Cuts at the last space that leaves room for the ellipsis, unless that
    space falls before 70% of the limit; then hard-cuts instead. A limit too
    small to hold the ellipsis gets a plain slice.
    """
    if len(description) <= limit:
        return description
    if limit <= len(ELLIPSIS):
        return description[:max(limit, 0)]

    hard_cut = limit - len(ELLIPSIS)
    boundary = description.rfind(' ', 0, hard_cut + 1)
    if boundary >= limit * WORD_BOUNDARY_MIN_RATIO:
        return description[:boundary].rstrip() + ELLIPSIS
    return description[:hard_cut] + ELLIPSIS


def normalize_description(description: str) -> str:
    """Single line, no trailing period, lower-case first letter (acronyms kept)."""
    lines = description.strip().split('\n')
    text = lines[0].strip().rstrip('.').rstrip()
    if not text:
        return ""

    first_word = text.split()[0]
    # Leading acronyms (JWT, API) keep their case
    if len(first_word) > 1 and first_word.isupper():
        return text
    return text[0].lower() + text[1:]


def parse_analysis_response(content: str | None) -> AnalysisResult:
    parsed = load_json_object(content)
    if parsed is None:
        return AnalysisResult(
            summary=DEFAULT_SUMMARY,
            suggested_type=DEFAULT_TYPE,
            suggested_scope=None,
            breaking_change=False,
            confidence=CONFIDENCE_PARSE_FAILURE,
        )

    return AnalysisResult(
        summary=_text(parsed.get('summary')) or DEFAULT_SUMMARY,
        suggested_type=_commit_type(parsed.get('suggestedType')) or DEFAULT_TYPE,
        suggested_scope=_text(parsed.get('suggestedScope')),
        breaking_change=_flag(parsed.get('breakingChange')),
        confidence=_confidence(parsed.get('confidence')),
    )


def _resolve_description(candidate, analysis: AnalysisResult, limit: int) -> str:
    for text in (_text(candidate), analysis.summary, DEFAULT_SUMMARY):
        description = normalize_description(text) if text else ""
        if description:
            return truncate_description(description, limit)
    return DEFAULT_SUMMARY.lower()


def parse_commit_response(
    content: str | None,
    analysis: AnalysisResult,
    max_length: int = MAX_DESCRIPTION_LENGTH,
) -> CommitMessage:
    """Parse the generation response, filling gaps from the prior analysis."""
    parsed = load_json_object(content)
    if parsed is None:
        logger.debug("Falling back to analysis for commit message")
        return CommitMessage(
            type=analysis.suggested_type,
            scope=analysis.suggested_scope,
            description=_resolve_description(None, analysis, max_length),
            breaking_change=analysis.breaking_change,
        )

    return CommitMessage(
        type=_commit_type(parsed.get('type')) or analysis.suggested_type,
        scope=_text(parsed.get('scope')) or analysis.suggested_scope,
        description=_resolve_description(parsed.get('description'), analysis, max_length),
        body=_text(parsed.get('body')) or DEFAULT_BODY,
        footer=_text(parsed.get('footer')),
        breaking_change=_flag(parsed.get('breakingChange')) or analysis.breaking_change,
    )

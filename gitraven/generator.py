"""Commit Generator - Two model calls from a DiffSummary to a CommitMessage.

The first call analyzes the changes, the second writes the message using
that analysis. Each call is made once: failures propagate immediately,
wrapped with the phase that failed.
"""

import logging
import time

from gitraven.commit import (
    AnalysisResult,
    CommitMessage,
    format_commit_message,
    parse_analysis_response,
    parse_commit_response,
)
from gitraven.config import Config
from gitraven.git.changes import DiffSummary
from gitraven.llm import LLMClient, LLMError
from gitraven.prompts import (
    ANALYSIS_SYSTEM_PROMPT,
    PromptBuilder,
    PromptOverrides,
    commit_system_prompt,
)

logger = logging.getLogger(__name__)

ANALYSIS_ERROR_PREFIX = "AI analysis failed: "
GENERATION_ERROR_PREFIX = "Commit generation failed: "


class CommitGenerator:
    """Drives analysis and generation for one set of staged changes."""

    def __init__(self, config: Config, client: LLMClient):
        self.config = config
        self.client = client
        self.prompts = PromptBuilder(max_description_length=config.max_description_length)

    def analyze_changes(self, diff: DiffSummary) -> AnalysisResult:
        prompt = self.prompts.build_analysis_prompt(diff)
        logger.debug("Analysis prompt: ~%d tokens (%d chars)", len(prompt) // 4, len(prompt))

        start = time.time()
        try:
            response = self.client.complete(
                ANALYSIS_SYSTEM_PROMPT,
                prompt,
                model=self.config.model,
                max_tokens=self.config.analysis_max_tokens,
                temperature=self.config.analysis_temperature,
            )
        except LLMError as e:
            raise LLMError(f"{ANALYSIS_ERROR_PREFIX}{e}") from e
        logger.debug("Analysis took %.2fs (%d tokens)", time.time() - start, response.tokens_used)

        return parse_analysis_response(response.content)

    def generate_commit_message(
        self,
        diff: DiffSummary,
        overrides: PromptOverrides | None = None,
        model: str | None = None,
    ) -> CommitMessage:
        analysis = self.analyze_changes(diff)
        prompt = self.prompts.build_commit_prompt(diff, analysis, overrides)
        logger.debug("Commit prompt: ~%d tokens (%d chars)", len(prompt) // 4, len(prompt))

        start = time.time()
        try:
            response = self.client.complete(
                commit_system_prompt(self.config.max_description_length),
                prompt,
                model=model or self.config.model,
                max_tokens=self.config.max_tokens,
                temperature=self.config.temperature,
            )
        except LLMError as e:
            raise LLMError(f"{GENERATION_ERROR_PREFIX}{e}") from e
        logger.debug("Generation took %.2fs (%d tokens)", time.time() - start, response.tokens_used)

        commit = parse_commit_response(response.content, analysis, self.config.max_description_length)
        return self._apply_overrides(commit, overrides)

    def _apply_overrides(self, commit: CommitMessage, overrides: PromptOverrides | None) -> CommitMessage:
        # Forced values win even when the model ignores the instruction
        if overrides and overrides.forced_type:
            commit.type = overrides.forced_type
        if overrides and overrides.forced_scope:
            commit.scope = overrides.forced_scope
        return commit

    def format(self, commit: CommitMessage) -> str:
        return format_commit_message(commit)

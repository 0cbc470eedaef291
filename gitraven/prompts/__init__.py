"""Prompt Construction Package"""

from gitraven.prompts.builder import (
    ANALYSIS_SYSTEM_PROMPT,
    PromptBuilder,
    PromptOverrides,
    commit_system_prompt,
)

__all__ = [
    "ANALYSIS_SYSTEM_PROMPT",
    "PromptBuilder",
    "PromptOverrides",
    "commit_system_prompt",
]

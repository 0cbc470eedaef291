"""LLM Base Classes and Shared Code"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

DEFAULT_MAX_TOKENS = 500
DEFAULT_TEMPERATURE = 0.3


@dataclass
class LLMResponse:
    """Structured response from any LLM provider."""
    content: str
    model: str = ""
    tokens_used: int = 0


class LLMError(Exception):
    """Raised when LLM operations fail."""
    pass


class LLMClient(ABC):
    """Abstract base for LLM clients.

    A client makes exactly one request per call to ``complete``; retry and
    timeout policy belong to the caller.
    """

    DEFAULT_MODEL = ""

    @abstractmethod
    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        model: str | None = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> LLMResponse:
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass

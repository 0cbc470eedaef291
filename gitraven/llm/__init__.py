"""LLM Client Package"""

from gitraven.config import Config
from gitraven.llm.base import LLMClient, LLMResponse, LLMError
from gitraven.llm.claude import ClaudeClient
from gitraven.llm.ollama import OllamaClient


def _make_claude(config: Config) -> LLMClient:
    return ClaudeClient(api_key=config.api_key, model=config.model)


def _make_ollama(config: Config) -> LLMClient:
    return OllamaClient(model=config.model, host=config.ollama_host, timeout=config.timeout)


PROVIDERS = {
    "claude": _make_claude,
    "ollama": _make_ollama,
}

AUTO_DETECT_ORDER = ["ollama", "claude"]


def get_client(config: Config) -> LLMClient:
    """Get an LLM client. Provider can be 'claude', 'ollama', or 'auto'."""
    if config.provider in PROVIDERS:
        return PROVIDERS[config.provider](config)

    if config.provider == "auto":
        for provider in AUTO_DETECT_ORDER:
            try:
                return PROVIDERS[provider](config)
            except LLMError:
                continue

        raise LLMError(
            "No LLM provider available.\n\n"
            "Option 1 - Use Ollama (free, local):\n"
            "  1. Install: https://ollama.ai\n"
            "  2. Start: ollama serve\n"
            "  3. Pull: ollama pull mistral:7b\n\n"
            "Option 2 - Use Claude API:\n"
            "  export ANTHROPIC_API_KEY='your-key-here'"
        )

    raise LLMError(f"Unknown provider: {config.provider}. Use 'claude', 'ollama', or 'auto'.")


__all__ = [
    "LLMClient",
    "LLMResponse",
    "LLMError",
    "ClaudeClient",
    "OllamaClient",
    "get_client",
    "PROVIDERS",
]

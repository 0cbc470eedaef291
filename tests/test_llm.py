"""
Unit tests for LLM clients and provider selection. No network access.

Run with:
    pytest tests/test_llm.py -v
"""

from types import SimpleNamespace

import pytest

from gitraven.config import Config
from gitraven.llm import PROVIDERS, ClaudeClient, LLMError, OllamaClient, get_client


class FakeMessages:

    def __init__(self, blocks, usage=(20, 5)):
        self.blocks = blocks
        self.usage = usage
        self.kwargs = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        return SimpleNamespace(
            content=self.blocks,
            usage=SimpleNamespace(input_tokens=self.usage[0], output_tokens=self.usage[1]),
        )


class TestClaudeClient:

    def test_requires_api_key(self):
        with pytest.raises(LLMError, match="ANTHROPIC_API_KEY"):
            ClaudeClient(api_key=None)

    def test_complete_passes_prompts_and_limits(self):
        client = ClaudeClient(api_key="sk-test", model="claude-test")
        messages = FakeMessages([SimpleNamespace(type="text", text='  {"summary": "x"}  ')])
        client._client = SimpleNamespace(messages=messages)

        response = client.complete("system text", "user text", max_tokens=300, temperature=0.1)

        assert response.content == '{"summary": "x"}'
        assert response.model == "claude-test"
        assert response.tokens_used == 25
        assert messages.kwargs["system"] == "system text"
        assert messages.kwargs["messages"] == [{"role": "user", "content": "user text"}]
        assert messages.kwargs["max_tokens"] == 300
        assert messages.kwargs["temperature"] == 0.1

    def test_empty_completion_is_an_error(self):
        client = ClaudeClient(api_key="sk-test")
        client._client = SimpleNamespace(messages=FakeMessages([]))

        with pytest.raises(LLMError, match="No response from AI service"):
            client.complete("system", "user")


class TestOllamaClient:

    @pytest.fixture
    def client(self, monkeypatch):
        monkeypatch.setattr(OllamaClient, "_verify_connection", lambda self: None)
        return OllamaClient(model="mistral:7b", host="http://localhost:11434/")

    def test_payload(self, client):
        sent = {}

        def fake_call(payload):
            sent.update(payload)
            return {"response": '{"type": "fix"}', "eval_count": 12}

        client._call_api = fake_call
        response = client.complete("system text", "user text", model="llama3.2:3b", max_tokens=300, temperature=0.1)

        assert response.content == '{"type": "fix"}'
        assert response.tokens_used == 12
        assert sent["model"] == "llama3.2:3b"
        assert sent["system"] == "system text"
        assert sent["format"] == "json"
        assert sent["options"] == {"temperature": 0.1, "num_predict": 300}
        assert client.host == "http://localhost:11434"

    def test_empty_completion_is_an_error(self, client):
        client._call_api = lambda payload: {"response": "   "}

        with pytest.raises(LLMError, match="No response from AI service"):
            client.complete("system", "user")


class TestGetClient:

    def test_unknown_provider(self):
        with pytest.raises(LLMError, match="Unknown provider"):
            get_client(Config(provider="gpt"))

    def test_explicit_provider(self, monkeypatch):
        sentinel = object()
        monkeypatch.setitem(PROVIDERS, "claude", lambda config: sentinel)
        assert get_client(Config(provider="claude")) is sentinel

    def test_auto_falls_through_to_next_provider(self, monkeypatch):
        sentinel = object()

        def unavailable(config):
            raise LLMError("Ollama not running")

        monkeypatch.setitem(PROVIDERS, "ollama", unavailable)
        monkeypatch.setitem(PROVIDERS, "claude", lambda config: sentinel)
        assert get_client(Config(provider="auto")) is sentinel

    def test_auto_with_nothing_available(self, monkeypatch):
        def unavailable(config):
            raise LLMError("unavailable")

        monkeypatch.setitem(PROVIDERS, "ollama", unavailable)
        monkeypatch.setitem(PROVIDERS, "claude", unavailable)
        with pytest.raises(LLMError, match="No LLM provider available"):
            get_client(Config(provider="auto"))

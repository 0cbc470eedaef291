"""Ollama LLM Client for Local Models"""

import http.client
import json
import logging
import socket
import urllib.error
import urllib.request

from gitraven.llm.base import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    LLMClient,
    LLMError,
    LLMResponse,
)

logger = logging.getLogger(__name__)


class OllamaClient(LLMClient):
    """Ollama client for local models. Requires: ollama serve"""

    DEFAULT_MODEL = "mistral:7b"
    DEFAULT_HOST = "http://localhost:11434"
    DEFAULT_TIMEOUT = 300  # 5 minutes for CPU inference

    def __init__(self, model: str | None = None, host: str | None = None, timeout: int | None = None):
        self.model = model or self.DEFAULT_MODEL
        self.host = (host or self.DEFAULT_HOST).rstrip('/')
        self.timeout = timeout or self.DEFAULT_TIMEOUT
        self._verify_connection()

    @property
    def name(self) -> str:
        return f"Ollama ({self.model})"

    def _verify_connection(self) -> None:
        """Check if Ollama is running and accessible."""
        try:
            req = urllib.request.Request(f"{self.host}/api/tags")
            with urllib.request.urlopen(req, timeout=5):
                pass
        except urllib.error.URLError:
            raise LLMError("Ollama not running. Start with: ollama serve")

    def _call_api(self, payload: dict) -> dict:
        """Make a single API call to Ollama."""
        data = json.dumps(payload).encode('utf-8')
        req = urllib.request.Request(
            f"{self.host}/api/generate", data=data, headers={"Content-Type": "application/json"}
        )
        with urllib.request.urlopen(req, timeout=self.timeout) as response:
            return json.loads(response.read().decode('utf-8'))

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        model: str | None = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> LLMResponse:
        model = model or self.model
        payload = {
            "model": model,
            "prompt": user_prompt,
            "system": system_prompt,
            "stream": False,
            "format": "json",
            "keep_alive": "10m",
            "options": {
                "temperature": temperature,
                "num_predict": max_tokens,
            }
        }
        logger.debug("Ollama request: model=%s max_tokens=%d prompt=%d chars", model, max_tokens, len(user_prompt))

        try:
            result = self._call_api(payload)
        except urllib.error.HTTPError as e:
            if e.code == 404:
                raise LLMError(f"Model '{model}' not found. Run: ollama pull {model}")
            raise LLMError(f"Ollama error ({e.code}): {e.reason}")
        except urllib.error.URLError as e:
            if isinstance(e.reason, socket.timeout):
                raise LLMError(f"Request timed out after {self.timeout}s. Increase timeout in .gitravenrc")
            if "Connection refused" in str(e):
                raise LLMError("Ollama not running. Start with: ollama serve")
            raise LLMError(f"Ollama request failed: {e}")
        except socket.timeout:
            raise LLMError(f"Request timed out after {self.timeout}s. Increase timeout in .gitravenrc")
        except json.JSONDecodeError:
            raise LLMError("Invalid response from Ollama. Try a different model or simpler change.")
        except http.client.HTTPException as e:
            raise LLMError(f"Incomplete response from Ollama: {e}. The model may have run out of memory.")
        except OSError as e:
            raise LLMError(f"Connection to Ollama lost: {e}. Check that 'ollama serve' is still running.")

        content = result.get("response", "").strip()
        if not content:
            raise LLMError("No response from AI service")

        return LLMResponse(
            content=content,
            model=model,
            tokens_used=result.get("eval_count", 0)
        )

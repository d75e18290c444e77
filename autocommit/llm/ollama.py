"""Ollama client for local models. Needs no API key, only a running `ollama serve`."""

import http.client
import json
import os
import socket
import urllib.error
import urllib.request

from autocommit.llm.base import LLMClient, LLMResponse, LLMError, SYSTEM_PROMPT

NOT_RUNNING = "Ollama not running. Start with: ollama serve"


class OllamaClient(LLMClient):

    DEFAULT_MODEL = "mistral:7b"
    DEFAULT_HOST = "http://localhost:11434"
    DEFAULT_TIMEOUT = 300  # CPU inference is slow
    PROBE_TIMEOUT = 5

    def __init__(self, api_key: str | None = None, model: str | None = None,
                 timeout: int | None = None, host: str | None = None):
        # api_key is accepted for a uniform constructor and ignored
        self.model = model or self.DEFAULT_MODEL
        self.host = (host or os.environ.get("OLLAMA_HOST", self.DEFAULT_HOST)).rstrip("/")
        self.timeout = timeout or self.DEFAULT_TIMEOUT
        self._verify_connection()

    @property
    def name(self) -> str:
        return f"Ollama ({self.model})"

    def _verify_connection(self) -> None:
        try:
            with urllib.request.urlopen(f"{self.host}/api/tags", timeout=self.PROBE_TIMEOUT):
                pass
        except (urllib.error.URLError, OSError):
            raise LLMError(NOT_RUNNING)

    def _post(self, endpoint: str, payload: dict) -> dict:
        req = urllib.request.Request(
            f"{self.host}{endpoint}",
            data=json.dumps(payload).encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )
        with urllib.request.urlopen(req, timeout=self.timeout) as response:
            return json.loads(response.read().decode("utf-8"))

    def _complete(self, prompt: str) -> LLMResponse:
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "stream": False,
            "options": {"temperature": 0.4, "num_predict": 1000},
        }
        try:
            result = self._post("/api/chat", payload)
        except urllib.error.HTTPError as e:
            if e.code == 404:
                raise LLMError(f"Model '{self.model}' not found. Run: ollama pull {self.model}")
            raise LLMError(f"Ollama error ({e.code}): {e.reason}")
        except urllib.error.URLError as e:
            if isinstance(e.reason, socket.timeout):
                raise LLMError(f"Request timed out after {self.timeout}s")
            if isinstance(e.reason, ConnectionRefusedError):
                raise LLMError(NOT_RUNNING)
            raise LLMError(f"Ollama request failed: {e.reason}")
        except socket.timeout:
            raise LLMError(f"Request timed out after {self.timeout}s")
        except json.JSONDecodeError:
            raise LLMError("Invalid response from Ollama.")
        except (http.client.HTTPException, OSError) as e:
            raise LLMError(f"Connection to Ollama lost: {e}")

        message = result.get("message") or {}
        return LLMResponse(
            content=(message.get("content") or "").strip(),
            model=self.model,
            tokens_used=result.get("eval_count", 0),
        )

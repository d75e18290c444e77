"""Gemini (Google) LLM Client"""

import http.client
import json
import socket
import urllib.error
import urllib.parse
import urllib.request

from autocommit.llm.base import LLMClient, LLMResponse, LLMError, SYSTEM_PROMPT


class GeminiClient(LLMClient):
    """Gemini REST client. Needs an API key."""

    DEFAULT_MODEL = "gemini-1.5-flash-latest"
    API_ROOT = "https://generativelanguage.googleapis.com/v1beta/models"
    DEFAULT_TIMEOUT = 60
    TEMPERATURE = 0.4
    MAX_OUTPUT_TOKENS = 1000

    def __init__(self, api_key: str | None, model: str | None = None, timeout: int | None = None):
        if not api_key:
            raise LLMError(
                "No API key found. Set GEMINI_API_KEY environment variable:\n"
                "  export GEMINI_API_KEY='your-key-here'"
            )
        self.api_key = api_key
        self.model = model or self.DEFAULT_MODEL
        self.timeout = timeout or self.DEFAULT_TIMEOUT

    @property
    def name(self) -> str:
        return f"Gemini ({self.model})"

    def _url(self) -> str:
        model = urllib.parse.quote(self.model, safe='')
        key = urllib.parse.quote(self.api_key, safe='')
        return f"{self.API_ROOT}/{model}:generateContent?key={key}"

    def _call_api(self, prompt: str) -> dict:
        """Make a single API call to Gemini."""
        payload = {
            "systemInstruction": {"parts": [{"text": SYSTEM_PROMPT}]},
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.TEMPERATURE,
                "maxOutputTokens": self.MAX_OUTPUT_TOKENS,
            },
        }
        data = json.dumps(payload).encode('utf-8')
        req = urllib.request.Request(self._url(), data=data, headers={"Content-Type": "application/json"})

        with urllib.request.urlopen(req, timeout=self.timeout) as response:
            return json.loads(response.read().decode('utf-8'))

    @staticmethod
    def extract_text(envelope: dict) -> str:
        """Pull the text out of candidates[0].content.parts[0]."""
        try:
            return envelope["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            raise LLMError("Malformed response from Gemini: no candidate text")

    def _complete(self, prompt: str) -> LLMResponse:
        try:
            result = self._call_api(prompt)
        except urllib.error.HTTPError as e:
            if e.code in (401, 403):
                raise LLMError("Invalid API key. Check your GEMINI_API_KEY.")
            if e.code == 404:
                raise LLMError(f"Model '{self.model}' not found.")
            raise LLMError(f"Gemini error ({e.code}): {e.reason}")
        except urllib.error.URLError as e:
            if isinstance(e.reason, socket.timeout):
                raise LLMError(f"Request timed out after {self.timeout}s")
            raise LLMError(f"Gemini request failed: {e.reason}")
        except socket.timeout:
            raise LLMError(f"Request timed out after {self.timeout}s")
        except json.JSONDecodeError:
            raise LLMError("Invalid response from Gemini.")
        except (http.client.HTTPException, OSError) as e:
            raise LLMError(f"Connection to Gemini lost: {e}")

        usage = result.get("usageMetadata", {}) if isinstance(result, dict) else {}
        return LLMResponse(
            content=self.extract_text(result).strip(),
            model=self.model,
            tokens_used=usage.get("totalTokenCount", 0),
        )

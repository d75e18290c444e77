"""LLM Client Package"""

from autocommit.llm.base import (
    LLMClient,
    LLMResponse,
    LLMError,
    SYSTEM_PROMPT,
    clean_explanation,
    validate_explanation,
)
from autocommit.llm.claude import ClaudeClient
from autocommit.llm.gemini import GeminiClient
from autocommit.llm.ollama import OllamaClient
from autocommit.result import Failure, Ok, Result

PROVIDERS = {
    "gemini": GeminiClient,
    "claude": ClaudeClient,
    "ollama": OllamaClient,
}


def get_client(provider: str, api_key: str | None = None, model: str | None = None,
               timeout: int | None = None) -> LLMClient:
    """Get an LLM client for 'gemini', 'claude' or 'ollama'."""
    if provider not in PROVIDERS:
        raise LLMError(f"Unknown provider: {provider}. Use one of: {', '.join(PROVIDERS)}.")
    return PROVIDERS[provider](api_key=api_key, model=model, timeout=timeout)


def request_explanation(client: LLMClient, prompt: str) -> Result[LLMResponse]:
    """Run the generation call, turning any LLMError into a Failure."""
    try:
        return Ok(client.generate(prompt))
    except LLMError as e:
        return Failure(str(e))


__all__ = [
    "LLMClient",
    "LLMResponse",
    "LLMError",
    "ClaudeClient",
    "GeminiClient",
    "OllamaClient",
    "get_client",
    "request_explanation",
    "PROVIDERS",
    "SYSTEM_PROMPT",
    "clean_explanation",
    "validate_explanation",
]

"""LLM Base Classes and Shared Code"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass


SYSTEM_PROMPT = """You are a senior software engineer who writes the body of git commit messages.

Your standards:
- The diff shows WHAT; you explain WHY
- Every word earns its place, no filler
- Plain text only, ready to paste under a commit title"""

MIN_EXPLANATION_LENGTH = 10

_FENCE_RE = re.compile(r'^```[\w-]*\s*$')
_PREAMBLE_RE = re.compile(r"^(sure|here('s| is)|certainly)\b.*:\s*$", re.IGNORECASE)


def clean_explanation(content: str) -> str:
    """Strip code fences and a chatty first line from a model response."""
    lines = [line for line in content.strip().split('\n') if not _FENCE_RE.match(line.strip())]
    if lines and _PREAMBLE_RE.match(lines[0].strip()):
        lines = lines[1:]
    return '\n'.join(lines).strip()


def validate_explanation(content: str) -> tuple[bool, str]:
    """Validate that response looks like a usable explanation."""
    if not content or not content.strip():
        return False, "Empty response"
    if len(content.strip()) < MIN_EXPLANATION_LENGTH:
        return False, "Response too short"
    return True, ""


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
    """Abstract base for LLM clients."""

    MAX_RETRIES = 2

    @abstractmethod
    def _complete(self, prompt: str) -> LLMResponse:
        """Single provider call; raise LLMError on failure."""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    def generate(self, prompt: str) -> LLMResponse:
        """Call the provider, re-asking when the answer is unusable."""
        last_error = ""
        for attempt in range(self.MAX_RETRIES + 1):
            retry_prompt = prompt
            if attempt > 0:
                retry_prompt = f"{prompt}\n\nIMPORTANT: Your previous response was invalid ({last_error}). Reply with the explanation text only."

            response = self._complete(retry_prompt)
            response.content = clean_explanation(response.content)

            is_valid, error = validate_explanation(response.content)
            if is_valid:
                return response
            last_error = error

        raise LLMError(f"Failed after {self.MAX_RETRIES} retries: {last_error}")

"""Shared pytest fixtures for the Polyglot test suite.

Provides:
  - ScriptedLLMProvider: mock LLMProvider that routes prompts to canned
    outputs or failures and records every call
  - scripted_llm: empty ScriptedLLMProvider fixture
  - api_client: FastAPI TestClient with the provider swapped for a mock

All external service calls are mocked in every test. No real Ollama.
"""

from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from polyglot.api.deps import get_llm_provider
from polyglot.core.exceptions import UpstreamUnavailableError
from polyglot.main import app
from polyglot.services.llm.base import LLMProvider, LLMResponse

# Substrings that identify each prompt template.
DETECT = "Detect the language"
TRANSLATE = "Translate this text"
RESPOND = "helpful, friendly chatbot"


# ---------------------------------------------------------------------------
# Mock LLM Provider
# ---------------------------------------------------------------------------


class ScriptedLLMProvider(LLMProvider):
    """Mock LLM provider for testing.

    ``rules`` is an ordered list of (substring, outcome) pairs. The first
    substring found in the prompt decides the outcome: a string is returned
    as the model text, an exception instance is raised. Prompts matching no
    rule return ``default_text``.
    """

    def __init__(
        self,
        rules: list[tuple[str, str | Exception]] | None = None,
        default_text: str = "Mock response",
        healthy: bool = True,
    ) -> None:
        self.model = "mock-model:latest"
        self._rules = list(rules or [])
        self._default_text = default_text
        self._healthy = healthy
        self.generate_calls: list[str] = []
        self.health_calls = 0

    def add_rule(self, needle: str, outcome: str | Exception) -> None:
        self._rules.append((needle, outcome))

    def calls_matching(self, needle: str) -> list[str]:
        return [p for p in self.generate_calls if needle in p]

    async def generate(self, prompt: str) -> LLMResponse:
        self.generate_calls.append(prompt)
        for needle, outcome in self._rules:
            if needle in prompt:
                if isinstance(outcome, Exception):
                    raise outcome
                return LLMResponse(text=outcome, input_tokens=40, output_tokens=8)
        return LLMResponse(text=self._default_text, input_tokens=40, output_tokens=8)

    async def health_check(self) -> None:
        self.health_calls += 1
        if not self._healthy:
            raise UpstreamUnavailableError()


def upstream_down() -> UpstreamUnavailableError:
    return UpstreamUnavailableError("Ollama generate failed: Connection refused")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def scripted_llm() -> ScriptedLLMProvider:
    """Scripted LLM provider fixture with no rules."""
    return ScriptedLLMProvider()


@pytest.fixture
def api_client(scripted_llm: ScriptedLLMProvider) -> Iterator[TestClient]:
    """TestClient whose requests resolve the provider to ``scripted_llm``.

    The client is not entered as a context manager, so the lifespan (and
    the real OllamaProvider) never starts.
    """
    app.dependency_overrides[get_llm_provider] = lambda: scripted_llm
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

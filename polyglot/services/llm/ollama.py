"""Ollama LLM provider implementation.

Talks to a locally hosted Ollama server over its native HTTP API:
  - POST /api/generate  (non-streaming, single response)
  - GET  /api/tags      (health probe)

Every call opens its own httpx client. No retries, no pooling.
All failures are logged and re-raised as UpstreamUnavailableError.
"""

from __future__ import annotations

import httpx
import structlog

from polyglot.core.exceptions import UpstreamUnavailableError
from polyglot.services.llm.base import LLMProvider, LLMResponse

logger = structlog.get_logger(__name__)

_GENERATE_PATH = "/api/generate"
_TAGS_PATH = "/api/tags"
_HEALTH_TIMEOUT_SECONDS = 5.0


class OllamaProvider(LLMProvider):
    """Single-model Ollama client."""

    def __init__(
        self,
        base_url: str = "http://localhost:11434",
        model: str = "llama3:latest",
        timeout_seconds: float = 120.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self.model = model
        self._timeout = timeout_seconds
        logger.info("ollama_provider_initialized", model=model, base_url=self._base_url)

    async def generate(self, prompt: str) -> LLMResponse:
        """Generate a complete response using Ollama."""
        payload = {"model": self.model, "prompt": prompt, "stream": False}
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(
                    f"{self._base_url}{_GENERATE_PATH}",
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
                response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            logger.error("ollama_generate_timeout", prompt_len=len(prompt))
            raise UpstreamUnavailableError("Ollama generate timed out") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(
                "ollama_generate_failed",
                error=str(e),
                model=self.model,
                prompt_len=len(prompt),
            )
            raise UpstreamUnavailableError(f"Ollama generate failed: {e}") from e

        text = data.get("response") if isinstance(data, dict) else None
        if not isinstance(text, str):
            logger.error("ollama_generate_malformed", model=self.model)
            raise UpstreamUnavailableError("Ollama returned no response text")

        result = LLMResponse(
            text=text,
            input_tokens=data.get("prompt_eval_count", 0) or 0,
            output_tokens=data.get("eval_count", 0) or 0,
        )
        logger.debug(
            "ollama_generate_ok",
            input_tokens=result.input_tokens,
            output_tokens=result.output_tokens,
            prompt_len=len(prompt),
        )
        return result

    async def health_check(self) -> None:
        """Ping the tags endpoint; raises if Ollama is not answering."""
        try:
            async with httpx.AsyncClient(timeout=_HEALTH_TIMEOUT_SECONDS) as client:
                response = await client.get(f"{self._base_url}{_TAGS_PATH}")
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("ollama_health_check_failed", error=str(e))
            raise UpstreamUnavailableError() from e

"""Abstract LLM provider interface.

All LLM implementations must inherit from this class.
Business logic never imports a concrete provider directly.
The concrete provider is instantiated once in the FastAPI lifespan
and injected everywhere via Depends().
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class LLMResponse:
    """Structured response from an LLM call, including token usage."""

    text: str
    input_tokens: int = 0
    output_tokens: int = 0


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    model: str = ""

    @abstractmethod
    async def generate(self, prompt: str) -> LLMResponse:
        """Generate a complete, non-streamed response for a single prompt.

        Args:
            prompt: The full prompt text, instructions included.

        Returns:
            LLMResponse with text content and token usage counts.

        Raises:
            UpstreamUnavailableError: If the endpoint is unreachable,
                times out, or answers with a non-success status.
        """
        ...

    @abstractmethod
    async def health_check(self) -> None:
        """Make a lightweight call to confirm the endpoint is reachable.

        Raises:
            UpstreamUnavailableError: If the endpoint does not answer.
        """
        ...

"""Conversational reply generation.

On failure the responder falls back to a fixed apology. When the reply
language is not the pivot, the apology goes through the Translator
first; a failed translation leaves the pivot-language apology in place.
"""

from __future__ import annotations

import structlog

from polyglot.core.languages import PIVOT_LANGUAGE, coerce_language, display_name
from polyglot.services.language.result import StepResult
from polyglot.services.language.translator import Translator
from polyglot.services.llm.base import LLMProvider

logger = structlog.get_logger(__name__)


RESPONSE_PROMPT = (
    "You are a helpful, friendly chatbot. Respond to the user's message in "
    "{language}. Keep your responses conversational and engaging. "
    "User message: \"{message}\""
)

FALLBACK_APOLOGY = "I'm sorry, I'm having trouble responding right now. Please try again."


class Responder:
    """Generates the chatbot's reply to a single message."""

    def __init__(self, llm: LLMProvider, translator: Translator) -> None:
        self._llm = llm
        self._translator = translator

    async def respond(self, text: str, language: str = PIVOT_LANGUAGE) -> StepResult[str]:
        """Generate a reply to ``text`` written in ``language``.

        Returns:
            StepResult with the reply. Never raises. On failure the value
            is the apology, translated into ``language`` when possible.
        """
        lang = coerce_language(language)
        prompt = RESPONSE_PROMPT.format(language=display_name(lang), message=text)

        error: str
        try:
            result = await self._llm.generate(prompt)
        except Exception as e:
            logger.warning(
                "response_generation_failed",
                error=str(e),
                language=lang.value,
                text_len=len(text),
            )
            error = str(e)
        else:
            reply = result.text.strip()
            # An empty reply gets the apology rather than a blank message.
            if reply:
                logger.debug(
                    "response_generated",
                    language=lang.value,
                    output_tokens=result.output_tokens,
                )
                return StepResult.ok(reply)
            logger.warning("response_generation_empty", language=lang.value)
            error = "empty response"

        return StepResult.fallback(await self._apology(lang), error)

    async def _apology(self, language: str) -> str:
        if language == PIVOT_LANGUAGE:
            return FALLBACK_APOLOGY
        translated = await self._translator.translate(FALLBACK_APOLOGY, PIVOT_LANGUAGE, language)
        return translated.value

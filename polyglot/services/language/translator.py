"""Prompt-driven translation between catalog languages.

Translation is a no-op at identity (no inference call). Any failure
degrades to passing the input through unchanged.
"""

from __future__ import annotations

import structlog

from polyglot.core.languages import coerce_language, display_name
from polyglot.services.language.result import StepResult
from polyglot.services.llm.base import LLMProvider

logger = structlog.get_logger(__name__)


TRANSLATION_PROMPT = (
    "Translate this text from {source} to {target}. Respond with ONLY the "
    "translation, no explanations or additional text: \"{text}\""
)


class Translator:
    """Translates text using the shared LLM provider."""

    def __init__(self, llm: LLMProvider) -> None:
        self._llm = llm

    async def translate(self, text: str, from_lang: str, to_lang: str) -> StepResult[str]:
        """Translate ``text`` from ``from_lang`` to ``to_lang``.

        Args:
            text: Text to translate.
            from_lang: Source language code.
            to_lang: Target language code.

        Returns:
            StepResult with the translation. Never raises. When the
            languages match the input comes back untouched; on failure
            (or an empty model answer) the input comes back flagged as
            degraded.
        """
        source = coerce_language(from_lang)
        target = coerce_language(to_lang)
        if source == target:
            return StepResult.ok(text)

        prompt = TRANSLATION_PROMPT.format(
            source=display_name(source),
            target=display_name(target),
            text=text,
        )
        try:
            result = await self._llm.generate(prompt)
        except Exception as e:
            logger.warning(
                "translation_failed",
                error=str(e),
                source=source.value,
                target=target.value,
                text_len=len(text),
            )
            return StepResult.fallback(text, str(e))

        translated = result.text.strip()
        # Empty output is treated as a failed translation, not as "".
        if not translated:
            logger.warning("translation_empty", source=source.value, target=target.value)
            return StepResult.fallback(text, "empty translation")

        logger.debug(
            "translation_ok",
            source=source.value,
            target=target.value,
            text_len=len(text),
        )
        return StepResult.ok(translated)

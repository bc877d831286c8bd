"""Language detection via a single classification prompt.

Detection is advisory: on unexpected output or any inference failure
the detector answers with the pivot language instead of raising.
"""

from __future__ import annotations

import structlog

from polyglot.core.languages import LANGUAGES, PIVOT_LANGUAGE, LanguageCode
from polyglot.services.language.result import StepResult
from polyglot.services.llm.base import LLMProvider

logger = structlog.get_logger(__name__)


DETECTION_PROMPT = (
    "Detect the language of this text and respond with ONLY the two-letter "
    "language code ({codes}). Text: \"{text}\""
)


class LanguageDetector:
    """Infers the language code of incoming message text."""

    def __init__(self, llm: LLMProvider) -> None:
        self._llm = llm

    @staticmethod
    def _parse_code(raw: str) -> LanguageCode | None:
        cleaned = raw.strip().lower()
        if cleaned in LANGUAGES:
            return LanguageCode(cleaned)
        return None

    async def detect(self, text: str) -> StepResult[LanguageCode]:
        """Detect the language of ``text``.

        Returns:
            StepResult carrying a catalog LanguageCode. Never raises.
            Unknown model output or an inference failure yields the pivot
            language, flagged as degraded.
        """
        prompt = DETECTION_PROMPT.format(codes=", ".join(LANGUAGES), text=text)
        try:
            result = await self._llm.generate(prompt)
        except Exception as e:
            logger.warning("language_detection_failed", error=str(e), text_len=len(text))
            return StepResult.fallback(PIVOT_LANGUAGE, str(e))

        code = self._parse_code(result.text)
        if code is None:
            logger.warning(
                "language_detection_unexpected_output",
                raw_response=result.text.strip()[:20],
                text_len=len(text),
            )
            return StepResult.fallback(PIVOT_LANGUAGE, "unrecognized language code")

        logger.debug("language_detected", language=code.value, text_len=len(text))
        return StepResult.ok(code)

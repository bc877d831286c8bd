"""Chat pipeline, the request orchestrator.

Fixed five-step turn flow, each step awaiting the previous one:
  1. detect        : language of the incoming message
  2. translate_in  : message into the pivot language (skipped if already pivot)
  3. respond       : reply generated in the pivot language
  4. translate_out : reply into the target language (skipped if target is pivot)
  5. translate_echo: original message into the target language
                   (skipped if target == detected, dropped if unchanged)

Sub-components never raise; they degrade and report it through StepResult.
Anything else that goes wrong here surfaces as InternalError.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field

import structlog

from polyglot.core.exceptions import InternalError, InvalidInputError
from polyglot.core.languages import PIVOT_LANGUAGE, LanguageCode, coerce_language
from polyglot.services.agent.responder import Responder
from polyglot.services.language.detector import LanguageDetector
from polyglot.services.language.result import StepResult
from polyglot.services.language.translator import Translator
from polyglot.services.llm.base import LLMProvider

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ChatTurn:
    """Output from a single chat turn."""

    original_message: str
    detected_language: LanguageCode
    translated_user_message: str | None
    generated_reply: str
    reply_language: LanguageCode
    degraded_steps: tuple[str, ...] = field(default_factory=tuple)


class ChatPipeline:
    """Sequences detector, translator and responder into one request cycle."""

    def __init__(
        self,
        detector: LanguageDetector,
        translator: Translator,
        responder: Responder,
    ) -> None:
        self._detector = detector
        self._translator = translator
        self._responder = responder

    @classmethod
    def from_provider(cls, llm: LLMProvider) -> ChatPipeline:
        """Wire all three helpers against a single provider."""
        translator = Translator(llm)
        return cls(
            detector=LanguageDetector(llm),
            translator=translator,
            responder=Responder(llm, translator),
        )

    async def handle(
        self,
        message: str | None,
        target_language: str | None = PIVOT_LANGUAGE,
    ) -> ChatTurn:
        """Run a message through the full pipeline.

        Raises:
            InvalidInputError: ``message`` is missing or empty. No inference
                call is made.
            InternalError: Unexpected failure while sequencing the steps.
        """
        if not message:
            raise InvalidInputError()

        try:
            return await self._run(message, coerce_language(target_language))
        except Exception as e:
            logger.error("chat_pipeline_failed", error=str(e), message_len=len(message))
            raise InternalError() from e

    async def _run(self, message: str, target: LanguageCode) -> ChatTurn:
        start = time.monotonic()
        degraded: list[str] = []

        def _track(step: str, result: StepResult) -> StepResult:
            if result.degraded:
                degraded.append(step)
            return result

        # 1. Detect
        detected = _track("detect", await self._detector.detect(message)).value

        # 2. Into pivot
        if detected == PIVOT_LANGUAGE:
            message_in_pivot = message
        else:
            message_in_pivot = _track(
                "translate_in",
                await self._translator.translate(message, detected, PIVOT_LANGUAGE),
            ).value

        # 3. Reply in pivot
        reply_in_pivot = _track(
            "respond",
            await self._responder.respond(message_in_pivot, PIVOT_LANGUAGE),
        ).value

        # 4. Reply into target
        if target == PIVOT_LANGUAGE:
            final_reply = reply_in_pivot
        else:
            final_reply = _track(
                "translate_out",
                await self._translator.translate(reply_in_pivot, PIVOT_LANGUAGE, target),
            ).value

        # 5. Echo the user's message in the target language
        echo: str | None = None
        if target != detected:
            echo = _track(
                "translate_echo",
                await self._translator.translate(message, detected, target),
            ).value
            if echo == message:
                echo = None

        latency_ms = int((time.monotonic() - start) * 1000)
        logger.info(
            "chat_turn_complete",
            detected_language=detected.value,
            reply_language=target.value,
            degraded_steps=degraded,
        )
        return ChatTurn(
            original_message=message,
            detected_language=detected,
            translated_user_message=echo,
            generated_reply=final_reply,
            reply_language=target,
            degraded_steps=tuple(degraded),
        )

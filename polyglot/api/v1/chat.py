"""Chat endpoints."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from polyglot.api.deps import get_chat_pipeline, get_llm_provider
from polyglot.core.exceptions import UpstreamUnavailableError
from polyglot.core.languages import LANGUAGES
from polyglot.schemas.chat import ChatRequest, ChatResponse, HealthResponse
from polyglot.services.agent.core import ChatPipeline
from polyglot.services.llm.base import LLMProvider

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatResponse)
async def send_message(
    body: ChatRequest,
    pipeline: ChatPipeline = Depends(get_chat_pipeline),
) -> ChatResponse:
    """Detect, translate, reply and localize a single message.

    InvalidInputError (400) and InternalError (500) propagate to the
    PolyglotError handler registered in main.py.
    """
    turn = await pipeline.handle(body.message, body.target_language)

    return ChatResponse(
        original_message=turn.original_message,
        detected_language=turn.detected_language.value,
        translated_user_message=turn.translated_user_message,
        generated_reply=turn.generated_reply,
        reply_language=turn.reply_language.value,
        degraded_steps=list(turn.degraded_steps),
    )


@router.get("", response_model=HealthResponse)
async def health(
    llm: LLMProvider = Depends(get_llm_provider),
) -> HealthResponse | JSONResponse:
    """Probe the inference server. Never raises."""
    try:
        await llm.health_check()
    except UpstreamUnavailableError as e:
        error = e
    except Exception as e:
        logger.warning("health_check_unexpected_error", error=str(e))
        error = UpstreamUnavailableError()
    else:
        return HealthResponse(model=llm.model, languages=dict(LANGUAGES))

    return JSONResponse(
        status_code=error.status_code,
        content={"status": "unhealthy", **error.to_dict()},
    )

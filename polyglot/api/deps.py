"""Shared FastAPI dependencies — service injection.

The OllamaProvider is created once during the FastAPI lifespan and stored
on app.state. All downstream code retrieves it via Depends(), never by
direct import.
"""

from fastapi import Depends, Request

from polyglot.services.agent.core import ChatPipeline
from polyglot.services.llm.base import LLMProvider


def get_llm_provider(request: Request) -> LLMProvider:
    """Return the singleton LLM provider from app state."""
    return request.app.state.llm_provider


def get_chat_pipeline(
    llm: LLMProvider = Depends(get_llm_provider),
) -> ChatPipeline:
    """Return a ChatPipeline wired against the shared provider."""
    return ChatPipeline.from_provider(llm)

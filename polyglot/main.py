"""FastAPI application entrypoint.

Routes: POST /chat and GET /chat. Auto-generated OpenAPI docs at /docs.

An OllamaProvider is created once during the lifespan and stored on
app.state for injection via Depends().
"""

from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from polyglot.api.v1.chat import router as chat_router
from polyglot.core.config import settings
from polyglot.core.exceptions import PolyglotError
from polyglot.services.llm.ollama import OllamaProvider


def _configure_logging() -> None:
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


_configure_logging()

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application startup and shutdown lifecycle.

    Creates the singleton LLM provider and attaches it to app.state.
    Retrieved in request handlers via Depends() in polyglot/api/deps.py.
    """
    logger.info("app_startup", env=settings.app_env)

    app.state.llm_provider = OllamaProvider(
        base_url=settings.ollama_base_url,
        model=settings.ollama_model,
        timeout_seconds=settings.llm_timeout_seconds,
    )

    logger.info("app_providers_ready")
    yield

    logger.info("app_shutdown")


app = FastAPI(
    title="Polyglot Chat API",
    description="Multilingual chat relay in front of a local Ollama server.",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS: permissive for development, locked down in production
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if not settings.is_production else [],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PolyglotError)
async def polyglot_error_handler(request: Request, exc: PolyglotError) -> JSONResponse:
    """Structured error response for all Polyglot exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies are client errors, reported in the same shape."""
    logger.info("request_validation_failed", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


app.include_router(chat_router)
